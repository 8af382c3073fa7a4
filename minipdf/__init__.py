"""minipdf - Low-level PDF generation library.

A small library for writing PDF files including:
- The eight PDF object types and conversion from native Python data
- Indirect objects with cross-reference table generation
- Pages with path drawing operators
- A structural validator for the files it writes
"""

from .config import Config
from .exceptions import (
    PdfError,
    UnsupportedTypeError,
    UninitializedSinkError,
    PdfIOError,
    InvalidHandleError,
    DocumentStateError,
)
from .core import (
    NULL,
    Array,
    Boolean,
    Dictionary,
    DocumentWriter,
    IndirectObject,
    Name,
    Null,
    Number,
    ObjectRegistry,
    PdfConvertible,
    PdfObject,
    Rect,
    Stream,
    String,
    format_number,
    parse_number,
    to_value,
)
from .document import Document, DocumentState
from .graphics import LineCap, LineJoin
from .page import Page

__version__ = "0.1.0"
__all__ = [
    "Document",
    "DocumentState",
    "Page",
    "LineCap",
    "LineJoin",
    "Config",
    "NULL",
    "Array",
    "Boolean",
    "Dictionary",
    "DocumentWriter",
    "IndirectObject",
    "Name",
    "Null",
    "Number",
    "ObjectRegistry",
    "PdfConvertible",
    "PdfObject",
    "Rect",
    "Stream",
    "String",
    "format_number",
    "parse_number",
    "to_value",
    "PdfError",
    "UnsupportedTypeError",
    "UninitializedSinkError",
    "PdfIOError",
    "InvalidHandleError",
    "DocumentStateError",
]
