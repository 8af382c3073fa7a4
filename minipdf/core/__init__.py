"""Object model, indirect object registry and file writer."""

from .objects import (
    NULL,
    Array,
    Boolean,
    Dictionary,
    Name,
    Null,
    Number,
    PdfObject,
    Stream,
    String,
    format_number,
    parse_number,
)
from .resolver import PdfConvertible, to_value
from .indirect import IndirectObject, ObjectRegistry
from .writer import DocumentWriter
from .geometry import Rect

__all__ = [
    "NULL",
    "Array",
    "Boolean",
    "Dictionary",
    "Name",
    "Null",
    "Number",
    "PdfObject",
    "Stream",
    "String",
    "format_number",
    "parse_number",
    "PdfConvertible",
    "to_value",
    "IndirectObject",
    "ObjectRegistry",
    "DocumentWriter",
    "Rect",
]
