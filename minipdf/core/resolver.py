"""Conversion of native Python data into PDF objects.

``to_value`` lets callers build object trees from plain Python values::

    to_value({"Type": Name("Page"), "MediaBox": [0, 0, 612, 792]})

Mappings keep their insertion order, so the rendered dictionary (and every
byte offset after it) is reproducible.
"""

import io
import numbers
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from ..exceptions import UnsupportedTypeError
from .objects import (
    NULL,
    Array,
    Boolean,
    Dictionary,
    Number,
    PdfObject,
    Stream,
    String,
)


@runtime_checkable
class PdfConvertible(Protocol):
    """Any type that can describe itself as a PDF object."""

    def to_pdf_value(self) -> Any:
        ...


def to_value(value: Any, encoding: str = "utf-8") -> PdfObject:
    """Convert a native value to a PDF object.

    Args:
        value: None, bool, int, float, str, bytes-like, mapping with str keys,
            list/tuple, an existing PdfObject, or an object with ``to_pdf_value``
        encoding: Encoding for ``str`` values

    Returns:
        The matching PdfObject. Existing PdfObjects are returned unchanged.

    Raises:
        UnsupportedTypeError: If value (or anything nested in it) has no PDF form
    """
    if isinstance(value, PdfObject):
        return value
    if isinstance(value, PdfConvertible):
        return to_value(value.to_pdf_value(), encoding)
    if value is None:
        return NULL
    if isinstance(value, bool):
        return Boolean(value)
    if isinstance(value, numbers.Integral):
        return Number(int(value))
    if isinstance(value, numbers.Real):
        return Number(float(value))
    if isinstance(value, str):
        return String(value, encoding=encoding)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return Stream(value)
    if isinstance(value, io.BytesIO):
        return Stream(value.getvalue())
    if isinstance(value, Mapping):
        result = Dictionary()
        for key, item in value.items():
            if not isinstance(key, str):
                raise UnsupportedTypeError(
                    f"Mapping keys must be str, got {type(key).__name__}", key
                )
            result.put(key, to_value(item, encoding))
        return result
    if isinstance(value, (list, tuple)):
        return Array(to_value(item, encoding) for item in value)

    raise UnsupportedTypeError(f"Unsupported type for PDF output: {type(value).__name__}", value)
