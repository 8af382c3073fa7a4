"""PDF object model.

A PDF file is built from eight kinds of objects:

- Boolean values
- Integer and real numbers
- Strings
- Names
- Arrays
- Dictionaries
- Streams
- The null object

Each kind is a subclass of :class:`PdfObject` and knows how to render itself
with :meth:`PdfObject.to_bytes`. Indirect objects (see ``indirect.py``) are
also ``PdfObject`` instances; when embedded in another object they render as a
reference token instead of their body.
"""

import math
from typing import Any, Iterable, Iterator, Optional, Tuple, Union

import numpy as np

from ..exceptions import UnsupportedTypeError

FLOAT_INT_LIMIT = 2 ** 53
NAME_ENCODING = "latin-1"


def format_number(value: Union[int, float]) -> str:
    """Render a number the way PDF expects it.

    Integers are printed as-is. Floats use the shortest positional decimal that
    reads back to the same float, without exponent and without a trailing
    ``.0`` (``2.0`` gives ``"2"``, ``-1.0`` gives ``"-1"``). Whole floats above
    2**53 keep the ``.0`` (``2.0**60`` gives ``"1152921504606847000.0"``).

    Raises:
        UnsupportedTypeError: If value is NaN or infinite
    """
    if isinstance(value, bool):
        value = int(value)
    if isinstance(value, int):
        return str(value)
    value = float(value)
    if not math.isfinite(value):
        raise UnsupportedTypeError(f"PDF numbers must be finite, got {value!r}", value)
    if value == 0:
        return "0"
    # digits of whole floats above 2**53 are not exact; the ".0" marks them as reals
    trim = "0" if abs(value) > FLOAT_INT_LIMIT else "-"
    return np.format_float_positional(value, unique=True, trim=trim)


def parse_number(text: Union[str, bytes]) -> Union[int, float]:
    """Parse a number rendered by :func:`format_number`."""
    if isinstance(text, bytes):
        text = text.decode("ascii")
    text = text.strip()
    if "." in text:
        return float(text)
    return int(text)


def _coerce(value: Any) -> "PdfObject":
    from .resolver import to_value
    return to_value(value)


class PdfObject:
    """Base class of every PDF object."""

    def to_bytes(self) -> bytes:
        raise NotImplementedError

    def references(self) -> Iterator["PdfObject"]:
        """Yield the indirect objects embedded in this object.

        Indirect objects are yielded, not descended into.
        """
        return iter(())

    def __bytes__(self) -> bytes:
        return self.to_bytes()


class _Scalar(PdfObject):
    """Shared behaviour of the single-valued objects."""

    def __init__(self, value):
        self.value = value

    def set(self, value) -> None:
        """Replace the wrapped value."""
        self.value = value

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.value == other.value

    def __hash__(self):
        return hash((type(self).__name__, self.value))

    def __repr__(self):
        return f"{type(self).__name__}({self.value!r})"


class Boolean(_Scalar):
    """PDF boolean: ``true`` or ``false``."""

    def __init__(self, value: bool = False):
        super().__init__(bool(value))

    def set(self, value: bool) -> None:
        self.value = bool(value)

    def to_bytes(self) -> bytes:
        return b"true" if self.value else b"false"


class Number(_Scalar):
    """PDF integer or real number."""

    def __init__(self, value: Union[int, float] = 0):
        super().__init__(self._check(value))

    @staticmethod
    def _check(value):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise UnsupportedTypeError(f"Number expects int or float, got {type(value).__name__}", value)
        if isinstance(value, float) and not math.isfinite(value):
            raise UnsupportedTypeError(f"PDF numbers must be finite, got {value!r}", value)
        return value

    def set(self, value: Union[int, float]) -> None:
        self.value = self._check(value)

    def to_bytes(self) -> bytes:
        return format_number(self.value).encode("ascii")


class String(_Scalar):
    """PDF literal string, written between parentheses.

    Special characters are not escaped.
    """

    def __init__(self, value: Union[bytes, str] = b"", encoding: str = "utf-8"):
        self.encoding = encoding
        super().__init__(self._encode(value))

    def _encode(self, value) -> bytes:
        if isinstance(value, str):
            try:
                return value.encode(self.encoding)
            except UnicodeEncodeError as e:
                raise UnsupportedTypeError(
                    f"String {value!r} cannot be encoded as {self.encoding}: {e.reason}", value
                ) from e
        return bytes(value)

    def set(self, value: Union[bytes, str]) -> None:
        self.value = self._encode(value)

    def to_bytes(self) -> bytes:
        # TODO escape "(", ")" and "\" (ISO 32000-1, 7.3.4.2)
        return b"(" + self.value + b")"


class Name(_Scalar):
    """PDF name, written with a leading slash.

    Characters outside the regular set are not escaped with ``#``.
    """

    def __init__(self, value: str = ""):
        super().__init__(self._check(value))

    @staticmethod
    def _check(value) -> str:
        value = str(value)
        try:
            value.encode(NAME_ENCODING)
        except UnicodeEncodeError as e:
            raise UnsupportedTypeError(
                f"Name {value!r} has characters outside {NAME_ENCODING}", value
            ) from e
        return value

    def set(self, value: str) -> None:
        self.value = self._check(value)

    def to_bytes(self) -> bytes:
        return b"/" + self.value.encode(NAME_ENCODING)


class Null(PdfObject):
    """The PDF null object. Used as placeholder for forward references."""

    def to_bytes(self) -> bytes:
        return b"null"

    def __eq__(self, other):
        return isinstance(other, Null)

    def __hash__(self):
        return hash("null")

    def __repr__(self):
        return "Null()"


NULL = Null()


class Array(PdfObject):
    """Ordered sequence of PDF objects: ``[ a b c ]``."""

    def __init__(self, items: Optional[Iterable[Any]] = None):
        self.items = []
        for item in items or ():
            self.append(item)

    def append(self, value: Any) -> None:
        """Resolve value and add it at the end of the array."""
        self.items.append(_coerce(value))

    def references(self) -> Iterator[PdfObject]:
        for item in self.items:
            yield from item.references()

    def to_bytes(self) -> bytes:
        parts = [b"[ "]
        for item in self.items:
            parts.append(item.to_bytes())
            parts.append(b" ")
        parts.append(b"]")
        return b"".join(parts)

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, index):
        return self.items[index]

    def __repr__(self):
        return f"Array({self.items!r})"


class Dictionary(PdfObject):
    """PDF dictionary with unique keys kept in insertion order.

    Example:
        >>> d = Dictionary()
        >>> d.put("Type", Name("Page"))
        >>> d.put("Count", 1)
        >>> d.to_bytes()
        b'<<\\n/Type /Page\\n/Count 1\\n>>'
    """

    def __init__(self, pairs: Optional[Union[dict, Iterable[Tuple[str, Any]]]] = None):
        self._entries = {}
        if isinstance(pairs, dict):
            pairs = pairs.items()
        for key, value in pairs or ():
            self.put(key, value)

    @staticmethod
    def _key(key: Union[str, Name]) -> str:
        if isinstance(key, Name):
            return key.value
        if not isinstance(key, str):
            raise UnsupportedTypeError(
                f"Dictionary keys must be strings, got {type(key).__name__}", key
            )
        return Name._check(key)

    def put(self, key: Union[str, Name], value: Any) -> None:
        """Set key to value.

        An existing key keeps its position and gets the new value; a new key
        is appended.
        """
        self._entries[self._key(key)] = _coerce(value)

    def get(self, key: Union[str, Name], default: Optional[PdfObject] = None) -> Optional[PdfObject]:
        return self._entries.get(self._key(key), default)

    def keys(self):
        return self._entries.keys()

    def items(self):
        return self._entries.items()

    def references(self) -> Iterator[PdfObject]:
        for value in self._entries.values():
            yield from value.references()

    def to_bytes(self) -> bytes:
        parts = [b"<<\n"]
        for key, value in self._entries.items():
            parts.append(Name(key).to_bytes())
            parts.append(b" ")
            parts.append(value.to_bytes())
            parts.append(b"\n")
        parts.append(b">>")
        return b"".join(parts)

    def __contains__(self, key):
        if isinstance(key, Name):
            key = key.value
        return isinstance(key, str) and key in self._entries

    def __getitem__(self, key):
        return self._entries[self._key(key)]

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __repr__(self):
        return f"Dictionary({dict(self._entries)!r})"


class Stream(PdfObject):
    """PDF stream: a ``Length`` dictionary followed by raw bytes.

    The ``Length`` entry is computed from the payload at render time.
    """

    def __init__(self, data: Union[bytes, bytearray, memoryview] = b""):
        self.data = bytearray(data)

    def append(self, data: Union[bytes, bytearray, memoryview]) -> None:
        """Add bytes at the end of the payload."""
        self.data.extend(data)

    @property
    def length(self) -> int:
        return len(self.data)

    def to_bytes(self) -> bytes:
        header = Dictionary([("Length", Number(self.length))]).to_bytes()
        return b"".join([header, b"\nstream\n", bytes(self.data), b"\nendstream"])

    def __repr__(self):
        return f"Stream(<{self.length} bytes>)"
