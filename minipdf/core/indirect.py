"""Indirect objects and the registry that numbers them.

An indirect object gets an object number when it is registered and a byte
offset when its body is written. Other objects point at it with a reference
token (``"12 0 R"``), which is what it renders as when embedded.
"""

import logging
from typing import Any, Iterator, List, Optional

from ..exceptions import DocumentStateError, InvalidHandleError
from .objects import Null, PdfObject
from .resolver import to_value

logger = logging.getLogger(__name__)

GENERATION = 0


class IndirectObject(PdfObject):
    """A PDF object with its own object number and byte offset.

    Attributes:
        value: The wrapped object (Null until resolved)
        number: Object number, unique within one document
        offset: Byte offset of the body in the output, None until written
    """

    def __init__(self, value: Optional[PdfObject] = None, number: int = 0, registry: "ObjectRegistry" = None):
        self.value = value if value is not None else Null()
        self.number = number
        self.offset: Optional[int] = None
        self.registry = registry

    @property
    def fixed(self) -> bool:
        return self.offset is not None

    def fix(self, offset: int) -> None:
        """Record the byte offset of this object's body.

        Raises:
            DocumentStateError: If the offset was already recorded
        """
        if self.offset is not None:
            raise DocumentStateError(
                f"Offset of object {self.number} already set to {self.offset}"
            )
        self.offset = offset

    def references(self) -> Iterator[PdfObject]:
        yield self

    def to_bytes(self) -> bytes:
        """Reference token used wherever another object points at this one."""
        return b"%d %d R" % (self.number, GENERATION)

    def body(self) -> bytes:
        """Full ``obj``/``endobj`` block for the body section of the file."""
        return b"".join([
            b"%d %d obj\n" % (self.number, GENERATION),
            self.value.to_bytes(),
            b"\nendobj\n",
        ])

    def xref_entry(self) -> bytes:
        """Fixed-width line for the cross-reference table (20 bytes)."""
        if self.offset is None:
            raise DocumentStateError(f"Object {self.number} has not been written yet")
        return b"%010d %05d n\r\n" % (self.offset, GENERATION)

    def __repr__(self):
        return f"IndirectObject(number={self.number}, offset={self.offset}, value={self.value!r})"


class ObjectRegistry:
    """Owns the indirect objects of one document, in registration order.

    Object numbers start at 1 and follow registration order with no gaps.

    Example:
        >>> registry = ObjectRegistry()
        >>> catalog = registry.register()
        >>> pages = registry.register()
        >>> registry.resolve(catalog, {"Type": Name("Catalog"), "Pages": pages})
        >>> registry.reference(pages)
        b'2 0 R'
    """

    def __init__(self, encoding: str = "utf-8"):
        self._objects: List[IndirectObject] = []
        self._frozen = False
        self.encoding = encoding

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, value: Any = None) -> IndirectObject:
        """Reserve the next object number.

        Args:
            value: Initial content; a Null placeholder when omitted

        Returns:
            Handle that can be embedded in other objects right away

        Raises:
            DocumentStateError: If the registry is frozen for writing
            UnsupportedTypeError: If value has no PDF form
        """
        if self._frozen:
            raise DocumentStateError("Cannot register new objects once writing has started")
        content = to_value(value, self.encoding) if value is not None else Null()
        obj = IndirectObject(content, number=len(self._objects) + 1, registry=self)
        self._objects.append(obj)
        logger.debug(f"Registered object {obj.number}")
        return obj

    def check(self, handle: IndirectObject) -> IndirectObject:
        """Make sure handle was registered with this registry.

        Raises:
            InvalidHandleError: If it was not
        """
        if (
            not isinstance(handle, IndirectObject)
            or handle.registry is not self
            or not 0 < handle.number <= len(self._objects)
            or self._objects[handle.number - 1] is not handle
        ):
            raise InvalidHandleError(f"{handle!r} is not registered with this document")
        return handle

    def resolve(self, handle: IndirectObject, value: Any) -> None:
        """Replace the content of a registered object. The last value set wins.

        Raises:
            InvalidHandleError: If handle belongs to another registry
            DocumentStateError: If the registry is frozen for writing
        """
        self.check(handle)
        if self._frozen:
            raise DocumentStateError(
                f"Cannot resolve object {handle.number} once writing has started"
            )
        handle.value = to_value(value, self.encoding)

    def reference(self, handle: IndirectObject) -> bytes:
        """Inline reference token for handle, e.g. ``b"3 0 R"``."""
        return self.check(handle).to_bytes()

    def validate_references(self) -> None:
        """Check that every embedded reference points into this registry.

        Raises:
            InvalidHandleError: On the first foreign reference found
        """
        for obj in self._objects:
            for ref in obj.value.references():
                self.check(ref)

    def freeze(self) -> None:
        """Refuse new registrations and content changes from now on."""
        self._frozen = True

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[IndirectObject]:
        return iter(self._objects)

    def __getitem__(self, number: int) -> IndirectObject:
        """Object by number (1-based)."""
        if not 0 < number <= len(self._objects):
            raise InvalidHandleError(f"No object numbered {number}")
        return self._objects[number - 1]
