"""Pages of a PDF document."""
from typing import Any, Dict, List

from .core.geometry import Rect
from .core.indirect import IndirectObject
from .core.objects import Name


class Page:
    """A page, its media box and the drawing operators of its content stream.

    The page dictionary and content stream are indirect objects registered by
    the document; their final content is resolved when the document is
    finalized.

    Attributes:
        handle: Indirect object holding the page dictionary
        content: Indirect object holding the content stream
        box: Media box of the page
        parent: Page tree node this page belongs to
    """

    def __init__(self, handle: IndirectObject, content: IndirectObject, box: Rect, parent: IndirectObject):
        self.handle = handle
        self.content = content
        self.box = box
        self.parent = parent
        self._operations: List[str] = []

    @property
    def width(self):
        return self.box.width

    @property
    def height(self):
        return self.box.height

    @property
    def operations(self) -> List[str]:
        return list(self._operations)

    def add_operation(self, operation: str) -> None:
        """Append one content stream line, e.g. ``"10 20 m"``."""
        self._operations.append(operation)

    def content_bytes(self) -> bytes:
        return "\n".join(self._operations).encode("ascii")

    def to_pdf_value(self) -> Dict[str, Any]:
        return {
            "Type": Name("Page"),
            "Parent": self.parent,
            "MediaBox": self.box,
            # TODO fill Resources once fonts or images can be added to a page
            "Resources": {},
            "Contents": [self.content],
        }

    def __repr__(self):
        return f"Page(number={self.handle.number}, box={self.box}, operations={len(self._operations)})"
