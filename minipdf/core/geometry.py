"""Rectangles, a common data structure in PDF (page boxes, annotations)."""
from dataclasses import dataclass
from typing import List, Union

Coordinate = Union[int, float]


@dataclass
class Rect:
    """Rectangle given by its lower-left and upper-right corners.

    Renders as a four-number PDF array ``[ llx lly urx ury ]``.
    """

    llx: Coordinate
    lly: Coordinate
    urx: Coordinate
    ury: Coordinate

    @classmethod
    def from_size(cls, width: Coordinate, height: Coordinate) -> "Rect":
        """Rectangle anchored at the origin."""
        return cls(0, 0, width, height)

    @property
    def width(self) -> Coordinate:
        return self.urx - self.llx

    @property
    def height(self) -> Coordinate:
        return self.ury - self.lly

    def to_pdf_value(self) -> List[Coordinate]:
        return [self.llx, self.lly, self.urx, self.ury]
