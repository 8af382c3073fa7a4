"""Path construction and painting operators for page content streams.

Coordinates are in PDF user space units (1/72 inch), origin at the lower-left
corner of the page.
"""
from enum import IntEnum
from typing import Union

from .core.objects import format_number

Coordinate = Union[int, float]


class LineCap(IntEnum):
    """Shape at the ends of open stroked paths."""
    BUTT = 0
    ROUND = 1
    PROJECTING = 2


class LineJoin(IntEnum):
    """Shape at the corners of stroked paths."""
    MITER = 0
    ROUND = 1
    BEVEL = 2


class GraphicsMixin:
    """Drawing operators. Each call adds one line to the current page.

    The host class provides ``current_page``.
    """

    def _emit(self, operator: str, *operands: Coordinate) -> None:
        parts = [format_number(operand) for operand in operands]
        parts.append(operator)
        self.current_page.add_operation(" ".join(parts))

    # ==================== Graphics state ====================

    def line_width(self, width: Coordinate) -> None:
        """Set the width of lines stroked after this call."""
        self._emit("w", width)

    def line_cap(self, style: Union[LineCap, int]) -> None:
        """Set the line cap style.

        Raises:
            ValueError: If style is not a LineCap value
        """
        self._emit("J", int(LineCap(style)))

    def line_join(self, style: Union[LineJoin, int]) -> None:
        """Set the line join style.

        Raises:
            ValueError: If style is not a LineJoin value
        """
        self._emit("j", int(LineJoin(style)))

    # ==================== Path construction ====================

    def move_to(self, x: Coordinate, y: Coordinate) -> None:
        """Start a new subpath at (x, y)."""
        self._emit("m", x, y)

    def line_to(self, x: Coordinate, y: Coordinate) -> None:
        """Straight line from the current point to (x, y)."""
        self._emit("l", x, y)

    def curve_to(
        self,
        x0: Coordinate,
        y0: Coordinate,
        x1: Coordinate,
        y1: Coordinate,
        x2: Coordinate,
        y2: Coordinate,
    ) -> None:
        """Bezier curve to (x2, y2) with control points (x0, y0) and (x1, y1)."""
        self._emit("c", x0, y0, x1, y1, x2, y2)

    def curve_v(self, x1: Coordinate, y1: Coordinate, x2: Coordinate, y2: Coordinate) -> None:
        """Bezier curve to (x2, y2); the current point is the first control point."""
        self._emit("v", x1, y1, x2, y2)

    def curve_y(self, x0: Coordinate, y0: Coordinate, x2: Coordinate, y2: Coordinate) -> None:
        """Bezier curve to (x2, y2); the end point is also the second control point."""
        self._emit("y", x0, y0, x2, y2)

    def rectangle(self, x: Coordinate, y: Coordinate, width: Coordinate, height: Coordinate) -> None:
        """Closed rectangle subpath with lower-left corner (x, y)."""
        self._emit("re", x, y, width, height)

    def close_path(self) -> None:
        """Close the current subpath with a line back to its start."""
        self._emit("h")

    # ==================== Painting ====================

    def stroke(self) -> None:
        self._emit("S")

    def fill(self) -> None:
        """Fill the current path (nonzero winding rule)."""
        self._emit("f")
