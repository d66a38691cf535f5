"""Axis-aligned 2D bounding boxes."""

from __future__ import annotations

from typing import Iterable, List, Optional

from brepkit.geom import point


class BBox2D:
    """Mutable axis-aligned box in a plane's local ``(u, v)`` frame.

    An empty box has infinite extents in the wrong direction, so the
    first :meth:`check_point` or :meth:`check_bounds` call sets all four
    sides.
    """

    def __init__(self, points: Optional[Iterable] = None):
        self.min_x = float('inf')
        self.min_y = float('inf')
        self.max_x = float('-inf')
        self.max_y = float('-inf')
        if points is not None:
            for p in points:
                self.check_point(p)

    def __repr__(self):
        return "BBox2D([{}, {}], [{}, {}])".format(self.min_x, self.min_y,
                                                   self.max_x, self.max_y)

    def is_empty(self) -> bool:
        return self.min_x > self.max_x or self.min_y > self.max_y

    def check_point(self, p) -> None:
        """Extend the box to include point ``p`` (only x and y are used)."""
        self.check_bounds(p[0], p[1])

    def check_bounds(self, x: float, y: float) -> None:
        """Extend the box to include the coordinate ``(x, y)``."""
        self.min_x = min(self.min_x, float(x))
        self.min_y = min(self.min_y, float(y))
        self.max_x = max(self.max_x, float(x))
        self.max_y = max(self.max_y, float(y))

    def width(self) -> float:
        return self.max_x - self.min_x

    def height(self) -> float:
        return self.max_y - self.min_y

    def center(self) -> list:
        return point((self.min_x + self.max_x) * 0.5,
                     (self.min_y + self.max_y) * 0.5, 0.0)

    def expand(self, dx: float, dy: float) -> None:
        """Move the left/right sides out by ``dx`` and the bottom/top by ``dy``."""
        self.min_x -= dx
        self.max_x += dx
        self.min_y -= dy
        self.max_y += dy

    def to_polygon(self) -> List[list]:
        """Return the corners counter-clockwise from ``(min_x, min_y)``."""
        return [point(self.min_x, self.min_y, 0.0),
                point(self.max_x, self.min_y, 0.0),
                point(self.max_x, self.max_y, 0.0),
                point(self.min_x, self.max_y, 0.0)]
