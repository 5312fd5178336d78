"""Value types for points, sizes, rects and document quads.

Everything here is immutable; transforms return new values.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def as_tuple(self):
        return (self.x, self.y)


@dataclass(frozen=True)
class Size:
    width: float
    height: float

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass(frozen=True)
class Rect:
    origin: Point
    size: Size

    @classmethod
    def from_xywh(cls, x, y, w, h):
        return cls(Point(x, y), Size(w, h))

    @property
    def x(self):
        return self.origin.x

    @property
    def y(self):
        return self.origin.y

    @property
    def width(self):
        return self.size.width

    @property
    def height(self):
        return self.size.height


ROLES = ("top_left", "top_right", "bottom_right", "bottom_left")


@dataclass(frozen=True)
class Quadrilateral:
    """Four corners bound to role labels.

    The labels are only labels: after a coordinate flip the point called
    ``top_left`` can sit anywhere. Call :meth:`reorganize` to make the labels
    agree with the geometry again.
    """

    top_left: Point
    top_right: Point
    bottom_right: Point
    bottom_left: Point

    @classmethod
    def from_points(cls, pts):
        """Build from a 4x2 array-like ordered TL, TR, BR, BL."""
        arr = np.asarray(pts, dtype=np.float64).reshape(4, 2)
        return cls(*(Point(float(x), float(y)) for x, y in arr))

    def corners(self):
        return tuple(getattr(self, role) for role in ROLES)

    def as_array(self) -> np.ndarray:
        """4x2 float32 array in TL, TR, BR, BL order."""
        return np.array([p.as_tuple() for p in self.corners()], dtype=np.float32)

    def _map(self, fn):
        return Quadrilateral(*(fn(p) for p in self.corners()))

    def scale(self, from_size: Size, to_size: Size) -> "Quadrilateral":
        """Map the quad from the ``from_size`` coordinate space into ``to_size``."""
        if from_size.is_empty:
            raise ValueError(f"reference size must be positive, got {from_size}")
        sx = to_size.width / from_size.width
        sy = to_size.height / from_size.height
        return self._map(lambda p: Point(p.x * sx, p.y * sy))

    def to_cartesian(self, reference_height) -> "Quadrilateral":
        """Flip y about ``reference_height``; labels stay on their points."""
        return self._map(lambda p: Point(p.x, reference_height - p.y))

    def reorganize(self) -> "Quadrilateral":
        """Relabel corners from their positions.

        The two points with the smallest ``(y, x)`` form the top pair, the
        others the bottom pair. Within a pair the smaller ``(x, y)`` is "left".
        Labels follow the y-down convention whatever space the quad is in.
        """
        by_y = sorted(self.corners(), key=lambda p: (p.y, p.x))
        top_left, top_right = sorted(by_y[:2], key=lambda p: (p.x, p.y))
        bottom_left, bottom_right = sorted(by_y[2:], key=lambda p: (p.x, p.y))
        return Quadrilateral(top_left, top_right, bottom_right, bottom_left)


def to_cartesian(quad: Quadrilateral, reference_height) -> Quadrilateral:
    """Convert a quad from device space (y down) to Cartesian space (y up)."""
    return quad.to_cartesian(reference_height)
