"""
Geometry predicates used by the river growth engine.

This module implements:
- Point types for planar and elevated positions
- Point-in-polygon test (ray casting parity, after W. R. Franklin's pnpoly)
- Minimum squared distance from a point to a set of line segments
- An append-only segment buffer for incrementally growing edge sets
"""

import math
from typing import NamedTuple, Optional, Sequence

import numpy as np


class Point2(NamedTuple):
    """Planar position."""
    x: float
    y: float


class Point3(NamedTuple):
    """Position with elevation in z."""
    x: float
    y: float
    z: float

    @property
    def xy(self) -> Point2:
        return Point2(self.x, self.y)

    def distance(self, other: "Point3") -> float:
        """Euclidean distance in 3D."""
        return math.sqrt(
            (self.x - other.x) ** 2 + (self.y - other.y) ** 2 + (self.z - other.z) ** 2
        )


def as_polygon(polygon: Sequence[Sequence[float]]) -> np.ndarray:
    """Convert a vertex sequence to an (n, 2) float array."""
    verts = np.asarray(polygon, dtype=np.float64)
    if verts.ndim != 2 or verts.shape[1] != 2:
        raise ValueError(f"Polygon must be a sequence of (x, y) pairs, got shape {verts.shape}")
    return verts


def polygon_edges(polygon: Sequence[Sequence[float]]) -> np.ndarray:
    """
    Build the closed edge list of a polygon.

    The vertex sequence is cyclic: the last vertex connects back to the first.

    Returns:
        Array of shape (n, 2, 2) holding [start, end] per edge
    """
    verts = as_polygon(polygon)
    return np.stack([verts, np.roll(verts, -1, axis=0)], axis=1)


def contains(polygon: Sequence[Sequence[float]], point: Sequence[float]) -> bool:
    """
    Test whether a point lies inside a polygon.

    Counts crossings of a horizontal ray cast from the point. Points exactly
    on an edge may land on either side.

    Args:
        polygon: Ordered (x, y) vertices, implicitly closed
        point: (x, y) position

    Returns:
        True if the crossing count is odd
    """
    verts = as_polygon(polygon)
    if len(verts) == 0:
        return False

    px, py = float(point[0]), float(point[1])
    ax, ay = verts[:, 0], verts[:, 1]
    bx, by = np.roll(ax, -1), np.roll(ay, -1)

    straddles = (ay > py) != (by > py)

    # Horizontal edges never straddle, their division result is masked out
    with np.errstate(divide="ignore", invalid="ignore"):
        x_cross = (bx - ax) * (py - ay) / (by - ay) + ax

    crossings = np.count_nonzero(straddles & (px < x_cross))
    return bool(crossings % 2)


def min_distance_squared(segments: np.ndarray, point: Sequence[float]) -> Optional[float]:
    """
    Minimum squared distance from a point to a set of segments.

    Each segment is parametrized as a + t(b - a), t clamped to [0, 1], and the
    point is projected onto it.

    Args:
        segments: Array of shape (n, 2, 2)
        point: (x, y) position

    Returns:
        Smallest squared distance, or None when there are no segments
    """
    segments = np.asarray(segments, dtype=np.float64)
    if segments.size == 0:
        return None

    p = np.array([point[0], point[1]], dtype=np.float64)
    a = segments[:, 0, :]
    ab = segments[:, 1, :] - a

    length_sq = np.einsum("ij,ij->i", ab, ab)
    along = np.einsum("ij,ij->i", p - a, ab)

    # Zero-length segments collapse onto their start point
    t = np.divide(along, length_sq, out=np.zeros_like(along), where=length_sq > 0.0)
    t = np.clip(t, 0.0, 1.0)

    projection = a + t[:, np.newaxis] * ab
    diff = p - projection
    return float(np.min(np.einsum("ij,ij->i", diff, diff)))


class SegmentBuffer:
    """
    Append-only store of planar segments.

    Backs the edge list cache of the growth engine. Storage doubles when full
    so that appends stay amortized O(1) while the live view remains a single
    contiguous array for vectorized distance queries.
    """

    def __init__(self, capacity: int = 64):
        self._data = np.empty((max(capacity, 1), 2, 2), dtype=np.float64)
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def append(self, start: Sequence[float], end: Sequence[float]) -> None:
        if self._size == len(self._data):
            grown = np.empty((len(self._data) * 2, 2, 2), dtype=np.float64)
            grown[: self._size] = self._data[: self._size]
            self._data = grown

        self._data[self._size, 0] = (start[0], start[1])
        self._data[self._size, 1] = (end[0], end[1])
        self._size += 1

    def extend(self, segments) -> None:
        for start, end in segments:
            self.append(start, end)

    @property
    def segments(self) -> np.ndarray:
        """Live (n, 2, 2) view of the stored segments."""
        return self._data[: self._size]
