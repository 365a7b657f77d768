"""Slope fields sampled by the river growth engine."""

import math
from abc import ABC, abstractmethod
from typing import Sequence, Tuple

import numpy as np
import structlog

logger = structlog.get_logger()


class SlopeMap(ABC):
    """Maps a planar position to a normalized terrain steepness."""

    @abstractmethod
    def sample(self, point: Sequence[float]) -> float:
        """
        Sample the slope at a point.

        Implementations must return a value in [0, 1].
        """


class ArraySlopeMap(SlopeMap):
    """
    Slope field backed by a square grid of values.

    World positions are mapped into the unit square by subtracting the offset
    and dividing by the scale. The unit square is split into size x size cells
    stored row-major. Positions falling outside the unit square sample as 0.
    """

    def __init__(self, data, size: int, offset: Tuple[float, float] = (0.0, 0.0), scale: float = 1.0):
        """
        Initialize the slope map.

        Args:
            data: size * size slope values in row-major order
            size: Number of cells along each side of the grid
            offset: World position of the grid's (0, 0) corner
            scale: World extent covered by the whole grid
        """
        values = np.asarray(data, dtype=np.float64).ravel()
        if size <= 0 or values.size != size * size:
            raise ValueError(
                f"Slope map needs size * size values, got {values.size} for size {size}"
            )
        if scale <= 0:
            raise ValueError(f"Slope map scale must be positive, got {scale}")

        self.data = values
        self.size = size
        self.offset = (float(offset[0]), float(offset[1]))
        self.scale = float(scale)
        self._inv_scale = 1.0 / self.scale

    @classmethod
    def from_flat(cls, values, offset: Tuple[float, float] = (0.0, 0.0), scale: float = 1.0) -> "ArraySlopeMap":
        """Build a map from a flat list whose length is a perfect square."""
        size = int(round(math.sqrt(len(values))))
        return cls(values, size, offset, scale)

    def sample(self, point: Sequence[float]) -> float:
        x = (point[0] - self.offset[0]) * self._inv_scale
        y = (point[1] - self.offset[1]) * self._inv_scale

        if x < 0.0 or x >= 1.0 or y < 0.0 or y >= 1.0:
            return 0.0

        col = int(x * self.size)
        row = int(y * self.size)
        value = float(self.data[col + row * self.size])

        if not 0.0 <= value <= 1.0:
            logger.error("Slope value out of range", value=value, col=col, row=row)
            raise ValueError(f"Slope map value {value} at cell ({col}, {row}) is outside [0, 1]")

        return value
