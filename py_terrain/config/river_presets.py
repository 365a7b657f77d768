"""
Contour presets for river generation.

Each preset bundles a contour, the seed river mouths placed on it, the
slope map layout covering it and default growth settings.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..core.geometry import Point3
from ..core.river_gen import RiverGenSettings
from ..core.river_graph import RiverGraph, RiverNode
from ..core.slope_map import ArraySlopeMap


@dataclass
class RiverPreset:
    """Inputs for one river generation scenario."""
    name: str
    description: str
    contour: List[Tuple[float, float]]
    seeds: List[Tuple[float, float, float]]
    seed_priority: int
    slope_values: List[float]
    slope_offset: Tuple[float, float]
    slope_scale: float
    settings: RiverGenSettings = field(default_factory=RiverGenSettings)

    def build_graph(self) -> RiverGraph:
        """Seed graph holding one unconnected node per river mouth."""
        graph = RiverGraph()
        for x, y, z in self.seeds:
            graph.add_node(RiverNode(Point3(x, y, z), self.seed_priority))
        return graph

    def build_slope_map(self, values: Optional[Sequence[float]] = None) -> ArraySlopeMap:
        """Slope map over the preset's extent, optionally with custom values."""
        return ArraySlopeMap.from_flat(
            list(values) if values is not None else self.slope_values,
            self.slope_offset,
            self.slope_scale,
        )

    def flat_contour(self) -> List[float]:
        return [c for vertex in self.contour for c in vertex]


LAKE_SCALE = 100.0

# Island outline, x in [45, 640], y in [215, 640] before scaling
_LAKE_OUTLINE = [
    (77.142857, 363.79078),
    (134.28572, 306.64792),
    (222.85715, 283.79078),
    (282.85715, 232.3622),
    (377.14286, 215.21935),
    (442.85714, 240.93363),
    (522.85714, 220.93363),
    (591.42858, 252.36221),
    (622.85715, 318.07649),
    (597.14286, 378.07649),
    (590.0, 420.0),
    (597.14286, 455.21934),
    (640.0, 506.64792),
    (622.85715, 586.64792),
    (582.85715, 626.64792),
    (505.71429, 638.07649),
    (431.42858, 603.79078),
    (385.71429, 549.50507),
    (328.57143, 500.93364),
    (262.85715, 486.64792),
    (188.57143, 509.50506),
    (117.14286, 520.93363),
    (65.714286, 489.50506),
    (45.714286, 426.64792),
]

_LAKE_MOUTHS = [
    (222.85715, 283.79078),
    (442.85714, 240.93363),
    (590.0, 420.0),
    (328.57143, 500.93364),
    (188.57143, 509.50506),
]

SQUARE_SCALE = 10_000.0

TEMPLATES: Dict[str, RiverPreset] = {
    "lake": RiverPreset(
        name="lake",
        description="Irregular island with five river mouths on its coast",
        contour=[(x * LAKE_SCALE, y * LAKE_SCALE) for x, y in _LAKE_OUTLINE],
        seeds=[(x * LAKE_SCALE, y * LAKE_SCALE, 0.0) for x, y in _LAKE_MOUTHS],
        seed_priority=20,
        slope_values=[
            0.0, 0.1, 0.1, 0.0,
            0.1, 0.2, 0.3, 0.1,
            0.0, 0.1, 0.2, 0.0,
            0.1, 0.1, 0.0, 0.0,
        ],
        slope_offset=(45.0 * LAKE_SCALE, 215.0 * LAKE_SCALE),
        slope_scale=595.0 * LAKE_SCALE,
    ),
    "square": RiverPreset(
        name="square",
        description="Square region with mouths on three of its sides",
        contour=[(0.0, 0.0), (SQUARE_SCALE, 0.0), (SQUARE_SCALE, SQUARE_SCALE), (0.0, SQUARE_SCALE)],
        seeds=[
            (0.5 * SQUARE_SCALE, 0.0, 0.0),
            (0.5 * SQUARE_SCALE, SQUARE_SCALE, 0.0),
            (SQUARE_SCALE, 0.5 * SQUARE_SCALE, 0.0),
        ],
        seed_priority=20,
        slope_values=[
            0.0, 0.1, 0.1, 0.0,
            0.1, 0.2, 0.1, 0.1,
            0.0, 0.2, 0.0, 0.0,
            0.1, 0.1, 0.0, 0.0,
        ],
        slope_offset=(0.0, 0.0),
        slope_scale=SQUARE_SCALE,
    ),
}


def get_preset(name: str) -> RiverPreset:
    """Look up a preset by name, raising KeyError for unknown names."""
    if name not in TEMPLATES:
        raise KeyError(f"Unknown river preset '{name}'. Available: {', '.join(list_presets())}")
    return TEMPLATES[name]


def list_presets() -> List[str]:
    return list(TEMPLATES.keys())
