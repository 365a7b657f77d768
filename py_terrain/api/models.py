"""Request/response models and the generation service behind the API."""

import math
from dataclasses import replace
from typing import List, Optional, Tuple

import structlog
from pydantic import BaseModel, Field, model_validator

from ..config.river_presets import get_preset
from ..config.settings import settings
from ..core.alea_prng import AleaPRNG
from ..core.river_gen import EPSILON, generate_river_network
from ..core.river_graph import RiverGraph

logger = structlog.get_logger()


class GenerateRiversRequest(BaseModel):
    """Request to grow a river network."""

    prob_growth: float = Field(0.2, ge=0.0, le=1.0, description="Probability of plain growth")
    prob_symmetric: float = Field(0.7, ge=0.0, le=1.0, description="Probability of a symmetric split")
    prob_asymetric: float = Field(0.1, ge=0.0, le=1.0, description="Probability of an asymmetric split")
    slope_map: Optional[List[float]] = Field(
        None, description="Square slope grid flattened row-major, values in [0, 1]"
    )
    contour: Optional[List[float]] = Field(
        None, description="Flat [x0, y0, x1, y1, ...] contour replacing the preset's"
    )
    preset: str = Field(default_factory=lambda: settings.default_preset, description="Contour preset name")
    seed: Optional[str] = Field(None, description="Random seed for reproducible generation")

    @model_validator(mode="after")
    def check_inputs(self):
        total = self.prob_growth + self.prob_symmetric + self.prob_asymetric
        if abs(total - 1.0) > EPSILON:
            raise ValueError(f"Branching probabilities must sum up to 1.0, got {total}")

        if self.slope_map is not None:
            size = int(round(math.sqrt(len(self.slope_map))))
            if size == 0 or size * size != len(self.slope_map):
                raise ValueError("slope_map length must be a non-zero perfect square")
            if size > settings.max_slope_map_size:
                raise ValueError(f"slope_map side {size} exceeds {settings.max_slope_map_size}")
            if any(not 0.0 <= v <= 1.0 for v in self.slope_map):
                raise ValueError("slope_map values must lie in [0, 1]")

        if self.contour is not None and (len(self.contour) % 2 or len(self.contour) < 6):
            raise ValueError("contour must hold at least 3 (x, y) pairs")

        return self


class GenerateRiversResponse(BaseModel):
    """Grown river network as flat line segments."""

    seed: str
    preset: str
    node_count: int
    edge_count: int
    edges: List[float] = Field(description="[ax, ay, az, bx, by, bz, ...] per edge")


def build_network(request: GenerateRiversRequest) -> Tuple[RiverGraph, List[Tuple[float, float]]]:
    """
    Grow the network described by a request.

    Raises:
        KeyError: Unknown preset
    """
    preset = get_preset(request.preset)

    if request.contour is not None:
        contour = list(zip(request.contour[0::2], request.contour[1::2]))
    else:
        contour = preset.contour

    river_settings = replace(
        preset.settings,
        prob_growth=request.prob_growth,
        prob_symmetric=request.prob_symmetric,
        prob_asymetric=request.prob_asymetric,
    )
    seed = request.seed or settings.default_seed

    logger.info("Generating rivers", preset=preset.name, seed=seed, custom_contour=request.contour is not None)

    graph = generate_river_network(
        AleaPRNG(seed),
        preset.build_slope_map(request.slope_map),
        contour,
        preset.build_graph(),
        river_settings,
    )
    return graph, contour
