"""
River network growth.

This module implements:
- Elevation-banded, priority-greedy selection of growable river tips
- The three branching rules (growth, symmetric and asymmetric split)
- Rejection sampling of new river points under contour, clearance and
  slope constraints

Starting from a few seed nodes (river mouths), the generator repeatedly
picks a tip, decides how it branches and places up to two children at a
fixed distance. A tip whose children cannot be placed simply ends there.
Growth stops when no tip is left.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Sequence

import structlog

from .alea_prng import RandomSource
from .geometry import (
    Point2,
    Point3,
    SegmentBuffer,
    as_polygon,
    contains,
    min_distance_squared,
    polygon_edges,
)
from .river_graph import RiverGraph, RiverNode
from .slope_map import SlopeMap

logger = structlog.get_logger()

EPSILON = 0.001  # Tolerance on the branching probability sum
MAX_POINT_ATTEMPTS = 50  # Candidate angles tried per child
SLOPE_MIN = 0.001
SLOPE_RANGE = 0.25


class BranchType(Enum):
    """How a selected tip grows."""
    GROWTH = "growth"  # a(n) -> t(n) b(n)
    SYMMETRIC = "symmetric"  # a(n) -> t(n) b(n - 1) b(n - 1)
    ASYMMETRIC = "asymmetric"  # a(n) -> t(n) b(n) b(m), m < n


@dataclass
class RiverGenSettings:
    """River growth parameters."""
    height_range: float = 2.0  # Elevation band above the lowest tip eligible for expansion
    prob_growth: float = 0.2
    prob_symmetric: float = 0.7
    prob_asymetric: float = 0.1
    edge_length: float = 2000.0  # Planar length of every new edge
    edge_margin: float = 1500.0  # Clearance to the contour and to existing edges

    def validate(self) -> None:
        """Raise ValueError if the settings cannot drive a generator."""
        total = self.prob_growth + self.prob_symmetric + self.prob_asymetric
        if not abs(total - 1.0) <= EPSILON:
            raise ValueError(
                f"prob_growth, prob_symmetric and prob_asymetric must sum up to 1.0, got {total}"
            )
        if not all(p >= 0.0 for p in (self.prob_growth, self.prob_symmetric, self.prob_asymetric)):
            raise ValueError("Branching probabilities must be non-negative")
        if not self.height_range >= 0.0:
            raise ValueError(f"height_range must be non-negative, got {self.height_range}")
        if not self.edge_length > 0.0:
            raise ValueError(f"edge_length must be positive, got {self.edge_length}")
        if not self.edge_margin >= 0.0:
            raise ValueError(f"edge_margin must be non-negative, got {self.edge_margin}")
        if not self.edge_margin < self.edge_length:
            raise ValueError(
                f"edge_margin ({self.edge_margin}) must be smaller than edge_length ({self.edge_length})"
            )


@dataclass
class GrowthStats:
    """Counters collected while growing a network."""
    steps: int = 0
    branches: Dict[str, int] = field(
        default_factory=lambda: {branch.value: 0 for branch in BranchType}
    )
    nodes_added: int = 0
    dropped_children: int = 0


class RiverGen:
    """Grows a river network inside a closed contour."""

    def __init__(
        self,
        rng: RandomSource,
        slope_map: SlopeMap,
        contour: Sequence[Sequence[float]],
        graph: RiverGraph,
        settings: Optional[RiverGenSettings] = None,
    ):
        """
        Initialize the generator.

        The generator takes ownership of the graph. Every node without an
        outgoing edge becomes a growable tip.

        Args:
            rng: Source of uniform floats and integers
            slope_map: Slope field bounding elevation gain
            contour: Ordered (x, y) vertices of the closed boundary
            graph: Seed graph, usually a handful of unconnected river mouths
            settings: Growth parameters
        """
        self.settings = settings or RiverGenSettings()
        self.settings.validate()

        self.contour = as_polygon(contour)
        if len(self.contour) < 3:
            raise ValueError(f"Contour needs at least 3 vertices, got {len(self.contour)}")
        self._contour_edges = polygon_edges(self.contour)

        self.rng = rng
        self.slope_map = slope_map
        self.graph = graph
        self.stats = GrowthStats()

        self.candidates = {n for n in graph.node_indices() if not graph.has_outgoing(n)}

        self.edges = SegmentBuffer(max(graph.edge_count, 64))
        self.edges.extend(graph.edge_segments())

        self._margin_sq = self.settings.edge_margin ** 2
        self._consumed = False

    def _ensure_active(self) -> None:
        if self._consumed:
            raise RuntimeError("RiverGen has already handed over its graph")

    def grow_network(self) -> None:
        """Grow the network until no tip can be expanded."""
        self._ensure_active()
        logger.info(
            "Growing river network",
            seeds=len(self.candidates),
            nodes=len(self.graph),
            edge_length=self.settings.edge_length,
            edge_margin=self.settings.edge_margin,
        )

        while self.step() is not None:
            pass

        logger.info(
            "River network grown",
            nodes=len(self.graph),
            edges=self.graph.edge_count,
            steps=self.stats.steps,
            branches=self.stats.branches,
            dropped_children=self.stats.dropped_children,
        )

    def _branch_type(self, priority: int) -> BranchType:
        # Tips with priority <= 1 have no budget left to split
        if priority <= 1:
            return BranchType.GROWTH

        r = self.rng.random()
        cumulative = 0.0
        fallback = BranchType.GROWTH
        for branch, probability in (
            (BranchType.GROWTH, self.settings.prob_growth),
            (BranchType.SYMMETRIC, self.settings.prob_symmetric),
            (BranchType.ASYMMETRIC, self.settings.prob_asymetric),
        ):
            cumulative += probability
            if r < cumulative:
                return branch
            if probability > 0.0:
                fallback = branch

        # Probabilities may sum to slightly under 1.0
        return fallback

    def step(self) -> Optional[int]:
        """
        Expand one tip.

        Returns:
            Handle of the expanded node, or None once no tip is left
        """
        node_idx = self.next_node()
        if node_idx is not None:
            self._expand(node_idx)
        return node_idx

    def _expand(self, node_idx: int) -> None:
        priority = self.graph[node_idx].priority
        branch = self._branch_type(priority)
        self.candidates.discard(node_idx)

        self.stats.steps += 1
        self.stats.branches[branch.value] += 1

        if branch is BranchType.GROWTH:
            child_priorities = [priority]
        elif branch is BranchType.SYMMETRIC:
            child_priorities = [priority - 1, priority - 1]
        else:
            child_priorities = [priority, self.rng.randrange(1, priority)]

        for child_priority in child_priorities:
            if self.gen_point(node_idx, child_priority) is None:
                self.stats.dropped_children += 1
                logger.debug(
                    "River branch ended",
                    node=node_idx,
                    branch=branch.value,
                    priority=child_priority,
                )

    def next_node(self) -> Optional[int]:
        """
        Select the next tip to expand.

        Only tips within height_range of the lowest tip are eligible. Among
        those the highest priority wins; ties go to the lowest node handle.

        Returns:
            Node handle, or None when no tip is left
        """
        self._ensure_active()
        if not self.candidates:
            return None

        nodes = self.graph.nodes
        lowest = min(nodes[n].position.z for n in self.candidates)
        ceiling = lowest + self.settings.height_range

        banded = [n for n in self.candidates if nodes[n].position.z <= ceiling]
        return min(banded, key=lambda n: (-nodes[n].priority, n))

    def add_node(self, parent_idx: int, node: RiverNode) -> int:
        """Attach a new node below parent_idx and register it as a tip."""
        self._ensure_active()
        node_idx = self.graph.add_node(node)
        self.graph.add_edge(parent_idx, node_idx)

        parent = self.graph[parent_idx].position
        self.edges.append((parent.x, parent.y), (node.position.x, node.position.y))
        self.candidates.add(node_idx)

        self.stats.nodes_added += 1
        return node_idx

    def validate_point(self, point: Sequence[float]) -> bool:
        """
        Check whether a planar position may hold a new node.

        The point must lie inside the contour and keep edge_margin clearance
        from the contour and from every existing edge.
        """
        if not contains(self.contour, point):
            return False

        contour_distance = min_distance_squared(self._contour_edges, point)
        if contour_distance is not None and contour_distance < self._margin_sq:
            return False

        edge_distance = min_distance_squared(self.edges.segments, point)
        if edge_distance is not None and edge_distance < self._margin_sq:
            return False

        return True

    def sample_point(self, parent_idx: int) -> Optional[Point3]:
        """
        Find a position for a child of parent_idx without touching the graph.

        Tries up to MAX_POINT_ATTEMPTS random directions at edge_length from
        the parent. The elevation gain is drawn below the limit set by the
        slope sampled at the candidate position.

        Returns:
            Child position, or None if every attempt was rejected
        """
        self._ensure_active()
        parent = self.graph[parent_idx].position
        edge_length = self.settings.edge_length

        for _ in range(MAX_POINT_ATTEMPTS):
            angle = self.rng.random() * math.pi * 2.0
            x = math.cos(angle) * edge_length + parent.x
            y = math.sin(angle) * edge_length + parent.y

            if not self.validate_point((x, y)):
                continue

            slope = self.slope_map.sample(Point2(x, y)) * (SLOPE_RANGE - SLOPE_MIN) + SLOPE_MIN
            assert 0.0 < slope < 1.0, f"slope {slope}"

            # Lipschitz bound on elevation gain over one edge
            limit = edge_length * math.sqrt(-slope ** 2 / (slope ** 2 - 1.0))
            z = self.rng.random() * limit + parent.z

            pos = Point3(x, y, z)
            assert pos.z >= parent.z and abs(pos.z - parent.z) < slope * pos.distance(parent), (
                f"pos {pos}, parent.pos {parent}"
            )
            return pos

        return None

    def gen_point(self, parent_idx: int, priority: int) -> Optional[int]:
        """
        Place a child of parent_idx with the given priority.

        Returns:
            Handle of the new node, or None if no valid position was found
        """
        pos = self.sample_point(parent_idx)
        if pos is None:
            return None
        return self.add_node(parent_idx, RiverNode(pos, priority))

    def into_graph(self) -> RiverGraph:
        """Hand over the grown graph. The generator is unusable afterwards."""
        self._ensure_active()
        self._consumed = True
        graph = self.graph
        self.graph = None
        self.candidates = set()
        return graph


def generate_river_network(
    rng: RandomSource,
    slope_map: SlopeMap,
    contour: Sequence[Sequence[float]],
    graph: RiverGraph,
    settings: Optional[RiverGenSettings] = None,
) -> RiverGraph:
    """Grow a network from seed nodes and return the resulting graph."""
    gen = RiverGen(rng, slope_map, contour, graph, settings)
    gen.grow_network()
    return gen.into_graph()
