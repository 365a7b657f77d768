"""
River network graph.

A directed graph whose nodes carry a 3D position and an integer priority.
Nodes live in an append-only arena: a node handle is its insertion index and
stays valid for the lifetime of the graph. Edges carry no payload.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

from .geometry import Point3


@dataclass
class RiverNode:
    """A point of the river network."""
    position: Point3
    priority: int  # Remaining branching budget

    def __post_init__(self):
        self.position = Point3(*self.position)
        if self.priority < 0:
            raise ValueError(f"Node priority must be non-negative, got {self.priority}")


@dataclass
class RiverGraph:
    """Append-only directed graph of river nodes."""
    nodes: List[RiverNode] = field(default_factory=list)
    edges: List[Tuple[int, int]] = field(default_factory=list)
    _outgoing: List[List[int]] = field(default_factory=list, init=False, repr=False, compare=False)
    _incoming: List[List[int]] = field(default_factory=list, init=False, repr=False, compare=False)

    def __post_init__(self):
        nodes, edges = list(self.nodes), list(self.edges)
        self.nodes, self.edges = [], []
        self._outgoing, self._incoming = [], []
        for node in nodes:
            self.add_node(node)
        for parent, child in edges:
            self.add_edge(parent, child)

    def add_node(self, node: RiverNode) -> int:
        """Insert a node and return its handle."""
        self.nodes.append(node)
        self._outgoing.append([])
        self._incoming.append([])
        return len(self.nodes) - 1

    def add_edge(self, parent: int, child: int) -> None:
        """Insert a directed edge parent -> child."""
        self._check(parent)
        self._check(child)
        self.edges.append((parent, child))
        self._outgoing[parent].append(child)
        self._incoming[child].append(parent)

    def _check(self, idx: int) -> None:
        if not 0 <= idx < len(self.nodes):
            raise KeyError(f"Unknown node {idx}")

    def __getitem__(self, idx: int) -> RiverNode:
        self._check(idx)
        return self.nodes[idx]

    def __len__(self) -> int:
        return len(self.nodes)

    def node_indices(self) -> range:
        return range(len(self.nodes))

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def has_outgoing(self, idx: int) -> bool:
        return bool(self._outgoing[idx])

    def successors(self, idx: int) -> List[int]:
        return list(self._outgoing[idx])

    def predecessors(self, idx: int) -> List[int]:
        return list(self._incoming[idx])

    def roots(self) -> List[int]:
        """Nodes without a parent (river mouths)."""
        return [i for i in self.node_indices() if not self._incoming[i]]

    def leaves(self) -> List[int]:
        """Nodes without children (river tips)."""
        return [i for i in self.node_indices() if not self._outgoing[i]]

    def edge_segments(self) -> Iterator[Tuple[Tuple[float, float], Tuple[float, float]]]:
        """Planar (parent, child) segments in edge insertion order."""
        for parent, child in self.edges:
            a = self.nodes[parent].position
            b = self.nodes[child].position
            yield (a.x, a.y), (b.x, b.y)

    def flatten_edges(self) -> List[float]:
        """
        Flatten the network to [ax, ay, az, bx, by, bz, ...].

        One group of six coordinates per edge, in insertion order. This is
        the layout consumed by line-segment renderers.
        """
        flat = []
        for parent, child in self.edges:
            flat.extend(self.nodes[parent].position)
            flat.extend(self.nodes[child].position)
        return flat

    def copy(self) -> "RiverGraph":
        return RiverGraph(
            nodes=[RiverNode(n.position, n.priority) for n in self.nodes],
            edges=list(self.edges),
        )
