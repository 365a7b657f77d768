"""
Core river network generation functionality.
"""

from .geometry import Point2, Point3, SegmentBuffer, contains, min_distance_squared, polygon_edges
from .slope_map import SlopeMap, ArraySlopeMap
from .river_graph import RiverGraph, RiverNode
from .alea_prng import AleaPRNG, RandomSource
from .river_gen import BranchType, GrowthStats, RiverGen, RiverGenSettings, generate_river_network

__all__ = ['Point2', 'Point3', 'SegmentBuffer', 'contains', 'min_distance_squared', 'polygon_edges',
           'SlopeMap', 'ArraySlopeMap',
           'RiverGraph', 'RiverNode',
           'AleaPRNG', 'RandomSource',
           'BranchType', 'GrowthStats', 'RiverGen', 'RiverGenSettings', 'generate_river_network']
