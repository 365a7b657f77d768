"""Tests for geometry predicates."""

import math

import numpy as np
import pytest
from shapely.geometry import Point, Polygon

from py_terrain.core.alea_prng import AleaPRNG
from py_terrain.core.geometry import (
    Point3,
    SegmentBuffer,
    contains,
    min_distance_squared,
    polygon_edges,
)
from py_terrain.config.river_presets import get_preset


SQUARE = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]
L_SHAPE = [(0.0, 0.0), (10.0, 0.0), (10.0, 4.0), (4.0, 4.0), (4.0, 10.0), (0.0, 10.0)]


class TestPoints:
    """Test point types."""

    def test_xy_projection(self):
        p = Point3(1.0, 2.0, 3.0)
        assert p.xy == (1.0, 2.0)

    def test_distance_3d(self):
        assert Point3(0.0, 0.0, 0.0).distance(Point3(2.0, 3.0, 6.0)) == pytest.approx(7.0)


class TestContains:
    """Test point-in-polygon."""

    def test_square_inside(self):
        assert contains(SQUARE, (5.0, 5.0))
        assert contains(SQUARE, (0.5, 9.5))

    def test_square_outside(self):
        assert not contains(SQUARE, (15.0, 5.0))
        assert not contains(SQUARE, (-1.0, 5.0))
        assert not contains(SQUARE, (5.0, 11.0))
        assert not contains(SQUARE, (5.0, -0.1))

    def test_concave_polygon(self):
        """Test the notch of an L shape is outside."""
        assert contains(L_SHAPE, (2.0, 8.0))
        assert contains(L_SHAPE, (8.0, 2.0))
        assert not contains(L_SHAPE, (8.0, 8.0))

    def test_vertex_order_does_not_matter(self):
        reversed_square = list(reversed(SQUARE))
        assert contains(reversed_square, (5.0, 5.0))
        assert not contains(reversed_square, (15.0, 5.0))

    def test_matches_shapely_on_preset_contour(self):
        """Test agreement with shapely away from the boundary."""
        contour = get_preset("lake").contour
        polygon = Polygon(contour)
        xs = [x for x, _ in contour]
        ys = [y for _, y in contour]

        prng = AleaPRNG("contains_test")
        checked = 0
        for _ in range(500):
            p = (prng.uniform(min(xs), max(xs)), prng.uniform(min(ys), max(ys)))
            if polygon.exterior.distance(Point(p)) < 1e-6:
                continue
            assert contains(contour, p) == polygon.contains(Point(p))
            checked += 1

        assert checked > 400


class TestMinDistanceSquared:
    """Test point to segment distance."""

    def test_empty_returns_none(self):
        assert min_distance_squared(np.empty((0, 2, 2)), (1.0, 1.0)) is None
        assert min_distance_squared([], (1.0, 1.0)) is None

    def test_projection_inside_segment(self):
        segments = [((0.0, 0.0), (10.0, 0.0))]
        assert min_distance_squared(segments, (5.0, 3.0)) == pytest.approx(9.0)

    def test_projection_clamped_to_endpoints(self):
        segments = [((0.0, 0.0), (10.0, 0.0))]
        assert min_distance_squared(segments, (-3.0, 4.0)) == pytest.approx(25.0)
        assert min_distance_squared(segments, (13.0, 4.0)) == pytest.approx(25.0)

    def test_zero_length_segment(self):
        segments = [((2.0, 2.0), (2.0, 2.0))]
        assert min_distance_squared(segments, (5.0, 6.0)) == pytest.approx(25.0)

    def test_minimum_over_segments(self):
        segments = [((0.0, 0.0), (10.0, 0.0)), ((0.0, 5.0), (10.0, 5.0))]
        assert min_distance_squared(segments, (5.0, 4.0)) == pytest.approx(1.0)

    def test_contour_edges(self):
        edges = polygon_edges(SQUARE)
        assert min_distance_squared(edges, (5.0, 5.0)) == pytest.approx(25.0)
        assert min_distance_squared(edges, (1.0, 5.0)) == pytest.approx(1.0)


class TestPolygonEdges:
    """Test closed edge construction."""

    def test_shape_and_closing_edge(self):
        edges = polygon_edges(SQUARE)
        assert edges.shape == (4, 2, 2)
        np.testing.assert_array_equal(edges[0], [[0.0, 0.0], [10.0, 0.0]])
        np.testing.assert_array_equal(edges[-1], [[0.0, 10.0], [0.0, 0.0]])

    def test_rejects_bad_shape(self):
        with pytest.raises(ValueError):
            polygon_edges([1.0, 2.0, 3.0])


class TestSegmentBuffer:
    """Test the append-only segment store."""

    def test_grows_past_capacity(self):
        buffer = SegmentBuffer(capacity=1)
        for i in range(5):
            buffer.append((i, 0.0), (i, 1.0))

        assert len(buffer) == 5
        assert buffer.segments.shape == (5, 2, 2)
        np.testing.assert_array_equal(buffer.segments[3], [[3.0, 0.0], [3.0, 1.0]])

    def test_empty_buffer_is_permissive(self):
        buffer = SegmentBuffer()
        assert len(buffer) == 0
        assert min_distance_squared(buffer.segments, (0.0, 0.0)) is None

    def test_distance_through_buffer(self):
        buffer = SegmentBuffer()
        buffer.extend([((0.0, 0.0), (0.0, 10.0))])
        assert math.sqrt(min_distance_squared(buffer.segments, (3.0, 5.0))) == pytest.approx(3.0)
