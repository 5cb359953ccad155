"""Unit tests for the ear clipping triangulator.

Tests cover:
- Simple polygons in either orientation
- Triangle count and area invariants
- Holes merged through bridges and nested polygon trees
- Early termination (no ear, iteration cap) with partial results
"""

import math

import pytest
from structlog.testing import capture_logs

from polykit.config import TriangulationAlgorithm, TriangulationConfig
from polykit.core.triangulation import (
    EarClipTriangulator,
    create_triangulator,
    triangulate_simple,
    triangulate_with_holes,
)
from polykit.domain import Point, Polygon, PolygonTree

SQUARE = Polygon.from_tuples([(0, 0), (4, 0), (4, 4), (0, 4)])

STAR = Polygon.from_tuples(
    [
        (0.0, 0.3),
        (-0.1, 0.0),
        (-0.3, 0.0),
        (-0.15, -0.15),
        (-0.2, -0.4),
        (0.0, -0.25),
        (0.2, -0.4),
        (0.15, -0.15),
        (0.3, 0.0),
        (0.1, 0.0),
    ]
)

L_SHAPE = Polygon.from_tuples([(0, 0), (4, 0), (4, 2), (2, 2), (2, 4), (0, 4)])

COMB = Polygon.from_tuples(
    [(0, 0), (7, 0), (7, 5), (6, 5), (6, 1), (4, 1), (4, 5), (3, 5), (3, 1), (1, 1), (1, 5), (0, 5)]
)


NOTCHED = Polygon.from_tuples([(0, 0), (4, 0), (4, 4), (2, 1), (0, 4)])


def scaled(polygon: Polygon, factor: float) -> Polygon:
    return Polygon(tuple(p.scaled(factor) for p in polygon))


def regular_polygon(n: int, radius: float = 10.0) -> Polygon:
    return Polygon(
        tuple(
            Point(radius * math.cos(2 * math.pi * k / n), radius * math.sin(2 * math.pi * k / n))
            for k in range(n)
        )
    )


def square(x0: float, y0: float, size: float) -> Polygon:
    return Polygon.from_tuples(
        [(x0, y0), (x0 + size, y0), (x0 + size, y0 + size), (x0, y0 + size)]
    )


class TestSimpleTriangulation:
    """Tests for simple polygon triangulation."""

    def test_square(self):
        """A square splits into two triangles covering its area."""
        triangles = triangulate_simple(SQUARE)
        assert len(triangles) == 2
        assert sum(t.area() for t in triangles) == pytest.approx(16.0)

    def test_clockwise_square(self):
        """Clockwise input is reversed and still triangulated."""
        triangles = triangulate_simple(SQUARE.reversed())
        assert len(triangles) == 2
        assert sum(t.area() for t in triangles) == pytest.approx(16.0)

    def test_triangle(self):
        triangle = Polygon.from_tuples([(0, 0), (1, 0), (0, 1)])
        assert len(triangulate_simple(triangle)) == 1

    @pytest.mark.parametrize("coords", [[], [(0, 0)], [(0, 0), (1, 1)]])
    def test_fewer_than_three_vertices(self, coords):
        assert triangulate_simple(Polygon.from_tuples(coords)) == []

    def test_first_fit_ear_order(self):
        """The first ear clipped is the first valid vertex in scan order."""
        triangles = triangulate_simple(SQUARE)
        assert triangles[0].points() == (Point(0, 4), Point(0, 0), Point(4, 0))
        assert triangles[1].points() == (Point(4, 0), Point(4, 4), Point(0, 4))

    def test_emitted_triangles_are_counter_clockwise(self):
        for triangle in triangulate_simple(COMB.reversed()):
            assert triangle.signed_area() > 0

    def test_star_terminates(self):
        """The ten-point star yields eight triangles without hitting the cap."""
        result = EarClipTriangulator().clip_ears(STAR)
        assert result.complete
        assert len(result.triangles) == 8
        assert result.total_area() == pytest.approx(STAR.area())

    @pytest.mark.parametrize(
        "polygon",
        [SQUARE, STAR, L_SHAPE, COMB, regular_polygon(12), regular_polygon(40)],
        ids=["square", "star", "l-shape", "comb", "12-gon", "40-gon"],
    )
    def test_count_area_and_vertices(self, polygon):
        """N-2 triangles whose area matches and whose corners are input vertices."""
        triangles = triangulate_simple(polygon)
        assert len(triangles) == len(polygon) - 2
        assert sum(t.area() for t in triangles) == pytest.approx(polygon.area())

        vertices = set(polygon.vertices)
        for triangle in triangles:
            assert set(triangle.points()) <= vertices

    @pytest.mark.parametrize(
        "polygon", [L_SHAPE, COMB, NOTCHED], ids=["l-shape", "comb", "notched"]
    )
    def test_small_coordinates(self, polygon):
        """Concave polygons triangulate the same way at millimetre scale."""
        small = scaled(polygon, 1e-3)
        triangles = triangulate_simple(small)
        assert len(triangles) == len(small) - 2
        assert sum(t.area() for t in triangles) == pytest.approx(small.area(), rel=1e-9)

    def test_duplicate_points_not_filtered(self):
        """Repeated vertices are not removed before triangulation."""
        polygon = Polygon.from_tuples([(0, 0), (4, 0), (4, 0), (4, 4), (0, 4)])
        triangles = triangulate_simple(polygon)
        assert sum(t.area() for t in triangles) == pytest.approx(16.0)


class TestEarlyTermination:
    """Tests for non-convergence handling."""

    def test_collinear_points_find_no_ear(self):
        """A zero-area polygon has no ear; the run stops with a warning."""
        polygon = Polygon.from_tuples([(0, 0), (1, 0), (2, 0), (3, 0)])
        with capture_logs() as logs:
            result = EarClipTriangulator().clip_ears(polygon)

        assert not result.complete
        assert result.triangles == []
        assert result.remaining == 4
        assert any(log["event"] == "Ear clipping found no ear" for log in logs)

    def test_iteration_cap_returns_partial_result(self):
        """Exceeding the removal cap keeps the triangles found so far."""
        triangulator = EarClipTriangulator(config=TriangulationConfig(max_iterations=2))
        with capture_logs() as logs:
            result = triangulator.clip_ears(regular_polygon(12))

        assert not result.complete
        assert len(result.triangles) == 3
        assert result.remaining == 9
        assert any(log["event"] == "Ear clipping iteration cap reached" for log in logs)

    def test_default_cap_is_not_hit_by_normal_input(self):
        result = EarClipTriangulator().clip_ears(regular_polygon(200))
        assert result.complete
        assert len(result.triangles) == 198


class TestHoles:
    """Tests for pseudo-simple polygon construction and tree triangulation."""

    @pytest.fixture
    def triangulator(self) -> EarClipTriangulator:
        return EarClipTriangulator()

    def test_square_with_square_hole(self):
        """Outer 10x10 with a 4x4 hole covers 84 units with 8 triangles."""
        tree = PolygonTree(square(0, 0, 10), [PolygonTree(square(3, 3, 4))])
        triangles = triangulate_with_holes(tree)
        assert len(triangles) == 8
        assert sum(t.area() for t in triangles) == pytest.approx(84.0)

    def test_bridge_layout(self, triangulator):
        """The hole is spliced after the visible vertex as P, M, hole..., M, P."""
        combined = triangulator.combine_to_pseudo_simple(square(0, 0, 10), [square(3, 3, 4)])
        assert combined.vertices == (
            Point(0, 0),
            Point(10, 0),
            Point(10, 10),
            Point(7, 7),
            Point(7, 3),
            Point(3, 3),
            Point(3, 7),
            Point(7, 7),
            Point(10, 10),
            Point(0, 10),
        )
        assert combined.signed_area() == pytest.approx(84.0)

    def test_hole_orientation_is_normalized(self, triangulator):
        """Holes given clockwise or counter-clockwise merge to the same ring."""
        outer = square(0, 0, 10)
        ccw = triangulator.combine_to_pseudo_simple(outer, [square(3, 3, 4)])
        cw = triangulator.combine_to_pseudo_simple(outer, [square(3, 3, 4).reversed()])
        assert ccw.signed_area() == pytest.approx(cw.signed_area())

    def test_two_holes(self):
        """Both holes are subtracted from the area."""
        outer = Polygon.from_tuples([(0, 0), (20, 0), (20, 10), (0, 10)])
        tree = PolygonTree(outer, [PolygonTree(square(2, 3, 4)), PolygonTree(square(12, 3, 4))])
        triangles = triangulate_with_holes(tree)
        assert sum(t.area() for t in triangles) == pytest.approx(200.0 - 32.0)

    def test_island_inside_hole(self):
        """Grandchildren are triangulated as independent filled regions."""
        island = PolygonTree(square(4, 4, 2))
        tree = PolygonTree(square(0, 0, 10), [PolygonTree(square(2, 2, 6), [island])])
        triangles = triangulate_with_holes(tree)
        assert len(triangles) == 10
        assert sum(t.area() for t in triangles) == pytest.approx(100.0 - 36.0 + 4.0)

    def test_leaf_tree_is_simple_triangulation(self):
        assert len(triangulate_with_holes(PolygonTree(SQUARE))) == 2

    def test_hole_without_visible_vertex_is_dropped(self, triangulator):
        """A hole whose ray never meets the outer ring is logged and skipped."""
        stray = square(20, 2, 2)
        with capture_logs() as logs:
            combined = triangulator.combine_to_pseudo_simple(square(0, 0, 10), [stray])

        assert combined == square(0, 0, 10)
        assert any(log["event"] == "No visible vertex for hole" for log in logs)

    def test_find_visible_vertex_prefers_larger_x_endpoint(self, triangulator):
        ring = list(square(0, 0, 10).vertices)
        assert triangulator.find_visible_vertex(Point(7, 7), ring) == 2

    def test_tree_result_reports_completion(self, triangulator):
        tree = PolygonTree(square(0, 0, 10), [PolygonTree(square(3, 3, 4))])
        result = triangulator.triangulate_tree(tree)
        assert result.complete
        assert result.remaining == 0
        assert result.total_area() == pytest.approx(84.0)

    def test_tree_result_reports_iteration_cap(self):
        """A capped region marks the whole tree result incomplete."""
        triangulator = EarClipTriangulator(config=TriangulationConfig(max_iterations=2))
        tree = PolygonTree(square(0, 0, 10), [PolygonTree(square(3, 3, 4))])
        result = triangulator.triangulate_tree(tree)

        assert not result.complete
        assert len(result.triangles) == 3
        assert result.remaining == 7


class TestCreateTriangulator:
    """Tests for algorithm dispatch."""

    def test_ear_clipping_selected(self):
        config = TriangulationConfig(algorithm=TriangulationAlgorithm.EAR_CLIPPING)
        triangulator = create_triangulator(config)
        assert isinstance(triangulator, EarClipTriangulator)
        assert triangulator.config is config

    def test_defaults(self):
        triangulator = create_triangulator()
        assert triangulator.config.max_iterations == 1000
        assert triangulator.epsilon == 1e-9
