"""Unit tests for polygon clipping."""

import pytest

from polykit.config import ClippingAlgorithm, ClippingConfig
from polykit.core.clipping import (
    PolygonClipper,
    clip_concave,
    clip_convex,
    clip_pieces_area,
    clip_segment,
    cyrus_beck_clip,
    sutherland_hodgman_clip,
)
from polykit.domain import Point, Polygon

SUBJECT = Polygon.from_tuples([(0, 0), (10, 0), (10, 10), (0, 10)])
WINDOW = Polygon.from_tuples([(5, 5), (15, 5), (15, 15), (5, 15)])
L_WINDOW = Polygon.from_tuples([(0, 0), (4, 0), (4, 2), (2, 2), (2, 4), (0, 4)])

ALGORITHMS = [ClippingAlgorithm.SUTHERLAND_HODGMAN, ClippingAlgorithm.CYRUS_BECK]


def as_tuples(polygon: Polygon) -> list[tuple[float, float]]:
    return [p.to_tuple() for p in polygon]


class TestConvexClipping:
    """Tests for clipping against convex windows."""

    @pytest.mark.parametrize("clip_fn", [sutherland_hodgman_clip, cyrus_beck_clip])
    def test_overlapping_squares(self, clip_fn):
        """The overlap of two offset squares is the shared 5x5 quadrant."""
        result = clip_fn(SUBJECT, WINDOW)
        expected = [(5, 5), (10, 5), (10, 10), (5, 10)]
        assert as_tuples(result) == [pytest.approx(p) for p in expected]

    def test_algorithms_agree(self):
        """Both algorithms produce the same points for the same input."""
        subject = Polygon.from_tuples([(2, -3), (12, 4), (6, 13), (-4, 7)])
        sh = sutherland_hodgman_clip(subject, WINDOW)
        cb = cyrus_beck_clip(subject, WINDOW)
        assert len(sh) == len(cb)
        for a, b in zip(sh, cb):
            assert a.to_tuple() == pytest.approx(b.to_tuple())

    @pytest.mark.parametrize("algorithm", ALGORITHMS)
    def test_subject_outside_window(self, algorithm):
        far = Polygon.from_tuples([(50, 50), (60, 50), (60, 60)])
        assert clip_convex(far, WINDOW, algorithm).is_empty()

    @pytest.mark.parametrize("algorithm", ALGORITHMS)
    def test_subject_inside_window(self, algorithm):
        """A subject contained in the window keeps its vertices."""
        inner = Polygon.from_tuples([(6, 6), (9, 6), (9, 9), (6, 9)])
        result = clip_convex(inner, WINDOW, algorithm)
        assert set(result.vertices) == set(inner.vertices)
        assert result.area() == pytest.approx(9.0)

    @pytest.mark.parametrize("algorithm", ALGORITHMS)
    def test_clipping_twice_changes_nothing(self, algorithm):
        once = clip_convex(SUBJECT, WINDOW, algorithm)
        twice = clip_convex(once, WINDOW, algorithm)
        assert set(twice.vertices) == set(once.vertices)

    @pytest.mark.parametrize("algorithm", ALGORITHMS)
    def test_degenerate_inputs(self, algorithm):
        line = Polygon.from_tuples([(0, 0), (1, 1)])
        assert clip_convex(line, WINDOW, algorithm).is_empty()
        assert clip_convex(SUBJECT, line, algorithm).is_empty()

    def test_clockwise_window_is_normalized(self):
        result = PolygonClipper().clip_convex(SUBJECT, WINDOW.reversed())
        assert result.area() == pytest.approx(25.0)

    def test_clockwise_window_without_normalization(self):
        """With normalization disabled, inside is always left of each edge."""
        clipper = PolygonClipper(ClippingConfig(normalize_window=False))
        assert clipper.clip_convex(SUBJECT, WINDOW.reversed()).is_empty()

    def test_configured_algorithm(self):
        clipper = PolygonClipper(ClippingConfig(algorithm=ClippingAlgorithm.CYRUS_BECK))
        assert clipper.clip(SUBJECT, WINDOW).area() == pytest.approx(25.0)


class TestSegmentClipping:
    """Tests for single-segment Cyrus-Beck clipping."""

    def test_segment_crossing_window(self):
        square = Polygon.from_tuples([(0, 0), (10, 0), (10, 10), (0, 10)])
        edge = clip_segment(Point(-5, 5), Point(15, 5), square)
        assert edge is not None
        assert edge.start.to_tuple() == pytest.approx((0.0, 5.0))
        assert edge.end.to_tuple() == pytest.approx((10.0, 5.0))

    def test_segment_missing_window(self):
        square = Polygon.from_tuples([(0, 0), (10, 0), (10, 10), (0, 10)])
        assert clip_segment(Point(-5, 20), Point(15, 20), square) is None

    def test_segment_inside_window(self):
        square = Polygon.from_tuples([(0, 0), (10, 0), (10, 10), (0, 10)])
        edge = clip_segment(Point(2, 2), Point(8, 3), square)
        assert edge is not None
        assert edge.start == Point(2, 2)
        assert edge.end == Point(8, 3)


class TestConcaveClipping:
    """Tests for clipping against concave windows."""

    @pytest.fixture
    def subject(self) -> Polygon:
        return Polygon.from_tuples([(1, 1), (3, 1), (3, 3), (1, 3)])

    def test_l_window_is_detected_as_concave(self):
        assert PolygonClipper().is_concave(L_WINDOW)
        assert not PolygonClipper().is_concave(WINDOW)

    @pytest.mark.parametrize("algorithm", ALGORITHMS)
    def test_pieces_cover_intersection(self, subject, algorithm):
        """Piece areas sum to the area of the true intersection."""
        pieces = PolygonClipper().clip_concave_pieces(subject, L_WINDOW, algorithm)
        assert pieces
        assert all(len(piece) >= 3 for piece in pieces)
        assert clip_pieces_area(pieces) == pytest.approx(3.0)

    def test_concatenated_result(self, subject):
        """The concave result is the pieces' points in order."""
        clipper = PolygonClipper()
        pieces = clipper.clip_concave_pieces(subject, L_WINDOW)
        result = clip_concave(subject, L_WINDOW)
        assert len(result) == sum(len(piece) for piece in pieces)

    def test_clip_dispatches_on_concavity(self, subject):
        clipper = PolygonClipper()
        assert clipper.clip(subject, L_WINDOW) == clipper.clip_concave(subject, L_WINDOW)

    def test_convex_window_takes_single_piece(self, subject):
        pieces = PolygonClipper().clip_concave_pieces(SUBJECT, WINDOW)
        assert len(pieces) == 1
        assert pieces[0].area() == pytest.approx(25.0)

    def test_subject_outside_concave_window(self):
        """The notch of the L is outside the window."""
        notch = Polygon.from_tuples([(2.5, 2.5), (3.5, 2.5), (3.5, 3.5), (2.5, 3.5)])
        pieces = PolygonClipper().clip_concave_pieces(notch, L_WINDOW)
        assert clip_pieces_area(pieces) == pytest.approx(0.0)
