"""Unit tests for point list parsing and formatting."""

import pytest

from polykit.domain import Point
from polykit.exceptions import ParseError, PointParseError
from polykit.io import format_points, parse_int_pair, parse_points, parse_polygon


class TestParsePoints:
    """Tests for parse_points."""

    def test_basic(self):
        assert parse_points("0,0; 1,0;1,1") == [Point(0, 0), Point(1, 0), Point(1, 1)]

    def test_whitespace_and_empty_segments(self):
        """Spaces around numbers and a trailing semicolon are ignored."""
        assert parse_points(" 0.5 , -0.2 ;; -1e-1,3; ") == [Point(0.5, -0.2), Point(-0.1, 3.0)]

    def test_empty_text(self):
        assert parse_points("") == []

    @pytest.mark.parametrize("text", ["0,0;1", "0,0;1,2,3", "a,b", "0,0;1,x"])
    def test_invalid(self, text):
        with pytest.raises(PointParseError) as exc_info:
            parse_points(text)
        assert exc_info.value.text == text
        assert isinstance(exc_info.value, ParseError)

    def test_parse_polygon(self):
        polygon = parse_polygon("0,0;4,0;4,4;0,4")
        assert len(polygon) == 4
        assert polygon.area() == 16.0


class TestParseIntPair:
    """Tests for parse_int_pair."""

    def test_valid(self):
        assert parse_int_pair(" 3, 7") == (3, 7)

    @pytest.mark.parametrize("text", ["3", "3,4,5", "1.5,2"])
    def test_invalid(self, text):
        with pytest.raises(PointParseError):
            parse_int_pair(text)


class TestFormatPoints:
    """Tests for format_points."""

    def test_compact_output(self):
        assert format_points([Point(0.0, 0.5), Point(1.0, 2.0)]) == "0,0.5;1,2"

    def test_output_parses_back(self):
        points = [Point(1.25, -3.5), Point(10.0, 0.0), Point(-2.0, 7.75)]
        assert parse_points(format_points(points)) == points
