"""Unit tests for logging utilities."""

import structlog
from structlog.testing import capture_logs

from polykit.utils import OperationLogger, OperationStats


class TestOperationStats:
    """Tests for OperationStats."""

    def test_empty(self):
        stats = OperationStats()
        assert stats.total_duration_ms == 0
        assert stats.avg_duration_ms is None

    def test_average(self):
        stats = OperationStats(durations_ms=[2.0, 4.0])
        assert stats.total_duration_ms == 6.0
        assert stats.avg_duration_ms == 3.0


class TestOperationLogger:
    """Tests for OperationLogger."""

    def test_tracks_operations(self):
        operations = OperationLogger(structlog.get_logger("polykit"))
        with capture_logs() as logs:
            operations.log_triangulation(4, 2, True, 1.5)
            operations.log_fill("stack", 100, 0.5)
            operations.log_clip("cyrus-beck", False, 4, 1.0)

        stats = operations.stats
        assert stats.operation_count == 3
        assert stats.triangles_produced == 2
        assert stats.pixels_filled == 100
        assert stats.warning_count == 0
        assert [log["event"] for log in logs] == [
            "Polygon triangulated",
            "Buffer filled",
            "Polygon clipped",
        ]

    def test_partial_triangulation_warns(self):
        operations = OperationLogger(structlog.get_logger("polykit"))
        with capture_logs() as logs:
            operations.log_triangulation(12, 3, False, 0.1)

        assert operations.stats.warning_count == 1
        assert operations.stats.warnings == [("triangulate", "partial triangulation")]
        assert any(log["log_level"] == "warning" for log in logs)
