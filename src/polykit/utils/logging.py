"""Logging utilities for Polykit."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class OperationStats:
    """Statistics from a run of geometry operations."""

    operation_count: int = 0
    triangles_produced: int = 0
    pixels_filled: int = 0
    warning_count: int = 0
    durations_ms: list[float] = field(default_factory=list)
    warnings: list[tuple[str, str]] = field(default_factory=list)

    @property
    def total_duration_ms(self) -> float:
        return sum(self.durations_ms)

    @property
    def avg_duration_ms(self) -> float | None:
        """Average operation duration, None before any operation ran."""
        if not self.durations_ms:
            return None
        return self.total_duration_ms / len(self.durations_ms)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in list(root_logger.handlers):
        if getattr(handler, "_polykit", False):
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        file_handler._polykit = True  # type: ignore[attr-defined]
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    console_handler._polykit = True  # type: ignore[attr-defined]
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    logger = structlog.get_logger("polykit")
    logger.debug(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=console_level,
    )

    return logger


class OperationLogger:
    """Logger for tracking geometry operations and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = OperationStats()

    def log_triangulation(
        self, vertex_count: int, triangle_count: int, complete: bool, duration_ms: float
    ) -> None:
        """Log a finished triangulation."""
        self._logger.info(
            "Polygon triangulated",
            vertices=vertex_count,
            triangles=triangle_count,
            complete=complete,
            duration_ms=round(duration_ms, 2),
        )
        self._record(duration_ms)
        self._stats.triangles_produced += triangle_count
        if not complete:
            self.log_warning("triangulate", "partial triangulation")

    def log_clip(
        self, algorithm: str, concave: bool, result_vertices: int, duration_ms: float
    ) -> None:
        """Log a finished clip."""
        self._logger.info(
            "Polygon clipped",
            algorithm=algorithm,
            concave=concave,
            vertices=result_vertices,
            duration_ms=round(duration_ms, 2),
        )
        self._record(duration_ms)

    def log_fill(self, strategy: str, pixels: int, duration_ms: float) -> None:
        """Log a finished fill."""
        self._logger.info(
            "Buffer filled",
            strategy=strategy,
            pixels=pixels,
            duration_ms=round(duration_ms, 2),
        )
        self._record(duration_ms)
        self._stats.pixels_filled += pixels

    def log_warning(self, operation: str, message: str) -> None:
        """Log a recoverable problem."""
        self._logger.warning("Operation warning", operation=operation, message=message)
        self._stats.warning_count += 1
        self._stats.warnings.append((operation, message))

    def _record(self, duration_ms: float) -> None:
        self._stats.operation_count += 1
        self._stats.durations_ms.append(duration_ms)

    @property
    def stats(self) -> OperationStats:
        """Get current operation statistics."""
        return self._stats
