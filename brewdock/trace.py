"""Logging set-up for normal runs and benchmark captures."""

from __future__ import annotations

import json
import logging
import os
import time
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import IO

from brewdock.verbosity import Verbosity

BENCHMARK_FILE_ENV = "BREWDOCK_BENCHMARK_FILE"
LOG_LEVEL_ENV = "BREWDOCK_LOG"
LOGGER_NAME = "brewdock"
PHASE_SPAN_NAME = "bd.phase"

_LEVEL_NAMES = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def _format_duration(seconds: float) -> str:
    nanos = seconds * 1e9
    if nanos < 1e3:
        return f"{nanos:.2f}ns"
    if nanos < 1e6:
        return f"{nanos / 1e3:.2f}µs"
    if nanos < 1e9:
        return f"{nanos / 1e6:.2f}ms"
    return f"{seconds:.2f}s"


class _JsonFormatter(logging.Formatter):
    """One compact JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        fields: dict[str, object] = {"message": record.getMessage()}
        fields.update(getattr(record, "timings", {}))
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "fields": fields,
            "target": record.name,
        }
        span = getattr(record, "span", None)
        if span is not None:
            payload["span"] = span
            payload["spans"] = [span]
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


def level_for(verbosity: Verbosity) -> int:
    """Logging level that corresponds to ``verbosity``."""
    return {
        Verbosity.VERBOSE: logging.DEBUG,
        Verbosity.NORMAL: logging.INFO,
        Verbosity.QUIET: logging.ERROR,
    }[verbosity]


def _level_from_env() -> int | None:
    value = os.environ.get(LOG_LEVEL_ENV, "").strip().lower()
    return _LEVEL_NAMES.get(value)


def benchmark_log_path_from_value(value: str | os.PathLike[str] | None) -> Path | None:
    """Path for benchmark output, or None when ``value`` is unset or empty."""
    if value is None or os.fspath(value) == "":
        return None
    return Path(value)


def benchmark_log_path() -> Path | None:
    """Benchmark output path taken from the environment, if any."""
    return benchmark_log_path_from_value(os.environ.get(BENCHMARK_FILE_ENV))


def benchmark_logger(stream: IO[str], level: int = logging.INFO) -> logging.Logger:
    """A standalone logger that writes JSON lines to ``stream``."""
    logger = logging.Logger(f"{LOGGER_NAME}.benchmark", level)
    logger.propagate = False
    handler = logging.StreamHandler(stream)
    handler.setFormatter(_JsonFormatter())
    logger.addHandler(handler)
    return logger


@contextmanager
def phase_span(
    logger: logging.Logger, operation: str, phase: str, target: str
) -> Iterator[None]:
    """Time a phase and log a ``close`` record with its busy and idle time."""
    start = time.perf_counter()
    try:
        yield
    finally:
        busy = time.perf_counter() - start
        span = {
            "name": PHASE_SPAN_NAME,
            "operation": operation,
            "phase": phase,
            "target": target,
        }
        timings = {
            "time.busy": _format_duration(busy),
            "time.idle": _format_duration(0.0),
        }
        logger.info("close", extra={"span": span, "timings": timings})


def init_tracing(verbosity: Verbosity) -> None:
    """Configure the ``brewdock`` logger once.

    With ``BREWDOCK_BENCHMARK_FILE`` set, records go as JSON lines to that
    file, opened for append; otherwise they are discarded. Raises
    :class:`OSError` when the benchmark file cannot be opened. Later calls
    leave an existing configuration in place.
    """
    level = _level_from_env()
    if level is None:
        level = level_for(verbosity)

    path = benchmark_log_path()
    handler: logging.Handler
    if path is not None:
        handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        handler.setFormatter(_JsonFormatter())
    else:
        handler = logging.NullHandler()

    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        handler.close()
        return

    logger.setLevel(level)
    logger.propagate = False
    logger.addHandler(handler)