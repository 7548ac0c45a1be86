import io
import json
import logging
from pathlib import Path

import pytest

from brewdock.trace import (
    benchmark_log_path,
    benchmark_log_path_from_value,
    benchmark_logger,
    init_tracing,
    level_for,
    phase_span,
)
from brewdock.verbosity import Verbosity


@pytest.fixture
def clean_logger():
    logger = logging.getLogger("brewdock")

    def clear():
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    clear()
    yield logger
    clear()


def _flush(logger):
    for handler in logger.handlers:
        handler.flush()


def _read(path):
    return path.read_text(encoding="utf-8") if path.exists() else ""


def test_benchmark_log_path_none_when_env_missing():
    assert benchmark_log_path_from_value(None) is None


def test_benchmark_log_path_none_when_empty():
    assert benchmark_log_path_from_value("") is None


def test_benchmark_log_path_from_value_returns_path():
    assert benchmark_log_path_from_value("bench.jsonl") == Path("bench.jsonl")


def test_benchmark_log_path_reads_environment(monkeypatch, tmp_path):
    target = tmp_path / "benchmark.jsonl"
    monkeypatch.setenv("BREWDOCK_BENCHMARK_FILE", str(target))
    assert benchmark_log_path() == target
    monkeypatch.delenv("BREWDOCK_BENCHMARK_FILE")
    assert benchmark_log_path() is None


@pytest.mark.parametrize(
    "verbosity, level",
    [
        (Verbosity.VERBOSE, logging.DEBUG),
        (Verbosity.NORMAL, logging.INFO),
        (Verbosity.QUIET, logging.ERROR),
    ],
)
def test_level_for(verbosity, level):
    assert level_for(verbosity) == level


def test_benchmark_subscriber_writes_close_event_json(tmp_path):
    path = tmp_path / "benchmark.jsonl"
    with open(path, "a", encoding="utf-8") as stream:
        logger = benchmark_logger(stream, logging.INFO)
        with phase_span(logger, "update", "fetch-formula-index", "formula-index"):
            pass

    output = path.read_text(encoding="utf-8")
    assert '"message":"close"' in output
    assert "fetch-formula-index" in output
    assert '"time.busy"' in output
    assert '"time.idle"' in output


def test_phase_span_record_structure():
    stream = io.StringIO()
    logger = benchmark_logger(stream)
    with phase_span(logger, "install", "download-bottle", "jq"):
        pass
    record = json.loads(stream.getvalue().strip())
    assert record["span"]["phase"] == "download-bottle"
    assert record["span"]["operation"] == "install"
    assert record["span"]["target"] == "jq"
    assert record["spans"] == [record["span"]]


def test_phase_span_logs_even_on_error():
    stream = io.StringIO()
    logger = benchmark_logger(stream)
    with pytest.raises(ValueError):
        with phase_span(logger, "install", "extract-bottle", "jq"):
            raise ValueError("boom")
    assert "extract-bottle" in stream.getvalue()


def test_phase_span_filtered_by_level():
    stream = io.StringIO()
    logger = benchmark_logger(stream, logging.ERROR)
    with phase_span(logger, "update", "fetch-formula-index", "formula-index"):
        pass
    assert stream.getvalue() == ""


def test_init_tracing_writes_benchmark_file(monkeypatch, tmp_path, clean_logger):
    path = tmp_path / "bench.jsonl"
    monkeypatch.setenv("BREWDOCK_BENCHMARK_FILE", str(path))
    monkeypatch.delenv("BREWDOCK_LOG", raising=False)

    init_tracing(Verbosity.VERBOSE)
    assert clean_logger.level == logging.DEBUG

    with phase_span(clean_logger, "update", "persist-formula-index", "formula-index"):
        pass
    _flush(clean_logger)

    assert "persist-formula-index" in path.read_text(encoding="utf-8")


def test_init_tracing_keeps_existing_configuration(monkeypatch, tmp_path, clean_logger):
    first = tmp_path / "first.jsonl"
    second = tmp_path / "second.jsonl"
    monkeypatch.delenv("BREWDOCK_LOG", raising=False)

    monkeypatch.setenv("BREWDOCK_BENCHMARK_FILE", str(first))
    init_tracing(Verbosity.QUIET)
    monkeypatch.setenv("BREWDOCK_BENCHMARK_FILE", str(second))
    init_tracing(Verbosity.VERBOSE)

    with phase_span(clean_logger, "update", "fetch-formula-index", "formula-index"):
        pass
    _flush(clean_logger)

    assert _read(first) == ""
    assert _read(second) == ""
    assert clean_logger.level == logging.ERROR
    assert len(clean_logger.handlers) == 1


def test_init_tracing_env_level_override(monkeypatch, tmp_path, clean_logger):
    path = tmp_path / "bench.jsonl"
    monkeypatch.setenv("BREWDOCK_BENCHMARK_FILE", str(path))
    monkeypatch.setenv("BREWDOCK_LOG", "debug")

    init_tracing(Verbosity.QUIET)

    with phase_span(clean_logger, "update", "persist-formula-index", "formula-index"):
        pass
    _flush(clean_logger)

    assert "persist-formula-index" in path.read_text(encoding="utf-8")
    assert clean_logger.level == logging.DEBUG


def test_init_tracing_fails_when_file_cannot_open(monkeypatch, tmp_path, clean_logger):
    monkeypatch.setenv("BREWDOCK_BENCHMARK_FILE", str(tmp_path))
    with pytest.raises(OSError):
        init_tracing(Verbosity.NORMAL)
    assert clean_logger.handlers == []