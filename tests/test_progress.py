import io

import pytest

from brewdock.progress import (
    FormulaCompleted,
    FormulaFailed,
    FormulaStarted,
    NoopProgressSink,
    OperationCompleted,
    OperationFailed,
    OperationStarted,
    PhaseStarted,
    ProgressRenderer,
    ProgressWarning,
    RenderMode,
    RenderSnapshot,
    format_operation_label,
    format_phase_label,
    format_phase_line,
    format_warning_line,
    progress_sink,
    render_status_line,
    update_snapshot,
)
from brewdock.verbosity import Verbosity


def test_render_status_line():
    snapshot = RenderSnapshot()
    update_snapshot(snapshot, OperationStarted(operation="install", target="jq,wget"))
    update_snapshot(
        snapshot,
        PhaseStarted(operation="install", phase="download-bottle", target="jq"),
    )
    update_snapshot(snapshot, FormulaCompleted(operation="install", name="jq"))

    rendered = render_status_line(snapshot)
    assert "install" in rendered
    assert "downloading bottle" in rendered
    assert "jq" in rendered
    assert "[1 done]" in rendered
    assert rendered == "install: downloading bottle jq [1 done]"


def test_render_status_line_defaults():
    assert render_status_line(RenderSnapshot()) == "working: preparing request [0 done]"


def test_operation_started_resets_snapshot():
    snapshot = RenderSnapshot(
        operation="upgrade", phase="plan-execution", formula="a", completed_formulae=3
    )
    update_snapshot(snapshot, OperationStarted(operation="install", target="b"))
    assert snapshot == RenderSnapshot(operation="install", target="b")


def test_formula_started_and_failed_set_formula_without_counting():
    snapshot = RenderSnapshot()
    update_snapshot(snapshot, FormulaStarted(operation="install", name="jq"))
    assert snapshot.formula == "jq"
    update_snapshot(snapshot, FormulaFailed(operation="install", name="wget", error="x"))
    assert snapshot.formula == "wget"
    assert snapshot.completed_formulae == 0


def test_operation_end_clears_phase():
    snapshot = RenderSnapshot(phase="download-bottle")
    update_snapshot(snapshot, OperationCompleted(operation="install", target="jq"))
    assert snapshot.phase is None


def test_format_warning_line():
    rendered = format_warning_line(
        "upgrade", "jq", "upgrade failed, restoring previous version"
    )
    assert rendered == "warning: upgrade jq: upgrade failed, restoring previous version"


@pytest.mark.parametrize(
    ("operation", "label"),
    [
        ("install", "install"),
        ("install-plan", "install"),
        ("update", "update"),
        ("upgrade-discovery", "upgrade"),
        ("outdated", "outdated"),
        ("mystery", "work"),
    ],
)
def test_format_operation_label(operation, label):
    assert format_operation_label(operation) == label


@pytest.mark.parametrize(
    ("phase", "label"),
    [
        ("resolve-install-method", "planning"),
        ("fetch-formula-index", "fetching index"),
        ("persist-source-archive", "writing source archive"),
        ("unknown-phase", "working"),
    ],
)
def test_format_phase_label(phase, label):
    assert format_phase_label(phase) == label


def test_format_phase_line():
    assert (
        format_phase_line("update", "fetch-formula-index", "formula-index")
        == "update: fetching index formula-index"
    )


def test_plain_renderer_verbose_phase_line():
    stream = io.StringIO()
    renderer = ProgressRenderer(Verbosity.VERBOSE, RenderMode.PLAIN, stream)
    renderer.handle_event(
        PhaseStarted(
            operation="update", phase="fetch-formula-index", target="formula-index"
        )
    )
    assert renderer.state.phase == "fetch-formula-index"
    assert stream.getvalue() == "update: fetching index formula-index\n"


def test_plain_renderer_normal_hides_phase_lines():
    stream = io.StringIO()
    renderer = ProgressRenderer(Verbosity.NORMAL, RenderMode.PLAIN, stream)
    renderer.emit(PhaseStarted(operation="update", phase="fetch-formula-index", target="x"))
    assert stream.getvalue() == ""


def test_plain_renderer_lines():
    stream = io.StringIO()
    renderer = ProgressRenderer(Verbosity.NORMAL, RenderMode.PLAIN, stream)
    renderer.emit(OperationStarted(operation="install", target="jq,wget"))
    renderer.emit(FormulaCompleted(operation="install", name="jq"))
    renderer.emit(ProgressWarning(operation="upgrade", target="jq", message="careful"))
    renderer.emit(OperationFailed(operation="install", target="wget", error="boom"))
    assert stream.getvalue().splitlines() == [
        "starting: install jq,wget",
        "done: install jq",
        "warning: upgrade jq: careful",
        "failed: install wget (boom)",
    ]
    assert renderer.state.completed_formulae == 1


def test_tty_renderer_reports_failures():
    stream = io.StringIO()
    renderer = ProgressRenderer(Verbosity.NORMAL, RenderMode.TTY, stream)
    renderer.emit(OperationStarted(operation="install", target="jq"))
    renderer.emit(FormulaFailed(operation="install", name="jq", error="bad bottle"))
    renderer.emit(OperationFailed(operation="install", target="jq", error="boom"))
    output = stream.getvalue()
    assert "install: preparing jq [0 done]" in output
    assert "failed: install jq (bad bottle)\n" in output
    assert output.endswith("failed: boom\n")


def test_tty_renderer_verbose_formula_done():
    stream = io.StringIO()
    renderer = ProgressRenderer(Verbosity.VERBOSE, RenderMode.TTY, stream)
    renderer.emit(FormulaCompleted(operation="install", name="jq"))
    assert "done: install jq\n" in stream.getvalue()


def test_render_mode_detect_plain_for_non_terminal():
    assert RenderMode.detect(io.StringIO()) is RenderMode.PLAIN


def test_progress_sink_quiet_is_noop():
    sink = progress_sink(Verbosity.QUIET)
    assert isinstance(sink, NoopProgressSink)
    assert sink.emit(OperationStarted(operation="install", target="jq")) is None


def test_progress_sink_normal_renders():
    sink = progress_sink(Verbosity.NORMAL)
    assert isinstance(sink, ProgressRenderer)
    assert sink.verbosity is Verbosity.NORMAL