"""Progress events and their rendering on the terminal."""

from __future__ import annotations

import enum
import sys
import threading
from dataclasses import dataclass, field
from typing import IO, Optional, Protocol, Union

from brewdock.verbosity import Verbosity


@dataclass(frozen=True)
class OperationStarted:
    operation: str
    target: str


@dataclass(frozen=True)
class OperationCompleted:
    operation: str
    target: str


@dataclass(frozen=True)
class OperationFailed:
    operation: str
    target: str
    error: str


@dataclass(frozen=True)
class PhaseStarted:
    operation: str
    phase: str
    target: str


@dataclass(frozen=True)
class PhaseCompleted:
    operation: str
    phase: str
    target: str


@dataclass(frozen=True)
class PhaseFailed:
    operation: str
    phase: str
    target: str
    error: str


@dataclass(frozen=True)
class FormulaStarted:
    operation: str
    name: str


@dataclass(frozen=True)
class FormulaCompleted:
    operation: str
    name: str


@dataclass(frozen=True)
class FormulaFailed:
    operation: str
    name: str
    error: str


@dataclass(frozen=True)
class ProgressWarning:
    operation: str
    target: str
    message: str


ProgressEvent = Union[
    OperationStarted,
    OperationCompleted,
    OperationFailed,
    PhaseStarted,
    PhaseCompleted,
    PhaseFailed,
    FormulaStarted,
    FormulaCompleted,
    FormulaFailed,
    ProgressWarning,
]


class ProgressSink(Protocol):
    def emit(self, event: ProgressEvent) -> None: ...


class RenderMode(enum.Enum):
    """Whether progress is drawn as a live status line or as plain lines."""

    TTY = "tty"
    PLAIN = "plain"

    @classmethod
    def detect(cls, stream: Optional[IO[str]] = None) -> RenderMode:
        """TTY when ``stream`` (standard error by default) is a terminal."""
        stream = sys.stderr if stream is None else stream
        isatty = getattr(stream, "isatty", None)
        return cls.TTY if isatty is not None and isatty() else cls.PLAIN


@dataclass
class RenderSnapshot:
    """What the status line currently shows."""

    operation: Optional[str] = None
    target: Optional[str] = None
    phase: Optional[str] = None
    formula: Optional[str] = None
    completed_formulae: int = 0


@dataclass
class NoopProgressSink:
    """A sink that draws nothing; it only counts the events it discards."""

    discarded: int = 0

    def emit(self, event: ProgressEvent) -> None:
        self.discarded += 1


_CLEAR_LINE = "\r\x1b[2K"
_SPINNER_FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"


@dataclass
class _Spinner:
    """A single redrawn status line with a spinner glyph."""

    stream: IO[str]
    message: str = ""
    active: bool = True
    _frame: int = field(default=0, repr=False)

    def _glyph(self) -> str:
        glyph = _SPINNER_FRAMES[self._frame % len(_SPINNER_FRAMES)]
        self._frame += 1
        return f"\x1b[36m{glyph}\x1b[0m"

    def _draw(self) -> None:
        if self.active:
            self.stream.write(f"{_CLEAR_LINE}{self._glyph()} {self.message}")
            self.stream.flush()

    def set_message(self, message: str) -> None:
        self.message = message
        self.active = True
        self._draw()

    def println(self, line: str) -> None:
        self.stream.write(f"{_CLEAR_LINE}{line}\n")
        self._draw()

    def finish_and_clear(self) -> None:
        self.active = False
        self.stream.write(_CLEAR_LINE)
        self.stream.flush()

    def abandon_with_message(self, message: str) -> None:
        self.active = False
        self.message = message
        self.stream.write(f"{_CLEAR_LINE}{self._glyph()} {message}\n")
        self.stream.flush()


class ProgressRenderer:
    """Renders progress events to standard error (or ``stream``)."""

    def __init__(
        self,
        verbosity: Verbosity,
        mode: RenderMode,
        stream: Optional[IO[str]] = None,
    ) -> None:
        self.verbosity = verbosity
        self.mode = mode
        self.stream = sys.stderr if stream is None else stream
        self.state = RenderSnapshot()
        self._lock = threading.Lock()
        self._spinner = _Spinner(self.stream) if mode is RenderMode.TTY else None

    def emit(self, event: ProgressEvent) -> None:
        self.handle_event(event)

    def handle_event(self, event: ProgressEvent) -> None:
        """Update the snapshot and draw the event."""
        with self._lock:
            update_snapshot(self.state, event)
            if self.mode is RenderMode.TTY:
                self._render_tty(event)
            else:
                self._render_plain(event)

    @property
    def _verbose(self) -> bool:
        return self.verbosity is Verbosity.VERBOSE

    def _render_tty(self, event: ProgressEvent) -> None:
        spinner = self._spinner
        if spinner is None:
            return
        spinner.set_message(render_status_line(self.state))

        match event:
            case OperationCompleted():
                spinner.finish_and_clear()
            case OperationFailed(error=error):
                spinner.abandon_with_message(f"failed: {error}")
            case ProgressWarning(operation=op, target=target, message=message):
                spinner.println(format_warning_line(op, target, message))
            case PhaseStarted(operation=op, phase=phase, target=target) | PhaseCompleted(
                operation=op, phase=phase, target=target
            ) if self._verbose:
                spinner.println(format_phase_line(op, phase, target))
            case FormulaCompleted(operation=op, name=name) if self._verbose:
                spinner.println(f"done: {format_operation_label(op)} {name}")
            case FormulaFailed(operation=op, name=name, error=error):
                spinner.println(f"failed: {format_operation_label(op)} {name} ({error})")
            case _:
                pass

    def _println(self, line: str) -> None:
        self.stream.write(f"{line}\n")
        self.stream.flush()

    def _render_plain(self, event: ProgressEvent) -> None:
        match event:
            case OperationStarted(operation=op, target=target):
                self._println(f"starting: {format_operation_label(op)} {target}")
            case PhaseStarted(operation=op, phase=phase, target=target) if self._verbose:
                self._println(format_phase_line(op, phase, target))
            case FormulaCompleted(operation=op, name=name):
                self._println(f"done: {format_operation_label(op)} {name}")
            case ProgressWarning(operation=op, target=target, message=message):
                self._println(format_warning_line(op, target, message))
            case OperationFailed(operation=op, target=target, error=error):
                self._println(f"failed: {format_operation_label(op)} {target} ({error})")
            case _:
                pass


def progress_sink(verbosity: Verbosity) -> ProgressSink:
    """The sink suited to ``verbosity`` and to whether stderr is a terminal."""
    if verbosity.is_quiet():
        return NoopProgressSink()
    return ProgressRenderer(verbosity, RenderMode.detect(sys.stderr))


def update_snapshot(state: RenderSnapshot, event: ProgressEvent) -> None:
    """Fold ``event`` into ``state``."""
    match event:
        case OperationStarted(operation=op, target=target):
            state.operation = op
            state.target = target
            state.phase = None
            state.formula = None
            state.completed_formulae = 0
        case PhaseStarted(phase=phase, target=target):
            state.phase = phase
            state.target = target
        case FormulaStarted(name=name) | FormulaFailed(name=name):
            state.formula = name
        case FormulaCompleted(name=name):
            state.formula = name
            state.completed_formulae += 1
        case OperationCompleted() | OperationFailed():
            state.phase = None
        case _:
            pass


def render_status_line(state: RenderSnapshot) -> str:
    operation = (
        "working" if state.operation is None else format_operation_label(state.operation)
    )
    phase = "preparing" if state.phase is None else format_phase_label(state.phase)
    if state.formula is not None:
        target = state.formula
    elif state.target is not None:
        target = state.target
    else:
        target = "request"
    return f"{operation}: {phase} {target} [{state.completed_formulae} done]"


_OPERATION_LABELS = {
    "install": "install",
    "install-plan": "install",
    "update": "update",
    "upgrade": "upgrade",
    "upgrade-plan": "upgrade",
    "upgrade-discovery": "upgrade",
    "outdated": "outdated",
}

_PHASE_LABELS = {
    "resolve-install-list": "resolving",
    "resolve-methods": "planning",
    "resolve-install-method": "planning",
    "collect-upgrade-candidates": "discovering",
    "fetch-formula-index": "fetching index",
    "persist-formula-index": "writing index",
    "plan-execution": "planning execution",
    "acquire-payload": "acquiring",
    "check-blob-store": "checking cache",
    "download-bottle": "downloading bottle",
    "store-bottle-blob": "storing bottle",
    "extract-bottle": "extracting bottle",
    "materialize-payload": "materializing",
    "build-from-source": "building from source",
    "refresh-opt-link": "refreshing links",
    "post-install": "post-install",
    "fetch-post-install-source": "loading post-install source",
    "run-post-install": "running post-install",
    "finalize-install": "finalizing",
    "unlink-old-keg": "unlinking old keg",
    "install-target-version": "installing target version",
    "discover-installed-kegs": "scanning installed kegs",
    "check-post-install-viability": "checking post-install",
    "download-source-archive": "downloading source",
    "extract-source-archive": "extracting source",
    "persist-source-archive": "writing source archive",
}


def format_operation_label(operation: str) -> str:
    return _OPERATION_LABELS.get(operation, "work")


def format_phase_label(phase: str) -> str:
    return _PHASE_LABELS.get(phase, "working")


def format_phase_line(operation: str, phase: str, target: str) -> str:
    return f"{format_operation_label(operation)}: {format_phase_label(phase)} {target}"


def format_warning_line(operation: str, target: str, message: str) -> str:
    return f"warning: {format_operation_label(operation)} {target}: {message}"