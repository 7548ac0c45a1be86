"""Exception hierarchy shared by every brewdock operation."""

from __future__ import annotations


class BrewdockError(Exception):
    """Base class for all brewdock failures."""


# --- platform -----------------------------------------------------------


class PlatformError(BrewdockError):
    """Platform detection or compatibility failure."""


class UnsupportedPlatformError(PlatformError):
    """The host platform is not supported."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        message = "unsupported platform"
        super().__init__(f"{message}: {detail}" if detail else message)


# --- formula ------------------------------------------------------------


class FormulaError(BrewdockError):
    """Formula lookup, parsing or resolution failure."""


class FormulaNotFoundError(FormulaError):
    """No formula with the given name exists in the index."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"formula not found: {name}")


class FormulaUnsupportedError(FormulaError):
    """The formula cannot be installed as a bottle."""

    def __init__(self, name: str, reason: str = "") -> None:
        self.name = name
        self.reason = reason
        message = f"unsupported formula: {name}"
        super().__init__(f"{message} ({reason})" if reason else message)


class FormulaNetworkError(FormulaError):
    """Fetching formula metadata over the network failed."""


class FormulaParseError(FormulaError):
    """Formula metadata could not be parsed."""


class FormulaIoError(FormulaError):
    """A filesystem operation on formula data failed."""


class FormulaDatabaseError(FormulaError):
    """The formula metadata database reported an error."""


class CyclicDependencyError(FormulaError):
    """The dependency graph contains a cycle."""


class InvalidRubySourcePathError(FormulaError):
    """A formula's Ruby source path is malformed."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"invalid ruby source path: {path}")


# --- bottle -------------------------------------------------------------


class BottleError(BrewdockError):
    """Bottle download or verification failure."""


class ChecksumMismatchError(BottleError):
    """A downloaded bottle does not match its expected SHA-256."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"checksum mismatch: expected {expected}, got {actual}")


class BottleDownloadError(BottleError):
    """Downloading a bottle failed."""


class BottleAuthError(BottleError):
    """Authenticating against the bottle registry failed."""


class InvalidSha256Error(BottleError):
    """A value is not a valid hexadecimal SHA-256 digest."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"invalid sha256: {value}")


class BottleIoError(BottleError):
    """A filesystem operation on a bottle failed."""


# --- cellar -------------------------------------------------------------


class CellarError(BrewdockError):
    """Failure while materialising, linking or inspecting kegs."""


# --- source builds ------------------------------------------------------


class SourceBuildError(BrewdockError):
    """Source build planning or execution failure."""


class UnsupportedRequirementError(SourceBuildError):
    """Formula requirements are outside the supported subset."""

    def __init__(self, requirement: str) -> None:
        self.requirement = requirement
        super().__init__(f"unsupported source requirement: {requirement}")


class UnsupportedSourceArchiveError(SourceBuildError):
    """The source URL cannot be fetched by the generic driver."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"unsupported source archive format: {url}")


class MissingSourceChecksumError(SourceBuildError):
    """A source fallback needs a checksum for a verified download."""

    def __init__(self, formula_name: str) -> None:
        self.formula_name = formula_name
        super().__init__(f"missing source checksum for {formula_name}")


class UnsupportedBuildSystemError(SourceBuildError):
    """The extracted source tree has no supported build entry point."""

    def __init__(self, source_dir: str) -> None:
        self.source_dir = source_dir
        super().__init__(f"unsupported source build system in {source_dir}")


class MissingSourceRootError(SourceBuildError):
    """The downloaded archive could not be mapped to a source root."""

    def __init__(self, archive: str) -> None:
        self.archive = archive
        super().__init__(f"failed to determine source root for {archive}")


class CommandFailedError(SourceBuildError):
    """A source build command exited unsuccessfully."""

    def __init__(self, command: str, stderr: str) -> None:
        self.command = command
        self.stderr = stderr
        super().__init__(f"source build command failed: {command}: {stderr}")