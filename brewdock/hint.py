"""User-facing hints for well-known failures."""

from __future__ import annotations

from brewdock.errors import (
    BottleAuthError,
    BottleDownloadError,
    BrewdockError,
    ChecksumMismatchError,
    FormulaNetworkError,
    FormulaNotFoundError,
    FormulaUnsupportedError,
    PlatformError,
)

_HINTS: tuple[tuple[type[BrewdockError], str], ...] = (
    (FormulaNotFoundError, "run `bd update` to refresh the formula index"),
    (FormulaUnsupportedError, "this formula cannot be installed as a bottle"),
    (FormulaNetworkError, "check your internet connection"),
    (ChecksumMismatchError, "run `bd update` to refresh the formula index, then retry"),
    (BottleDownloadError, "check your internet connection"),
    (BottleAuthError, "registry authentication failed; check your internet connection"),
    (PlatformError, "brewdock currently supports macOS only"),
)


def _find_brewdock_error(err: BaseException) -> BrewdockError | None:
    seen: set[int] = set()
    current: BaseException | None = err
    while current is not None and id(current) not in seen:
        if isinstance(current, BrewdockError):
            return current
        seen.add(id(current))
        if current.__cause__ is not None:
            current = current.__cause__
        elif not current.__suppress_context__:
            current = current.__context__
        else:
            current = None
    return None


def for_error(err: BaseException) -> str | None:
    """Return a hint for ``err`` or any brewdock error it was raised from."""
    found = _find_brewdock_error(err)
    if found is None:
        return None
    for error_type, hint in _HINTS:
        if isinstance(found, error_type):
            return hint
    return None