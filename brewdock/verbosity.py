"""Log-level selection derived from the ``--verbose`` / ``--quiet`` flags."""

from __future__ import annotations

import enum


class Verbosity(enum.Enum):
    """How much the command line reports; ``NORMAL`` is the default."""

    VERBOSE = "verbose"
    NORMAL = "normal"
    QUIET = "quiet"

    def is_quiet(self) -> bool:
        """Return True when non-error output should be suppressed."""
        return self is Verbosity.QUIET