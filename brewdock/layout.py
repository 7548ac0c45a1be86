"""Filesystem layout for a Homebrew-compatible directory structure."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Layout:
    """All paths derive from the Homebrew prefix.

    In production the prefix is ``/opt/homebrew``; tests use
    :meth:`with_root` to place it under a temporary directory.
    """

    prefix: Path

    @classmethod
    def production(cls) -> Layout:
        """Layout rooted at ``/``, with the prefix at ``/opt/homebrew``."""
        return cls(Path("/opt/homebrew"))

    @classmethod
    def with_root(cls, root: str | os.PathLike[str]) -> Layout:
        """Layout whose prefix lives at ``{root}/opt/homebrew``."""
        return cls(Path(root) / "opt" / "homebrew")

    def cellar(self) -> Path:
        """Cellar directory (``{prefix}/Cellar``)."""
        return self.prefix / "Cellar"

    def opt_dir(self) -> Path:
        """Directory of version-pinned symlinks (``{prefix}/opt``)."""
        return self.prefix / "opt"

    def bin_dir(self) -> Path:
        """Directory of linked executables (``{prefix}/bin``)."""
        return self.prefix / "bin"

    def var_brewdock(self) -> Path:
        """State directory (``{prefix}/var/brewdock``)."""
        return self.prefix / "var" / "brewdock"

    def cache_dir(self) -> Path:
        """Formula cache directory (``{prefix}/var/brewdock/cache``)."""
        return self.var_brewdock() / "cache"

    def blob_dir(self) -> Path:
        """Content-addressed blob directory (``{prefix}/var/brewdock/blobs``)."""
        return self.var_brewdock() / "blobs"

    def store_dir(self) -> Path:
        """Extracted bottle store (``{prefix}/var/brewdock/store``)."""
        return self.var_brewdock() / "store"

    def lock_dir(self) -> Path:
        """Advisory lock directory (``{prefix}/var/brewdock/locks``)."""
        return self.var_brewdock() / "locks"