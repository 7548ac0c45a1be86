"""Value types that describe plans, formulae and results shown to the user."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union


class CellarType(enum.Enum):
    """Relocation requirement declared by a bottle."""

    ANY = ":any"
    ANY_SKIP_RELOCATION = ":any_skip_relocation"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SelectedBottle:
    """The bottle picked for the host platform."""

    tag: str
    url: str
    sha256: str
    cellar: Union[CellarType, Path]


@dataclass(frozen=True)
class SourceBuildPlan:
    """Everything needed to build a formula from its source archive."""

    formula_name: str
    version: str
    source_url: str
    source_checksum: str | None
    build_dependencies: tuple[str, ...]
    runtime_dependencies: tuple[str, ...]
    prefix: Path
    cellar_path: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "build_dependencies", tuple(self.build_dependencies))
        object.__setattr__(self, "runtime_dependencies", tuple(self.runtime_dependencies))
        object.__setattr__(self, "prefix", Path(self.prefix))
        object.__setattr__(self, "cellar_path", Path(self.cellar_path))


@dataclass(frozen=True)
class BottleMethod:
    """Install from a prebuilt bottle."""

    bottle: SelectedBottle

    def __str__(self) -> str:
        return f"bottle:{self.bottle.tag}"


@dataclass(frozen=True)
class SourceMethod:
    """Install by building from source."""

    plan: SourceBuildPlan

    def __str__(self) -> str:
        return "source"


InstallMethod = Union[BottleMethod, SourceMethod]


@dataclass(frozen=True)
class PlanEntry:
    """One formula in an install plan."""

    name: str
    version: str
    method: InstallMethod


@dataclass(frozen=True)
class UpgradePlanEntry:
    """One formula in an upgrade plan."""

    name: str
    from_version: str
    to_version: str
    method: InstallMethod


@dataclass(frozen=True)
class FormulaInfo:
    """Details about a formula as shown by ``info``."""

    name: str
    version: str
    desc: str | None = None
    homepage: str | None = None
    license: str | None = None
    keg_only: bool = False
    dependencies: tuple[str, ...] = field(default_factory=tuple)
    bottle_available: bool = False
    installed_version: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "dependencies", tuple(self.dependencies))


@dataclass(frozen=True)
class InstalledKeg:
    """An installed keg in the cellar."""

    name: str
    pkg_version: str
    path: Path | None = None


@dataclass(frozen=True)
class OutdatedEntry:
    """An installed formula with a newer version available."""

    name: str
    current_version: str
    latest_version: str


@dataclass(frozen=True)
class CleanupResult:
    """What a cleanup removed, or would remove."""

    blobs_removed: int = 0
    stores_removed: int = 0
    bytes_freed: int = 0


class DiagnosticCategory(enum.Enum):
    """Severity of a doctor diagnostic."""

    OK = "ok"
    WARNING = "warning"
    ERROR = "error"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DiagnosticEntry:
    """One finding reported by ``doctor``."""

    category: DiagnosticCategory
    message: str