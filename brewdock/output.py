"""Plain-text rendering of command results."""

from __future__ import annotations

from collections.abc import Sequence

from brewdock.models import (
    CleanupResult,
    DiagnosticEntry,
    FormulaInfo,
    InstalledKeg,
    OutdatedEntry,
    PlanEntry,
    UpgradePlanEntry,
)

_KIB = 1024
_MIB = 1024 * _KIB
_GIB = 1024 * _MIB


def _bulleted(header: str, lines: Sequence[str]) -> str:
    return header + "\n" + "".join(f"  - {line}\n" for line in lines)


def render_install_plan(plan: Sequence[PlanEntry]) -> str:
    if not plan:
        return "Nothing to install.\n"
    return _bulleted(
        "Install plan", [f"{e.name} {e.version} [{e.method}]" for e in plan]
    )


def render_install_summary(installed: Sequence[str]) -> str:
    if not installed:
        return "Nothing installed.\n"
    return _bulleted("Installed", list(installed))


def render_update_dry_run() -> str:
    return "Update plan\n  - refresh formula index\n"


def render_update_summary(count: int) -> str:
    return f"Updated formula index\n  - cached {count} formulae\n"


def render_upgrade_plan(plan: Sequence[UpgradePlanEntry]) -> str:
    if not plan:
        return "Already up to date.\n"
    return _bulleted(
        "Upgrade plan",
        [f"{e.name} {e.from_version} -> {e.to_version} [{e.method}]" for e in plan],
    )


def render_upgrade_summary(upgraded: Sequence[str]) -> str:
    if not upgraded:
        return "Already up to date.\n"
    return _bulleted("Upgraded", list(upgraded))


def render_search_results(pattern: str, results: Sequence[str]) -> str:
    if not results:
        return f'No formulae found for "{pattern}".\n'
    return _bulleted(f'Search results for "{pattern}"', list(results))


def render_info(info: FormulaInfo) -> str:
    lines = [f"{info.name} {info.version}" + (" [keg-only]" if info.keg_only else "")]
    if info.desc is not None:
        lines.append(f"Description: {info.desc}")
    if info.homepage is not None:
        lines.append(f"Homepage: {info.homepage}")
    if info.license is not None:
        lines.append(f"License: {info.license}")
    lines.append(f"Bottle: {'available' if info.bottle_available else 'not available'}")
    installed = info.installed_version if info.installed_version is not None else "no"
    lines.append(f"Installed: {installed}")
    if info.dependencies:
        lines.append(f"Dependencies: {', '.join(info.dependencies)}")
    return "".join(f"{line}\n" for line in lines)


def render_list(kegs: Sequence[InstalledKeg]) -> str:
    if not kegs:
        return "No formulae installed.\n"
    return _bulleted("Installed formulae", [f"{k.name} {k.pkg_version}" for k in kegs])


def render_outdated(entries: Sequence[OutdatedEntry]) -> str:
    if not entries:
        return "All formulae are up to date.\n"
    return _bulleted(
        "Outdated formulae",
        [f"{e.name} {e.current_version} -> {e.latest_version}" for e in entries],
    )


def render_cleanup(result: CleanupResult, dry_run: bool) -> str:
    action = "Cleanup plan" if dry_run else "Cleanup complete"
    if result.blobs_removed + result.stores_removed == 0:
        return f"{action}\n  - nothing to clean up\n"
    return (
        f"{action}\n"
        f"  - blobs: {result.blobs_removed}\n"
        f"  - stores: {result.stores_removed}\n"
        f"  - freed: {format_bytes(result.bytes_freed)}\n"
    )


def render_doctor(diagnostics: Sequence[DiagnosticEntry]) -> str:
    return _bulleted("Doctor", [f"[{d.category}] {d.message}" for d in diagnostics])


def format_bytes(num_bytes: int) -> str:
    """Human-readable size using binary units with one decimal place."""
    if num_bytes >= _GIB:
        return f"{num_bytes / _GIB:.1f} GiB"
    if num_bytes >= _MIB:
        return f"{num_bytes / _MIB:.1f} MiB"
    if num_bytes >= _KIB:
        return f"{num_bytes / _KIB:.1f} KiB"
    return f"{num_bytes} B"