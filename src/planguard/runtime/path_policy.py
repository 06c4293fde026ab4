from __future__ import annotations

from pathlib import Path

DEFAULT_PLAN_REL_PATH = Path("master_build.md")
MANIFEST_FILE_NAME = "manifest.json"


def resolve_plan_path(plan: Path | None, *, root: Path) -> Path:
    if plan is None:
        return (root / DEFAULT_PLAN_REL_PATH).resolve()
    if plan.is_absolute():
        return plan
    return (root / plan).resolve()


def manifest_path(guard_dir: Path) -> Path:
    return guard_dir / MANIFEST_FILE_NAME


def snapshot_manifest_path(guard_dir: Path, snapshot: str) -> Path:
    return guard_dir / f"manifest.{snapshot}.json"


def posix_relative(path: Path, *, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()
