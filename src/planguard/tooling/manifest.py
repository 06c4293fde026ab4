"""Run manifest assembly and persistence.

``manifest.json`` always holds the latest run. A named snapshot adds
``manifest.<name>.json`` beside it and leaves other snapshots untouched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from pydantic import ValidationError

from planguard.analysis.classification import ClassificationResult
from planguard.analysis.plan_paths import PlanDocument
from planguard.exceptions import InvalidSnapshotNameError
from planguard.runtime import json_io
from planguard.runtime.path_policy import manifest_path, posix_relative, snapshot_manifest_path
from planguard.schema import CreatedPathsDTO, EnforcementDTO, RunManifestDTO
from planguard.tooling.enforcement import Enforcement
from planguard.tooling.placeholders import CreatedPaths

_SNAPSHOT_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


@dataclass(frozen=True)
class ManifestPaths:
    manifest: Path
    snapshot: Path | None = None


def validate_snapshot_name(name: str) -> str:
    cleaned = name.strip()
    if not _SNAPSHOT_NAME_RE.match(cleaned):
        raise InvalidSnapshotNameError(
            f"Invalid --snapshot name: {name!r} (use letters, digits, '.', '_' or '-')",
            snapshot=name,
        )
    return cleaned


def build_manifest(
    *,
    generated_at: datetime,
    repo_root: Path,
    plan: PlanDocument,
    enforcement: Enforcement,
    watched_roots: Sequence[str],
    allowlist: Sequence[str],
    required: Sequence[str],
    result: ClassificationResult,
    created: CreatedPaths | None,
) -> RunManifestDTO:
    return RunManifestDTO(
        generated_at=generated_at.astimezone(timezone.utc).isoformat().replace("+00:00", "Z"),
        repo_root=str(repo_root),
        plan=posix_relative(plan.path, root=repo_root),
        plan_hash=plan.sha256,
        enforcement=EnforcementDTO(**enforcement.as_json_dict()),
        watched_roots=list(watched_roots),
        plan_allowlist_paths=list(allowlist),
        required_paths=list(required),
        missing_paths=list(result.missing),
        extra_paths=list(result.extra),
        created=CreatedPathsDTO(**created.as_json_dict()) if created is not None else None,
    )


def write_manifest(
    manifest: RunManifestDTO,
    *,
    guard_dir: Path,
    snapshot: str | None = None,
) -> ManifestPaths:
    snapshot_name = validate_snapshot_name(snapshot) if snapshot is not None else None
    payload = manifest.model_dump()
    primary = json_io.write_json_pretty(manifest_path(guard_dir), payload)
    if snapshot_name is None:
        return ManifestPaths(manifest=primary)
    snap = json_io.write_json_pretty(snapshot_manifest_path(guard_dir, snapshot_name), payload)
    return ManifestPaths(manifest=primary, snapshot=snap)


def load_manifest(path: Path) -> RunManifestDTO | None:
    payload = json_io.load_json_object_path(path)
    if not payload:
        return None
    try:
        return RunManifestDTO.model_validate(payload)
    except ValidationError:
        return None
