"""Plan guard orchestration.

Contract:
- the planning document is the plan of record
- missing-path enforcement is whole-plan by default, or scoped to one phase
- drift is always checked against the FULL plan allowlist, so files that
  belong to a phase not currently enforced are never reported as drift

Rules:
- an enforced required path that does not exist => OFF-PLAN (exit 2)
- a file under a watched root that the full plan never names => DRIFT (exit 3)

Every fatal precondition raises a ``PlanGuardError`` before any manifest is
written.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

from planguard.analysis.classification import (
    ClassificationResult,
    classify,
    find_missing,
    select_exit_code,
)
from planguard.analysis.phase_slice import find_phase_header
from planguard.analysis.plan_paths import PlanDocument, extract_plan_paths
from planguard.exceptions import (
    NoPhasePathsError,
    NoPlanPathsError,
    PhaseHeaderMissingError,
    PlanNotFoundError,
    PlanUnreadableError,
)
from planguard.guard_paths import PLAN_PATHS, PlanPathConfig
from planguard.invariants import never
from planguard.runtime.path_policy import posix_relative, resolve_plan_path
from planguard.schema import RunManifestDTO
from planguard.tooling.enforcement import Enforcement, EnforcementKind
from planguard.tooling.fs_scan import FilesystemSnapshot, scan_watched_roots
from planguard.tooling.manifest import (
    ManifestPaths,
    build_manifest,
    validate_snapshot_name,
    write_manifest,
)
from planguard.tooling.placeholders import CreatedPaths, materialize_placeholders


@dataclass(frozen=True)
class GuardRequest:
    repo_root: Path
    plan: Path | None = None
    enforcement: Enforcement = field(
        default_factory=lambda: Enforcement(kind=EnforcementKind.ALL_DEFAULT)
    )
    create: bool = False
    snapshot: str | None = None
    config: PlanPathConfig = PLAN_PATHS


@dataclass(frozen=True)
class GuardOutcome:
    repo_root: Path
    plan: PlanDocument
    enforcement: Enforcement
    allowlist: tuple[str, ...]
    required: tuple[str, ...]
    snapshot: FilesystemSnapshot
    result: ClassificationResult
    created: CreatedPaths | None
    manifest: RunManifestDTO
    manifest_paths: ManifestPaths

    @property
    def exit_code(self) -> int:
        return select_exit_code(self.result)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def read_plan_document(path: Path) -> PlanDocument:
    try:
        return PlanDocument.from_bytes(path, path.read_bytes())
    except FileNotFoundError as exc:
        raise PlanNotFoundError(f"Plan not found: {path}", plan=str(path)) from exc
    except (OSError, UnicodeError) as exc:
        raise PlanUnreadableError(f"Plan unreadable: {path}: {exc}", plan=str(path)) from exc


def resolve_required_paths(
    plan: PlanDocument,
    enforcement: Enforcement,
    allowlist: list[str],
    *,
    config: PlanPathConfig = PLAN_PATHS,
) -> list[str]:
    if not enforcement.phase_scoped:
        return list(allowlist)
    phase = enforcement.phase
    if phase is None:
        never("phase-scoped enforcement without a phase", mode=enforcement.mode)
    if find_phase_header(plan.text, phase) is None:
        raise PhaseHeaderMissingError(
            f'No "# PHASE {phase}" header found in {plan.path.name}.',
            phase=phase,
        )
    required = extract_plan_paths(plan.text, phase, config=config)
    if not required:
        raise NoPhasePathsError(
            f'No paths found under "# PHASE {phase}". The section references no plan paths.',
            phase=phase,
        )
    return required


def _filesystem_exists(repo_root: Path) -> Callable[[str], bool]:
    def _exists(token: str) -> bool:
        return (repo_root / token).exists()

    return _exists


def run_plan_guard(
    request: GuardRequest,
    *,
    now_fn: Callable[[], datetime] = _utc_now,
) -> GuardOutcome:
    config = request.config
    repo_root = request.repo_root.resolve()
    if request.snapshot is not None:
        validate_snapshot_name(request.snapshot)

    plan = read_plan_document(resolve_plan_path(request.plan, root=repo_root))
    allowlist = extract_plan_paths(plan.text, config=config)
    if not allowlist:
        raise NoPlanPathsError(
            f"No plan paths were detected in {posix_relative(plan.path, root=repo_root)}. "
            "The guard cannot enforce anything.",
            plan=str(plan.path),
        )
    required = resolve_required_paths(plan, request.enforcement, allowlist, config=config)

    exists = _filesystem_exists(repo_root)
    created: CreatedPaths | None = None
    if request.create:
        created = materialize_placeholders(repo_root, find_missing(required, exists=exists))

    snapshot = scan_watched_roots(repo_root, config.watched_roots)
    result = classify(required, allowlist, snapshot.relative_files(), exists=exists)

    manifest = build_manifest(
        generated_at=now_fn(),
        repo_root=repo_root,
        plan=plan,
        enforcement=request.enforcement,
        watched_roots=config.watched_roots,
        allowlist=allowlist,
        required=required,
        result=result,
        created=created,
    )
    manifest_paths = write_manifest(
        manifest,
        guard_dir=config.guard_dir(root=repo_root),
        snapshot=request.snapshot,
    )
    return GuardOutcome(
        repo_root=repo_root,
        plan=plan,
        enforcement=request.enforcement,
        allowlist=tuple(allowlist),
        required=tuple(required),
        snapshot=snapshot,
        result=result,
        created=created,
        manifest=manifest,
        manifest_paths=manifest_paths,
    )
