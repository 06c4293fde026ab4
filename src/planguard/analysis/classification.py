"""Missing/drift classification.

Phase-scoping narrows what is required, never what is permitted: ``extra``
is always computed against the full-plan allowlist.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Callable, Iterable

from planguard.analysis.ignore_rules import should_ignore_rel_path

EXIT_ON_PLAN = 0
EXIT_OFF_PLAN = 2
EXIT_DRIFT = 3


@dataclass(frozen=True)
class ClassificationResult:
    missing: tuple[str, ...]
    extra: tuple[str, ...]

    @property
    def on_plan(self) -> bool:
        return not self.missing

    @property
    def drifted(self) -> bool:
        return bool(self.extra)


def normalize_token(token: str) -> str:
    normalized = posixpath.normpath(token.replace("\\", "/"))
    return "" if normalized == "." else normalized


def find_missing(
    enforced: Iterable[str],
    *,
    exists: Callable[[str], bool],
) -> list[str]:
    missing = [
        token
        for token in enforced
        if not should_ignore_rel_path(token) and not exists(token)
    ]
    return sorted(set(missing))


def find_extra(
    allowlist: Iterable[str],
    snapshot_rel_files: Iterable[str],
) -> list[str]:
    permitted = {normalize_token(token) for token in allowlist}
    extra = [
        rel
        for rel in snapshot_rel_files
        if not should_ignore_rel_path(rel) and normalize_token(rel) not in permitted
    ]
    return sorted(set(extra))


def classify(
    enforced: Iterable[str],
    allowlist: Iterable[str],
    snapshot_rel_files: Iterable[str],
    *,
    exists: Callable[[str], bool],
) -> ClassificationResult:
    """Compare plan paths against a filesystem snapshot.

    ``exists`` answers whether a plan token is present; the orchestrator
    passes a real filesystem check, tests pass an in-memory set.
    """
    return ClassificationResult(
        missing=tuple(find_missing(enforced, exists=exists)),
        extra=tuple(find_extra(allowlist, snapshot_rel_files)),
    )


def select_exit_code(result: ClassificationResult) -> int:
    if result.missing:
        return EXIT_OFF_PLAN
    if result.extra:
        return EXIT_DRIFT
    return EXIT_ON_PLAN
