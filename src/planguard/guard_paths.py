from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class PlanPathConfig:
    """Path vocabulary shared by extraction, scanning and materialization."""

    root_prefixes: tuple[str, ...] = (
        "apps/",
        "db/",
        "scripts/",
        "public/",
        ".plan_guard/",
    )
    root_documents: tuple[str, ...] = (
        "master_build.md",
        "MASTER_BUILD_DIRECTIONS.md",
        "PHASE_LOG.md",
        "PROTOCOLS.md",
        "PHASE_1_FILELIST.md",
        "PHASE_2_FILELIST.md",
    )
    watched_roots: tuple[str, ...] = (
        "apps/campaign_compliance",
        "db/sql",
        "scripts",
    )
    plan_document_suffix: str = ".md"
    guard_dir_rel: str = ".plan_guard"

    @property
    def recognized_roots(self) -> tuple[str, ...]:
        return self.root_prefixes + self.root_documents

    def is_recognized(self, token: str) -> bool:
        return any(token == root or token.startswith(root) for root in self.recognized_roots)

    def guard_dir(self, *, root: Path) -> Path:
        return root / self.guard_dir_rel


PLAN_PATHS = PlanPathConfig()
