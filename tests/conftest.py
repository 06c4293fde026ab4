from __future__ import annotations

import sys
import textwrap
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


import pytest

from tests.env_helpers import restore_env as _restore_env
from tests.env_helpers import set_env as _set_env

SAMPLE_PLAN = textwrap.dedent(
    """
    # Campaign Compliance master build

    Root docs: master_build.md, PHASE_LOG.md

    # PHASE 1
    - `apps/campaign_compliance/app/page.tsx`
    - scripts/plan_guard.js

    # PHASE 2
    - `db/sql/001_init.sql`
    - apps/campaign_compliance/components/NavBar.tsx

    # PHASE 41
    - `apps/campaign_compliance/lib/dropdowns.ts`
    """
).lstrip()


@pytest.fixture
def env_scope():
    return _set_env


@pytest.fixture
def restore_env():
    return _restore_env


@pytest.fixture
def sample_plan() -> str:
    return SAMPLE_PLAN


@pytest.fixture
def make_repo(tmp_path: Path):
    def _make(
        plan: str | None,
        files: list[str] | tuple[str, ...] = (),
        *,
        plan_name: str = "master_build.md",
    ) -> Path:
        repo = tmp_path / "repo"
        repo.mkdir(parents=True, exist_ok=True)
        if plan is not None:
            plan_path = repo / plan_name
            plan_path.parent.mkdir(parents=True, exist_ok=True)
            plan_path.write_text(plan, encoding="utf-8")
        for rel in files:
            target = repo / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text("", encoding="utf-8")
        return repo

    return _make
