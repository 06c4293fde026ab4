from __future__ import annotations

import pytest

from planguard.analysis.phase_slice import phase_numbers
from planguard.analysis.plan_paths import (
    PlanDocument,
    accept_plan_path,
    extract_plan_paths,
)
from planguard.guard_paths import PlanPathConfig


def test_extract_plan_paths_collects_backticked_and_bare_tokens(sample_plan: str) -> None:
    assert extract_plan_paths(sample_plan) == [
        "PHASE_LOG.md",
        "apps/campaign_compliance/app/page.tsx",
        "apps/campaign_compliance/components/NavBar.tsx",
        "apps/campaign_compliance/lib/dropdowns.ts",
        "db/sql/001_init.sql",
        "master_build.md",
        "scripts/plan_guard.js",
    ]


def test_extract_plan_paths_scopes_to_phase(sample_plan: str) -> None:
    assert extract_plan_paths(sample_plan, 1) == [
        "apps/campaign_compliance/app/page.tsx",
        "scripts/plan_guard.js",
    ]
    assert extract_plan_paths(sample_plan, 41) == [
        "apps/campaign_compliance/lib/dropdowns.ts",
    ]


def test_extract_plan_paths_returns_empty_for_absent_phase(sample_plan: str) -> None:
    assert extract_plan_paths(sample_plan, 4) == []


def test_full_extraction_is_superset_of_every_phase(sample_plan: str) -> None:
    full = set(extract_plan_paths(sample_plan))
    for phase in phase_numbers(sample_plan):
        assert set(extract_plan_paths(sample_plan, phase)) <= full


def test_extract_plan_paths_is_deterministic_and_deduplicated() -> None:
    text = "scripts/b.js and `scripts/a.js` then scripts/a.js again, `scripts/b.js`"
    first = extract_plan_paths(text)
    assert first == ["scripts/a.js", "scripts/b.js"]
    assert extract_plan_paths(text) == first


def test_bare_tokens_drop_trailing_sentence_punctuation() -> None:
    text = "See apps/web/page.tsx. Also (db/sql/seed.sql), and scripts/run.sh:"
    assert extract_plan_paths(text) == [
        "apps/web/page.tsx",
        "db/sql/seed.sql",
        "scripts/run.sh",
    ]


def test_bare_tokens_require_a_path_boundary() -> None:
    text = "myapps/thing webapps/other happens apps"
    assert extract_plan_paths(text) == []


def test_bare_guard_state_token_is_recognized() -> None:
    assert extract_plan_paths("State lives in .plan_guard/manifest.json") == [
        ".plan_guard/manifest.json",
    ]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("apps/web/page.tsx", "apps/web/page.tsx"),
        ("./apps/web/page.tsx", "apps/web/page.tsx"),
        ("apps\\web\\page.tsx", "apps/web/page.tsx"),
        ("  scripts/run.sh  ", "scripts/run.sh"),
        ("apps/web/page.tsx,", "apps/web/page.tsx"),
        ("apps/web/page.tsx)", "apps/web/page.tsx"),
        ("db/sql/001.sql;", "db/sql/001.sql"),
        ("apps/", "apps/"),
        ("master_build.md", "master_build.md"),
        ("PHASE_LOG.md", "PHASE_LOG.md"),
        ("apps/Phase Notes.md", "apps/Phase Notes.md"),
    ],
)
def test_accept_plan_path_normalizes(raw: str, expected: str) -> None:
    assert accept_plan_path(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "https://apps/example",
        "apps/{id}/route.ts",
        "apps/a;b",
        "apps/web page.tsx",
        "apps/web\tpage.tsx",
        "npm run build",
        "src/planguard/cli.py",
        "application/page.tsx",
        "README.md",
    ],
)
def test_accept_plan_path_rejects_non_paths(raw: str) -> None:
    assert accept_plan_path(raw) is None


def test_backtick_prose_is_not_a_path() -> None:
    text = "Run `npm run dev` before editing `apps/web/page.tsx`"
    assert extract_plan_paths(text) == ["apps/web/page.tsx"]


def test_custom_config_changes_recognized_roots() -> None:
    config = PlanPathConfig(root_prefixes=("src/",), root_documents=("PLAN.md",))
    text = "`src/app.py` apps/ignored.ts PLAN.md"
    assert extract_plan_paths(text, config=config) == ["PLAN.md", "src/app.py"]


def test_plan_document_hash_tracks_content(tmp_path) -> None:
    first = PlanDocument.from_text(tmp_path / "plan.md", "apps/a.ts")
    second = PlanDocument.from_text(tmp_path / "plan.md", "apps/b.ts")
    assert len(first.sha256) == 64
    assert first.sha256 != second.sha256
    assert first == PlanDocument.from_text(tmp_path / "plan.md", "apps/a.ts")
