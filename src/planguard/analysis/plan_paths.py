"""Extract repository-relative paths referenced by a planning document.

Two lexical forms are recognized:

1) backticked spans on a single line: `apps/campaign_compliance/app/page.tsx`
2) bare tokens rooted in a recognized prefix or naming a root document:
   apps/... db/... scripts/... master_build.md

Every raw candidate goes through ``accept_plan_path`` so prose that merely
contains a root name is never mistaken for a path.
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from planguard.analysis.phase_slice import slice_to_phase
from planguard.guard_paths import PLAN_PATHS, PlanPathConfig

_BACKTICK_RE = re.compile(r"`([^`\n\r]+)`")
_WHITESPACE_RE = re.compile(r"\s")
_TRAILING_PUNCTUATION = frozenset("),.;:")
_STRUCTURAL_PUNCTUATION = frozenset("{};")
_PATH_TAIL = r"[A-Za-z0-9._\-/]+"


@dataclass(frozen=True)
class PlanDocument:
    """A plan read once per run; ``sha256`` covers the bytes as stored on disk."""

    path: Path
    text: str
    sha256: str

    @classmethod
    def from_bytes(cls, path: Path, raw: bytes) -> "PlanDocument":
        return cls(path=path, text=raw.decode("utf-8"), sha256=hashlib.sha256(raw).hexdigest())

    @classmethod
    def from_text(cls, path: Path, text: str) -> "PlanDocument":
        return cls.from_bytes(path, text.encode("utf-8"))


@lru_cache(maxsize=None)
def _bare_token_re(config: PlanPathConfig) -> re.Pattern[str]:
    alternatives = [re.escape(prefix) + _PATH_TAIL for prefix in config.root_prefixes]
    alternatives.extend(re.escape(name) for name in config.root_documents)
    return re.compile(
        r"(?<!\w)(" + "|".join(alternatives) + r")\b",
        re.ASCII,
    )


def accept_plan_path(raw: str, *, config: PlanPathConfig = PLAN_PATHS) -> str | None:
    """Normalize one raw candidate, or return None when it is not a plan path."""
    if not raw:
        return None
    token = raw.strip().replace("\\", "/")
    if token and token[-1] in _TRAILING_PUNCTUATION:
        token = token[:-1]
    if "://" in token:
        return None
    if "`" in token:
        return None
    if any(char in _STRUCTURAL_PUNCTUATION for char in token):
        return None
    # Standalone document titles such as `Phase Log Notes.md` may carry spaces.
    if _WHITESPACE_RE.search(token) and not token.endswith(config.plan_document_suffix):
        return None
    if token.startswith("./"):
        token = token[2:]
    if not config.is_recognized(token):
        return None
    return token


def iter_raw_candidates(text: str, *, config: PlanPathConfig = PLAN_PATHS):
    for match in _BACKTICK_RE.finditer(text):
        yield match.group(1)
    for match in _bare_token_re(config).finditer(text):
        yield match.group(1)


def extract_plan_paths(
    text: str,
    phase: int | None = None,
    *,
    config: PlanPathConfig = PLAN_PATHS,
) -> list[str]:
    """Return the sorted, deduplicated plan paths referenced in ``text``.

    With ``phase`` set, only the ``# PHASE <phase>`` section is considered.
    """
    scoped = slice_to_phase(text, phase) if phase is not None else text
    found: set[str] = set()
    for raw in iter_raw_candidates(scoped, config=config):
        candidate = accept_plan_path(raw, config=config)
        if candidate is not None:
            found.add(candidate)
    return sorted(found)
