from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from planguard.exceptions import InvalidPhaseError
from planguard.invariants import never

_PHASE_TOKEN_RE = re.compile(r"^[0-9]+$")


class EnforcementKind(str, Enum):
    ALL = "ALL"
    PHASE = "PHASE"
    ALL_DEFAULT = "ALL_DEFAULT"


@dataclass(frozen=True)
class Enforcement:
    kind: EnforcementKind
    phase: int | None = None
    all: bool = False

    def __post_init__(self) -> None:
        if (self.kind is EnforcementKind.PHASE) != (self.phase is not None):
            never("phase enforcement requires exactly one phase", kind=self.kind.value, phase=self.phase)

    @property
    def mode(self) -> str:
        if self.kind is EnforcementKind.PHASE:
            return f"PHASE_{self.phase}"
        return self.kind.value

    @property
    def phase_scoped(self) -> bool:
        return self.kind is EnforcementKind.PHASE

    def as_json_dict(self) -> dict[str, object]:
        return {"mode": self.mode, "phase": self.phase, "all": self.all}


def parse_phase(raw: str) -> int:
    text = raw.strip()
    if not _PHASE_TOKEN_RE.match(text) or int(text) <= 0:
        raise InvalidPhaseError(f"Invalid --phase value: {raw}", phase=raw)
    return int(text)


def resolve_enforcement(*, all_phases: bool, phase_raw: str | None) -> Enforcement:
    """Resolve the missing-check scope: --all, then --phase, then the full-plan default.

    The phase token is not validated when --all overrides it.
    """
    if all_phases:
        return Enforcement(kind=EnforcementKind.ALL, all=True)
    if phase_raw is not None and phase_raw.strip():
        return Enforcement(kind=EnforcementKind.PHASE, phase=parse_phase(phase_raw))
    return Enforcement(kind=EnforcementKind.ALL_DEFAULT)
