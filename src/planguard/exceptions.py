"""Exception taxonomy for plan-guard runs.

Every ``PlanGuardError`` is a fatal precondition failure: the run stops before
any manifest is written. Missing paths and drift are classification outcomes,
not exceptions.
"""

from __future__ import annotations


class PlanGuardError(RuntimeError):
    """Base class for fatal plan-guard preconditions."""

    precondition = "plan_guard"

    def __init__(self, message: str, **details: object):
        super().__init__(message)
        self.details = dict(details)


class PlanNotFoundError(PlanGuardError):
    precondition = "plan_present"


class PlanUnreadableError(PlanGuardError):
    precondition = "plan_readable"


class NoPlanPathsError(PlanGuardError):
    precondition = "plan_paths_present"


class InvalidPhaseError(PlanGuardError):
    precondition = "phase_positive_integer"


class PhaseHeaderMissingError(PlanGuardError):
    precondition = "phase_header_present"


class NoPhasePathsError(PlanGuardError):
    precondition = "phase_paths_present"


class InvalidSnapshotNameError(PlanGuardError):
    precondition = "snapshot_name_valid"


class PathConfinementError(PlanGuardError):
    precondition = "path_within_repo"


class NeverThrown(RuntimeError):
    """Raised by ``never()`` when a path expected to be unreachable is reached."""

    def __init__(self, message: str, *, env: dict[str, object] | None = None):
        super().__init__(message)
        self.env = dict(env or {})
