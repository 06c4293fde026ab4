"""planguard package root."""

from planguard.exceptions import NeverThrown, PlanGuardError
from planguard.invariants import never

__all__ = ["__version__", "NeverThrown", "PlanGuardError", "never"]

__version__ = "0.1.0"
