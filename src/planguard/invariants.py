"""Invariant markers."""

from __future__ import annotations

from typing import NoReturn

from planguard.exceptions import NeverThrown


def never(reason: str = "", **env: object) -> NoReturn:
    """Mark a code path as intentionally unreachable.

    The env payload is carried on the raised exception for diagnostics only.
    """
    raise NeverThrown(reason or "never() marker reached", env=env)
