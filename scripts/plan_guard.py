"""Run the plan guard from a source checkout without installing it."""

from __future__ import annotations

import sys
from pathlib import Path

_REPO_ROOT = Path(__file__).resolve().parents[1]
_SRC_PATH = _REPO_ROOT / "src"
if str(_SRC_PATH) not in sys.path:
    sys.path.insert(0, str(_SRC_PATH))

from planguard.cli import main  # noqa: E402


if __name__ == "__main__":
    raise SystemExit(main())
