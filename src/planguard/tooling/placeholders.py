"""Create empty placeholders for missing enforced paths.

Only paths already classified as missing are touched; nothing is ever
deleted, and drift is left alone.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Iterable

from planguard.exceptions import PathConfinementError
from planguard.runtime.path_policy import posix_relative

KNOWN_EXTENSIONLESS_FILES: frozenset[str] = frozenset(
    {
        ".gitignore",
        ".npmrc",
        ".nvmrc",
        "Makefile",
        "Dockerfile",
        "LICENSE",
        "Procfile",
    }
)


@dataclass(frozen=True)
class CreatedPaths:
    dirs: tuple[str, ...] = field(default_factory=tuple)
    files: tuple[str, ...] = field(default_factory=tuple)

    @property
    def empty(self) -> bool:
        return not self.dirs and not self.files

    def as_json_dict(self) -> dict[str, list[str]]:
        return {"dirs": list(self.dirs), "files": list(self.files)}


def is_probably_file(token: str) -> bool:
    if token.endswith("/"):
        return False
    name = PurePosixPath(token).name
    if PurePosixPath(name).suffix:
        return True
    return name in KNOWN_EXTENSIONLESS_FILES


def _confined(repo_root: Path, token: str) -> Path:
    target = (repo_root / token).resolve()
    if target != repo_root and repo_root not in target.parents:
        raise PathConfinementError(
            f"Refusing to create {token!r}: it resolves outside {repo_root}",
            token=token,
        )
    return target


def materialize_placeholders(repo_root: Path, missing: Iterable[str]) -> CreatedPaths:
    """Create each missing path as an empty file or a directory."""
    root = repo_root.resolve()
    targets = [(token, _confined(root, token)) for token in missing]
    created_dirs: list[str] = []
    created_files: list[str] = []
    for token, target in targets:
        if is_probably_file(token):
            parent = target.parent
            if not parent.exists():
                parent.mkdir(parents=True, exist_ok=True)
                created_dirs.append(posix_relative(parent, root=root))
            if not target.exists():
                target.touch()
                created_files.append(token)
        elif not target.exists():
            target.mkdir(parents=True, exist_ok=True)
            created_dirs.append(token)
    return CreatedPaths(
        dirs=tuple(sorted(set(created_dirs))),
        files=tuple(sorted(set(created_files))),
    )
