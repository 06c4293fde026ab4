from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from planguard.analysis.ignore_rules import is_ignored_dir_name, should_ignore_rel_path
from planguard.runtime.path_policy import posix_relative


@dataclass(frozen=True)
class FilesystemSnapshot:
    repo_root: Path
    watched_roots: tuple[str, ...]
    files: tuple[Path, ...]

    def relative_files(self) -> list[str]:
        return [posix_relative(path, root=self.repo_root) for path in self.files]


def list_files_under(root: Path, repo_root: Path) -> list[Path]:
    """Enumerate files beneath ``root``, skipping ignored paths.

    Only regular files are listed; symlinks are neither followed nor
    reported. Read errors propagate: a partial walk would make drift
    detection unsound.
    """
    out: list[Path] = []
    if not root.exists():
        return out
    pending = [root]
    while pending:
        directory = pending.pop()
        with os.scandir(directory) as entries:
            for entry in entries:
                full = Path(entry.path)
                if entry.is_dir(follow_symlinks=False):
                    if not is_ignored_dir_name(entry.name):
                        pending.append(full)
                    continue
                if not entry.is_file(follow_symlinks=False):
                    continue
                if should_ignore_rel_path(posix_relative(full, root=repo_root)):
                    continue
                out.append(full)
    return sorted(out, key=lambda path: path.as_posix())


def scan_watched_roots(repo_root: Path, watched_roots: Iterable[str]) -> FilesystemSnapshot:
    roots = tuple(watched_roots)
    files: set[Path] = set()
    for rel in roots:
        files.update(list_files_under(repo_root / rel, repo_root))
    return FilesystemSnapshot(
        repo_root=repo_root,
        watched_roots=roots,
        files=tuple(
            sorted(files, key=lambda path: path.as_posix())
        ),
    )
