"""Permanent ignore rules for generated, environment and OS-metadata files.

These paths are runtime-only and never plan-bound, so they are excluded from
both the drift scan and the missing check. They are not configurable.
"""

from __future__ import annotations

IGNORED_DIR_SEGMENTS: frozenset[str] = frozenset(
    {
        "node_modules",
        ".next",
        "dist",
        "build",
        ".turbo",
        ".cache",
        ".vercel",
        ".netlify",
    }
)

IGNORED_FILE_NAMES: frozenset[str] = frozenset(
    {
        "package-lock.json",
        "pnpm-lock.yaml",
        "yarn.lock",
        ".DS_Store",
        "Thumbs.db",
        # Local-only environment files.
        ".env",
        ".env.local",
        ".env.development",
        ".env.production",
    }
)

ENV_FILE_PREFIX = ".env."


def is_ignored_dir_name(name: str) -> bool:
    return name in IGNORED_DIR_SEGMENTS


def is_ignored_file_name(name: str) -> bool:
    if name in IGNORED_FILE_NAMES:
        return True
    return name.startswith(ENV_FILE_PREFIX) and len(name) > len(ENV_FILE_PREFIX)


def should_ignore_rel_path(rel_path: str) -> bool:
    """Return True when a repository-relative path is never plan-tracked."""
    parts = [part for part in rel_path.replace("\\", "/").split("/") if part]
    if not parts:
        return False
    if any(is_ignored_dir_name(part) for part in parts[:-1]):
        return True
    return is_ignored_file_name(parts[-1])
