from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel

MANIFEST_SCHEMA_VERSION = 1


class EnforcementDTO(BaseModel):
    mode: str
    phase: Optional[int] = None
    all: bool = False


class CreatedPathsDTO(BaseModel):
    dirs: List[str] = []
    files: List[str] = []


class RunManifestDTO(BaseModel):
    schema_version: int = MANIFEST_SCHEMA_VERSION
    generated_at: str
    repo_root: str
    plan: str
    plan_hash: str
    enforcement: EnforcementDTO
    watched_roots: List[str]
    plan_allowlist_paths: List[str]
    required_paths: List[str]
    missing_paths: List[str]
    extra_paths: List[str]
    created: Optional[CreatedPathsDTO] = None
