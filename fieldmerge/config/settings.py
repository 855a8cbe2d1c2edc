"""Merge settings loaded from TOML with environment overrides."""
from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Dict, Literal, Mapping, Optional

from pydantic import BaseModel, ValidationError, field_validator

ENV_PREFIX = "FIELDMERGE_"


class MergeSettings(BaseModel):
    """Validated configuration for a FieldMerger."""

    resolution: Literal["most_derived", "least_derived"] = "most_derived"
    include_private: bool = False

    @field_validator("resolution", mode="before")
    @classmethod
    def _normalise_resolution(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower().replace("-", "_")
        return value


def _coerce_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "y"}


def _env_overrides(environ: Mapping[str, str]) -> Dict[str, object]:
    overrides: Dict[str, object] = {}
    if resolution := environ.get(f"{ENV_PREFIX}RESOLUTION"):
        overrides["resolution"] = resolution
    include_private = environ.get(f"{ENV_PREFIX}INCLUDE_PRIVATE")
    if include_private not in (None, ""):
        overrides["include_private"] = _coerce_bool(include_private)
    return overrides


def load_settings(path: Path, environ: Optional[Mapping[str, str]] = None) -> MergeSettings:
    """Read the ``[merge]`` table of a TOML file, then apply environment overrides."""
    raw: Dict[str, object] = {}
    if path.exists():
        with path.open("rb") as handle:
            raw = dict(tomllib.load(handle).get("merge", {}))
    raw.update(_env_overrides(os.environ if environ is None else environ))
    try:
        return MergeSettings(**raw)
    except ValidationError as exc:
        raise ValueError(f"Invalid merge settings in {path}: {exc}") from exc
