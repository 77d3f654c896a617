"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, antgraph.toml only contains
overrides. An empty (or missing) antgraph.toml is a valid configuration.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from antgraph.domain.types import Narrowing


class MapConfig(BaseModel):
    """[map] section."""

    model_config = {"frozen": True}

    path: Path = Path("data/mapa.bin")
    blank: str = "."
    create_default: bool = True

    @field_validator("blank")
    @classmethod
    def _single_char(cls, value: str) -> str:
        if len(value) != 1:
            msg = f"blank must be a single character, got {value!r}"
            raise ValueError(msg)
        return value


class RenderConfig(BaseModel):
    """[render] section."""

    model_config = {"frozen": True}

    interference_marker: str = Field(default="#", min_length=1, max_length=1)
    show_interference: bool = True


class PathsConfig(BaseModel):
    """[paths] section."""

    model_config = {"frozen": True}

    max_paths: int | None = Field(default=None, ge=1)


class IntersectionsConfig(BaseModel):
    """[intersections] section."""

    model_config = {"frozen": True}

    narrowing: Narrowing = Narrowing.TRUNCATE


class AntConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    map: MapConfig = Field(default_factory=MapConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    intersections: IntersectionsConfig = Field(default_factory=IntersectionsConfig)
