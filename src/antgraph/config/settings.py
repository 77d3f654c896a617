"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``ANTGRAPH_*`` prefix, ``__`` between section and key
  3. TOML         — ``antgraph.toml`` or ``[tool.antgraph]`` (see discovery)
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import logging
import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from antgraph.config.discovery import find_config, read_config_table
from antgraph.config.models import IntersectionsConfig, MapConfig, PathsConfig, RenderConfig

logger = logging.getLogger(__name__)

# Config file chosen by from_cli(), read while the settings object is built.
_active_config: ContextVar[Path | None] = ContextVar("_active_config", default=None)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings read from the active configuration file."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None) -> None:
        super().__init__(settings_cls)
        self._table: dict[str, Any] = {}
        if path is not None and path.is_file():
            try:
                self._table = read_config_table(path)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._table.get(field_name), field_name, field_name in self._table

    def __call__(self) -> dict[str, Any]:
        return self._table


class AntSettings(BaseSettings):
    """Everything a command needs to know about its invocation.

    Attributes:
        project_root: Directory relative map paths resolve against (parent
            of the config file, or CWD when there is none).
        config_path: The configuration file in effect, if any.
        map_file: ``--map`` override for ``[map] path``.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ANTGRAPH_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # Global flags
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    map_file: Path | None = None

    # Config sections
    map: MapConfig = Field(default_factory=MapConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    intersections: IntersectionsConfig = Field(default_factory=IntersectionsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Flags, then environment, then the config file."""
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _active_config.get()),
        )

    @property
    def resolved_map_path(self) -> Path:
        """The map file to load, resolved against :attr:`project_root`."""
        path = self.map_file or self.map.path
        return path if path.is_absolute() else self.project_root / path

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> AntSettings:
        """Build settings for one CLI invocation.

        An explicit *config_path* that does not exist is logged and ignored.
        Flags left at None are dropped so they never mask environment or file
        values.
        """
        if config_path:
            explicit = Path(config_path)
            toml_path = explicit if explicit.is_file() else None
            if toml_path is None:
                logger.warning("Config file %s not found; using defaults", explicit)
        else:
            toml_path = find_config(project_root)

        if project_root is None:
            project_root = toml_path.parent if toml_path else Path.cwd()

        overrides = {k: v for k, v in cli_flags.items() if v is not None}
        token = _active_config.set(toml_path)
        try:
            return cls(project_root=project_root, config_path=toml_path, **overrides)
        finally:
            _active_config.reset(token)
