"""Locating and reading antgraph configuration.

Two file shapes are recognised while walking up from the working directory,
the way git looks for ``.git/``:

* ``antgraph.toml``, whose top level is the configuration
* ``pyproject.toml`` carrying a ``[tool.antgraph]`` table

The nearest directory holding either wins, and ``antgraph.toml`` wins inside
one directory. ``ANTGRAPH_CONFIG`` (or ``--config``) names a file directly
and skips the walk.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from antgraph.config.models import AntConfig

CONFIG_FILENAME = "antgraph.toml"
PYPROJECT_FILENAME = "pyproject.toml"
CONFIG_ENV_VAR = "ANTGRAPH_CONFIG"


def _declares_tool_table(pyproject: Path) -> bool:
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError:
        return False
    return "antgraph" in data.get("tool", {})


def find_config(start: Path | None = None) -> Path | None:
    """The configuration file in effect for *start* (default: cwd), or None."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        explicit = Path(env_path)
        return explicit if explicit.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        own = directory / CONFIG_FILENAME
        if own.is_file():
            return own
        pyproject = directory / PYPROJECT_FILENAME
        if pyproject.is_file() and _declares_tool_table(pyproject):
            return pyproject
    return None


def read_config_table(path: Path) -> dict[str, Any]:
    """Parse *path* and return the antgraph settings it holds.

    Raises:
        tomllib.TOMLDecodeError: The file is not valid TOML.
    """
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    if path.name == PYPROJECT_FILENAME:
        return dict(data.get("tool", {}).get("antgraph", {}))
    return data


def load_config(path: Path | None = None, cwd: Path | None = None) -> AntConfig:
    """Validated :class:`AntConfig` from *path*, or from discovery below *cwd*.

    Sections absent from the file keep their code defaults; no file at all
    gives the defaults.
    """
    if path is None:
        path = find_config(cwd)
    if path is None:
        return AntConfig()
    return AntConfig.model_validate(read_config_table(path))
