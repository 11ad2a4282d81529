"""Locate and load ``greetctl.toml``.

Resolution order: ``--config PATH``, then ``GREETCTL_CONFIG``, then the
nearest ``greetctl.toml`` at or above the start directory. A location
names both the file and the rule that picked it, so a verbose run can say
where its settings came from.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any

from greetctl.errors import ConfigurationError

CONFIG_FILENAME = "greetctl.toml"
CONFIG_ENV_VAR = "GREETCTL_CONFIG"


class ConfigOrigin(StrEnum):
    """How the config file was chosen."""

    DEFAULTS = "defaults"
    FLAG = "--config"
    ENV = CONFIG_ENV_VAR
    WALK_UP = "walk-up"


@dataclass(frozen=True)
class ConfigLocation:
    path: Path | None
    origin: ConfigOrigin

    def describe(self) -> str:
        if self.path is None:
            return "code defaults"
        return f"{self.path} ({self.origin})"


def _ancestors(start: Path) -> Iterator[Path]:
    start = start.resolve()
    yield start
    yield from start.parents


def locate_config(explicit: str | None = None, start: Path | None = None) -> ConfigLocation:
    """Pick the config file for this run.

    An explicit path or ``GREETCTL_CONFIG`` that names a missing file is a
    :class:`ConfigurationError`; a walk-up that finds nothing is not.
    """
    if explicit:
        path = Path(explicit)
        if not path.is_file():
            msg = f"Config file not found: {explicit}"
            raise ConfigurationError(msg)
        return ConfigLocation(path, ConfigOrigin.FLAG)

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path)
        if not path.is_file():
            msg = f"Config file not found: {env_path} (from {CONFIG_ENV_VAR})"
            raise ConfigurationError(msg)
        return ConfigLocation(path, ConfigOrigin.ENV)

    for directory in _ancestors(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return ConfigLocation(candidate, ConfigOrigin.WALK_UP)
    return ConfigLocation(None, ConfigOrigin.DEFAULTS)


def read_config(path: Path) -> dict[str, Any]:
    """Parse *path* as UTF-8 TOML; undecodable or malformed files are configuration errors."""
    try:
        return tomllib.loads(path.read_bytes().decode("utf-8"))
    except (UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigurationError(msg) from exc
