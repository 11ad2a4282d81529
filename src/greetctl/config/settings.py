"""GreetSettings — one frozen object built from flags, env vars and TOML.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``GREETCTL_*`` prefix, ``__`` for nested sections
  3. TOML file    — the file named by ``config_path``
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from greetctl.config.discovery import ConfigLocation, ConfigOrigin, locate_config, read_config
from greetctl.config.models import EventsConfig, GreetConfig
from greetctl.errors import ConfigurationError


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings layer backed by a parsed ``greetctl.toml``; empty without a file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data = read_config(toml_path) if toml_path is not None else {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


class GreetSettings(BaseSettings):
    """Unified settings for greetctl.

    Stored on the Click context object at the CLI root and handed to every
    command through :class:`~greetctl.services.base.CommandDeps`.

    Attributes:
        config_path: Config file the TOML layer is read from, or None when
            running on env vars and defaults only.
        config_origin: Which rule chose ``config_path``.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "GREETCTL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None
    config_origin: ConfigOrigin = ConfigOrigin.DEFAULTS

    verbose: bool = False
    log_json: bool = False
    no_color: bool = False

    greet: GreetConfig = Field(default_factory=GreetConfig)
    events: EventsConfig = Field(default_factory=EventsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Read TOML from the ``config_path`` init kwarg, below env vars."""
        config_path = init_settings().get("config_path")
        toml_path = Path(config_path) if config_path is not None else None
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @property
    def location(self) -> ConfigLocation:
        return ConfigLocation(self.config_path, self.config_origin)

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start_dir: Path | None = None,
        **cli_flags: Any,
    ) -> GreetSettings:
        """Construct settings from a CLI invocation.

        Resolves the config file with :func:`locate_config` and applies CLI
        flags as highest-priority overrides. Flags left at ``None`` are
        dropped so they do not mask env or TOML values.

        Raises:
            ConfigurationError: The file is missing, unreadable as TOML, or
                any source holds an invalid value.
        """
        location = locate_config(config_path, start_dir)
        overrides = {k: v for k, v in cli_flags.items() if v is not None}
        try:
            return cls(
                config_path=location.path,
                config_origin=location.origin,
                **overrides,
            )
        except ValidationError as exc:
            source = location.path or "environment"
            msg = f"Invalid configuration ({source}): {exc}"
            raise ConfigurationError(msg) from exc
