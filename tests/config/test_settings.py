"""Tests for GreetSettings source precedence and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from greetctl.config.discovery import CONFIG_ENV_VAR, ConfigOrigin
from greetctl.config.settings import GreetSettings
from greetctl.errors import ConfigurationError


def _write_config(directory: Path, body: str) -> Path:
    path = directory / "greetctl.toml"
    path.write_text(body, encoding="utf-8")
    return path


class TestDefaults:
    def test_code_defaults(self, tmp_path: Path) -> None:
        settings = GreetSettings.from_cli(start_dir=tmp_path)
        assert settings.config_path is None
        assert settings.config_origin is ConfigOrigin.DEFAULTS
        assert settings.verbose is False
        assert settings.greet.name_prompt == "Enter your name: "
        assert settings.greet.placeholder == "<null>"
        assert settings.events.log_events is True
        assert settings.events.drain_timeout == 1.0

    def test_frozen(self, tmp_path: Path) -> None:
        settings = GreetSettings.from_cli(start_dir=tmp_path)
        with pytest.raises(ValidationError):
            settings.verbose = True  # type: ignore[misc]


class TestSources:
    def test_toml_discovered_by_walk_up(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, '[greet]\nplaceholder = "stranger"\n')
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        settings = GreetSettings.from_cli(start_dir=nested)
        assert settings.config_path is not None
        assert settings.config_path.resolve() == path.resolve()
        assert settings.config_origin is ConfigOrigin.WALK_UP
        assert settings.greet.placeholder == "stranger"
        assert settings.greet.name_prompt == "Enter your name: "

    def test_env_beats_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_config(tmp_path, '[greet]\nplaceholder = "from-toml"\n')
        monkeypatch.setenv("GREETCTL_GREET__PLACEHOLDER", "from-env")
        settings = GreetSettings.from_cli(start_dir=tmp_path)
        assert settings.greet.placeholder == "from-env"

    def test_cli_flag_beats_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GREETCTL_VERBOSE", "false")
        settings = GreetSettings.from_cli(start_dir=tmp_path, verbose=True)
        assert settings.verbose is True

    def test_unset_flag_does_not_mask_env(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GREETCTL_VERBOSE", "true")
        settings = GreetSettings.from_cli(start_dir=tmp_path, verbose=None)
        assert settings.verbose is True

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        other = tmp_path / "elsewhere"
        other.mkdir()
        path = _write_config(other, "[events]\nlog_events = false\n")
        settings = GreetSettings.from_cli(config_path=str(path), start_dir=tmp_path)
        assert settings.config_path is not None
        assert settings.config_path.resolve() == path.resolve()
        assert settings.config_origin is ConfigOrigin.FLAG
        assert settings.events.log_events is False

    def test_env_var_config_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = _write_config(tmp_path, '[greet]\nplaceholder = "from-env-file"\n')
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        settings = GreetSettings.from_cli(start_dir=tmp_path / "..")
        assert settings.config_origin is ConfigOrigin.ENV
        assert settings.greet.placeholder == "from-env-file"
        assert settings.location.describe() == f"{path} ({CONFIG_ENV_VAR})"

    def test_direct_construction_reads_config_path(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, "[events]\ndrain_timeout = 0.25\n")
        assert GreetSettings(config_path=path).events.drain_timeout == 0.25
        assert GreetSettings().events.drain_timeout == 1.0


class TestErrors:
    def test_missing_explicit_config(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            GreetSettings.from_cli(config_path=str(tmp_path / "nope.toml"))

    def test_invalid_toml(self, tmp_path: Path) -> None:
        _write_config(tmp_path, "[greet\n")
        with pytest.raises(ConfigurationError, match="Invalid TOML"):
            GreetSettings.from_cli(start_dir=tmp_path)

    def test_undecodable_toml(self, tmp_path: Path) -> None:
        (tmp_path / "greetctl.toml").write_bytes(b'[greet]\nplaceholder = "\xff"\n')
        with pytest.raises(ConfigurationError, match="Invalid TOML"):
            GreetSettings.from_cli(start_dir=tmp_path)

    def test_missing_env_var_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "gone.toml"))
        with pytest.raises(ConfigurationError, match="not found"):
            GreetSettings.from_cli(start_dir=tmp_path)

    def test_template_with_unknown_field(self, tmp_path: Path) -> None:
        _write_config(tmp_path, '[greet]\ngreeting = "Hello {name} from {place}"\n')
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            GreetSettings.from_cli(start_dir=tmp_path)

    def test_invalid_values(self, tmp_path: Path) -> None:
        _write_config(tmp_path, '[greet]\ngreeting = "no slot"\n')
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            GreetSettings.from_cli(start_dir=tmp_path)

    def test_negative_drain_timeout(self, tmp_path: Path) -> None:
        _write_config(tmp_path, "[events]\ndrain_timeout = -1\n")
        with pytest.raises(ConfigurationError):
            GreetSettings.from_cli(start_dir=tmp_path)
