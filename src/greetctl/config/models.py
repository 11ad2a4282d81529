"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, greetctl.toml only contains
overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class GreetConfig(BaseModel):
    """[greet] section — text used by the greet command."""

    model_config = {"frozen": True}

    name_prompt: str = "Enter your name: "
    greeting: str = "Hello, World! And hello, {name}!"
    exit_prompt: str = "Press Enter to terminate..."
    placeholder: str = "<null>"

    @field_validator("greeting")
    @classmethod
    def _greeting_is_name_template(cls, value: str) -> str:
        if "{name}" not in value:
            msg = "greeting must contain a {name} placeholder"
            raise ValueError(msg)
        try:
            value.format(name="")
        except (AttributeError, IndexError, KeyError, ValueError) as exc:
            msg = f"greeting must only use the {{name}} placeholder: {exc!r}"
            raise ValueError(msg) from exc
        return value


class EventsConfig(BaseModel):
    """[events] section — background event logger behaviour."""

    model_config = {"frozen": True}

    log_events: bool = True
    drain_timeout: float = Field(default=1.0, ge=0)
