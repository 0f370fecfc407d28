"""Configuration for the dice pipeline and the MCP server."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import DEFAULT_COMMAND, THROTTLED_FIELDS, ThrottleLimits


DEFAULT_THROTTLES = ThrottleLimits(times=100, faces=100, modifier=100, multiplier=100, repeat=100)


@dataclass(frozen=True)
class DiceOptions:
    """Per-call options. Frozen: derive new values with ``merged``, never mutate."""

    command: str = DEFAULT_COMMAND
    throttles: ThrottleLimits = DEFAULT_THROTTLES

    def merged(
        self,
        command: str | None = None,
        throttles: ThrottleLimits | Mapping[str, int | None] | None = None,
    ) -> DiceOptions:
        """Return a copy with the given overrides; mapping throttles overlay the current ones."""

        out = self
        if command:
            out = replace(out, command=command)
        if isinstance(throttles, ThrottleLimits):
            out = replace(out, throttles=throttles)
        elif throttles is not None:
            overrides = {k: v for k, v in throttles.items() if k in THROTTLED_FIELDS}
            out = replace(out, throttles=replace(out.throttles, **overrides))
        return out


DEFAULT_OPTIONS = DiceOptions()


class Settings(BaseSettings):
    default_command: str = Field(default=DEFAULT_COMMAND)

    # --- Throttles (unset = unlimited) ---
    throttle_times: int | None = 100
    throttle_faces: int | None = 100
    throttle_modifier: int | None = 100
    throttle_multiplier: int | None = 100
    throttle_repeat: int | None = 100

    # --- Logging ---
    logging_level: str = "INFO"
    logging_renderer: Literal["json", "console"] = "json"

    model_config = SettingsConfigDict(
        env_prefix="DICE_",
        case_sensitive=False,
        env_file=".env",
        extra="ignore",
    )

    def to_options(self) -> DiceOptions:
        return DiceOptions(
            command=self.default_command or DEFAULT_COMMAND,
            throttles=ThrottleLimits(
                times=self.throttle_times,
                faces=self.throttle_faces,
                modifier=self.throttle_modifier,
                multiplier=self.throttle_multiplier,
                repeat=self.throttle_repeat,
            ),
        )


def load_settings() -> Settings:
    return Settings()
