import logging
import shlex
import sys
import tomllib
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from smart_learner.domain.constants import CONFIG_DIR_NAME, DEFAULT_INTERVALS
from smart_learner.domain.errors import ConfigError
from smart_learner.domain.models import IntervalSchedule

logger = logging.getLogger(__name__)


def config_file_candidates() -> list[Path]:
    return [
        Path.home() / ".config" / CONFIG_DIR_NAME / "config.toml",
        Path.home() / f".{CONFIG_DIR_NAME}.toml",
    ]


def default_audio_command() -> str | None:
    if sys.platform == "darwin":
        return "afplay"
    return "ffplay -nodisp -autoexit -loglevel quiet"


class AppConfig(BaseSettings):
    """
    Configuration model for smart-learner.
    Supports loading from:
    1. Environment variables (SMART_LEARNER_*)
    2. Config file (~/.config/smart-learner/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="SMART_LEARNER_",
        extra="ignore",
    )

    # Paths
    folder_path: Path = Field(
        default_factory=lambda: Path.home() / CONFIG_DIR_NAME, validate_default=True
    )

    # Scheduling
    intervals: list[int] = Field(default_factory=lambda: list(DEFAULT_INTERVALS))

    # Audio playback; None disables it
    audio_command: str | None = Field(default_factory=default_audio_command)

    verbose: int = 1

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # First existing config file wins
        toml_file = next((f for f in config_file_candidates() if f.exists()), None)

        # Earlier sources take priority
        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("folder_path", mode="before")
    @classmethod
    def resolve_folder_path(cls, v: Any) -> Path:
        return Path(v).expanduser().resolve()

    @field_validator("intervals")
    @classmethod
    def validate_intervals(cls, v: list[int]) -> list[int]:
        # Raises ScheduleError (a ValueError) which pydantic reports as a validation error
        IntervalSchedule(tuple(v))
        return v

    def schedule(self) -> IntervalSchedule:
        return IntervalSchedule(tuple(self.intervals))

    def player_command(self) -> list[str]:
        if not self.audio_command:
            return []
        return shlex.split(self.audio_command)


def save_folder_path(folder: Path) -> Path:
    """
    Remember the deck folder in the config file and return the file written.

    Updates the first existing config file in place, keeping its other keys,
    or creates ~/.config/smart-learner/config.toml.
    """
    candidates = config_file_candidates()
    target = next((f for f in candidates if f.exists()), candidates[0])

    data: dict[str, Any] = {}
    try:
        if target.exists():
            with target.open("rb") as f:
                data = tomllib.load(f)
        data["folder_path"] = str(Path(folder).expanduser().resolve())

        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("wb") as f:
            tomli_w.dump(data, f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Cannot parse {target}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot write {target}: {e}") from e

    logger.info(f"Saved folder_path to {target}")
    return target


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/smart-learner/config.toml (if exists)
    3. Environment variables (SMART_LEARNER_*)
    4. cli_overrides (passed from Typer)
    """
    # Typer passes None for options the user did not set
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
