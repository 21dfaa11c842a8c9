import logging
import sys
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)


def config_files() -> list[Path]:
    return [
        Path.home() / ".config/cardwise/config.toml",
        Path.home() / ".cardwise.toml",
    ]


class AppConfig(BaseSettings):
    """
    Configuration model for cardwise.
    Supports loading from:
    1. Config file (~/.config/cardwise/config.toml or ~/.cardwise.toml)
    2. Environment variables (CARDWISE_*)
    3. Manual overrides
    """

    model_config = SettingsConfigDict(
        env_prefix="CARDWISE_",
        extra="ignore",
    )

    # Storage
    store_backend: Literal["yaml", "memory"] = "yaml"
    deck_dir: Path = Field(
        default_factory=lambda: Path.home() / ".config/cardwise/decks", validate_default=True
    )

    # Composer defaults
    default_max_cards: int = Field(default=20, ge=0)
    default_cards_per_deck: int | None = Field(default=None, ge=0)
    default_shuffle_mode: Literal["round-robin", "random"] = "random"
    shuffle_seed: int | None = None

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
        # Find the first existing file
        toml_file = next((f for f in config_files() if f.exists()), None)

        # Earlier sources win: overrides, then env, then file
        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("deck_dir", mode="before")
    @classmethod
    def resolve_deck_dir(cls, v: Any) -> Path:
        return Path(v).expanduser().resolve()


def resolve_config(overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/cardwise/config.toml (if exists)
    3. Environment variables (CARDWISE_*)
    4. overrides (None values are ignored)
    """
    cleaned = {k: v for k, v in (overrides or {}).items() if v is not None}
    return AppConfig(**cleaned)


def configure_logging(config: AppConfig) -> None:
    """Route log records to stderr at a level derived from `config.verbose`."""
    if config.verbose <= 0:
        level = logging.WARNING
    elif config.verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(levelname)s:%(name)s:%(message)s",
        stream=sys.stderr,
        force=True,
    )
