"""
Settings for compname.

Settings are loaded from defaults first, then from JSON config files in
well-known locations, and finally from environment variables prefixed with
``COMPNAME_``. Later sources override earlier ones.

"""
import logging
from enum import Enum
from pathlib import Path
from typing import Tuple, Type

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

# Default config file locations, later paths take precedence.
WELL_KNOWN_PATHS = [
    '/etc/compname/compname.json',
    '~/.compname.json',
]


class ProviderName(str, Enum):
    """
    Host name providers that can be selected.
    """
    AUTO = "auto"
    SCUTIL = "scutil"
    HOSTNAMECTL = "hostnamectl"
    WINDOWS = "windows"
    SOCKET = "socket"


class Settings(BaseSettings):

    model_config = SettingsConfigDict(env_prefix="COMPNAME_")

    PROVIDER: ProviderName = Field(
        title="Provider",
        default=ProviderName.AUTO,
        description="Where to read the computer name from. `auto` picks by platform.",
    )

    FALLBACK: bool = Field(
        title="Fallback to hostname",
        default=True,
        description="Use the network hostname when no computer name is configured.",
    )

    COMMAND_TIMEOUT: float = Field(
        title="Command timeout",
        default=5.0,
        gt=0,
        description="Seconds to wait for external commands such as `scutil`.",
    )

    LOG_LEVEL: str = Field(
        title="Log level",
        default="WARNING",
        description="Level for log messages written to stderr.",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level {value!r}")
        return level

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """
        Additional settings sources.

        Reads settings from :const:`WELL_KNOWN_PATHS` defined locations.
        """
        json_files = [Path(path).expanduser() for path in WELL_KNOWN_PATHS]
        return (init_settings,
                env_settings,
                JsonConfigSettingsSource(settings_cls, json_file=json_files))  # <- Loads settings from well-known paths
