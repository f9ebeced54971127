from __future__ import annotations

from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import DotEnvSettingsSource, PydanticBaseSettingsSource

from allscreenshots.shared.exceptions import AllscreenshotsConfigError

DEFAULT_BASE_URL = "https://api.allscreenshots.com"
API_KEY_ENV_VAR = "ALLSCREENSHOTS_API_KEY"


class Settings(BaseSettings):
    """
    Settings for the Allscreenshots SDK.

    Values come from explicit keyword arguments, then the process environment,
    then env files. Clients read a fresh instance when they are constructed.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """
        Customize settings source precedence to include a user-level env file.

        Precedence (highest to lowest):
        - init_settings (explicit kwargs)
        - env_settings (process environment)
        - dotenv_settings (project .env)
        - user_dotenv_settings (~/.allscreenshots/.env)
        - file_secret_settings
        """

        user_env_path = Path.home() / ".allscreenshots" / ".env"
        user_dotenv_settings = DotEnvSettingsSource(
            settings_cls,
            env_file=user_env_path,
            env_file_encoding="utf-8",
        )

        return (
            init_settings,
            env_settings,
            dotenv_settings,
            user_dotenv_settings,
            file_secret_settings,
        )

    api_key: str | None = Field(
        default=None,
        description="API key sent in the X-API-Key header",
        validation_alias=API_KEY_ENV_VAR,
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Base URL for the Allscreenshots API",
        validation_alias="ALLSCREENSHOTS_BASE_URL",
    )

    timeout: float = Field(
        default=60.0,
        gt=0,
        description="Per-request transport timeout in seconds",
        validation_alias="ALLSCREENSHOTS_TIMEOUT",
    )

    max_retries: int = Field(
        default=3,
        ge=0,
        description="Retries after the first attempt for transient failures",
        validation_alias="ALLSCREENSHOTS_MAX_RETRIES",
    )


def get_settings() -> Settings:
    """Read the current settings from the environment and env files.

    Raises:
        AllscreenshotsConfigError: A configured value is malformed or out of range.
    """
    try:
        return Settings()
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'settings'}: {error['msg']}"
            for error in e.errors()
        )
        raise AllscreenshotsConfigError(f"Invalid settings: {problems}") from e
