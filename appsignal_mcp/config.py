"""Runtime settings loaded from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigurationError

API_TOKEN_ENV = "APPSIGNAL_API_TOKEN"
APP_ID_ENV = "APPSIGNAL_APP_ID"
PORT_ENV = "PORT"
HOST_ENV = "HOST"
LOG_LEVEL_ENV = "APPSIGNAL_LOG_LEVEL"

DEFAULT_PORT = 3000
DEFAULT_HOST = "127.0.0.1"
DEFAULT_LOG_LEVEL = "WARNING"


class Settings(BaseModel):
    api_token: str = Field(min_length=1, repr=False)
    app_id: str = Field(min_length=1)
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    host: str = DEFAULT_HOST
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        When ``environ`` is omitted, a ``.env`` file in the working
        directory is loaded first and ``os.environ`` is read.

        Raises:
            ConfigurationError: If the API token or app id is missing, or a
                value cannot be parsed
        """
        if environ is None:
            load_dotenv(find_dotenv(usecwd=True))
            environ = os.environ

        missing = [name for name in (API_TOKEN_ENV, APP_ID_ENV) if not environ.get(name)]
        if missing:
            raise ConfigurationError(
                f"{API_TOKEN_ENV} and {APP_ID_ENV} environment variables are required "
                f"(missing: {', '.join(missing)})"
            )

        values = {
            "api_token": environ[API_TOKEN_ENV],
            "app_id": environ[APP_ID_ENV],
            "port": environ.get(PORT_ENV) or DEFAULT_PORT,
            "host": environ.get(HOST_ENV) or DEFAULT_HOST,
            "log_level": (environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper(),
        }
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e
