import logging
import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator


logger = logging.getLogger(__name__)

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")
ENV_PREFIX = "PBCURVE_"


class ConfigurationError(Exception):
    """Raised when the service settings cannot be loaded."""
    pass


class ServiceSettings(BaseModel):
    """Settings for the HTTP service, read from PBCURVE_* environment variables."""
    host: str = Field("127.0.0.1", description="Interface the service binds to")
    port: int = Field(5000, ge=1, le=65535, description="TCP port the service listens on")
    debug: bool = Field(False, description="Run Flask in debug mode")
    log_level: str = Field("INFO", description="Root logging level")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(LOG_LEVELS)}")
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServiceSettings":
        """
        Builds settings from the environment, e.g. PBCURVE_PORT=8080.
        Unset variables fall back to the field defaults.
        """
        environ = os.environ if environ is None else environ
        raw = {}
        for name in cls.model_fields:
            key = ENV_PREFIX + name.upper()
            if key in environ:
                raw[name] = environ[key]

        try:
            return cls(**raw)
        except ValidationError as e:
            bad = ", ".join(ENV_PREFIX + str(err["loc"][0]).upper() for err in e.errors())
            raise ConfigurationError(f"Invalid environment variable(s) {bad}: {e}") from e


def configure_logging(settings: ServiceSettings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug("Logging configured at %s", settings.log_level)
