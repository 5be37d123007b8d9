"""Configuration and logging setup for applications using the Canvas client."""

import json
import logging
import os
import pathlib
from collections.abc import Mapping

import pydantic
import structlog

from .client import DEFAULT_API_URL, DEFAULT_TIMEOUT, CanvasClient, CanvasClientBuilder

TOKEN_ENV_VAR = "CANVAS_API_TOKEN"
API_URL_ENV_VAR = "CANVAS_API_URL"
TIMEOUT_ENV_VAR = "CANVAS_API_TIMEOUT"
LOG_LEVEL_ENV_VAR = "CANVAS_LOG_LEVEL"


class CanvasClientConfig(pydantic.BaseModel):
    """Configuration for a :class:`~canvas_api.client.CanvasClient`."""

    model_config = pydantic.ConfigDict(frozen=True)

    token: str = pydantic.Field(description="Canvas access token", repr=False)
    api_url: str = pydantic.Field(DEFAULT_API_URL, description="Base URL for the Canvas API")
    timeout: float = pydantic.Field(
        DEFAULT_TIMEOUT,
        description="Request timeout in seconds",
        gt=0,
    )
    log_level: str = pydantic.Field("INFO", description="Logging level")

    @pydantic.field_validator("api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


def configure_logging(log_level_name: str) -> None:
    """Configure structlog for logfmt output."""
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.EventRenamer("msg"),
            structlog.processors.format_exc_info,
            structlog.processors.LogfmtRenderer(
                key_order=("timestamp", "level", "msg"),
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def load_config(config_path: str | pathlib.Path) -> CanvasClientConfig:
    """Load configuration from a JSON file."""
    path = pathlib.Path(config_path)
    if not path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    with path.open("r") as f:
        data = json.load(f)

    return CanvasClientConfig(**data)


def config_from_env(environ: Mapping[str, str] | None = None) -> CanvasClientConfig:
    """Build configuration from ``CANVAS_*`` environment variables.

    Only ``CANVAS_API_TOKEN`` is required; unset variables fall back to the
    model defaults.

    Raises:
        pydantic.ValidationError: If the token is missing or a value is invalid.
    """
    environ = os.environ if environ is None else environ
    env_fields = {
        "token": TOKEN_ENV_VAR,
        "api_url": API_URL_ENV_VAR,
        "timeout": TIMEOUT_ENV_VAR,
        "log_level": LOG_LEVEL_ENV_VAR,
    }
    data = {field: environ[var] for field, var in env_fields.items() if var in environ}
    return CanvasClientConfig(**data)


def create_client(config: CanvasClientConfig | None = None) -> CanvasClient:
    """Configure logging and build a client from config or the environment.

    Uses :func:`config_from_env` when no config is given. Logging is set up
    with ``config.log_level`` before the client is built.

    Raises:
        pydantic.ValidationError: If the environment config is invalid.
        CreatingHeaderError: If the token cannot be used in a header.
    """
    config = config or config_from_env()
    configure_logging(config.log_level)
    return CanvasClientBuilder.from_config(config).build()
