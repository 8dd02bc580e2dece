"""Process configuration — NS API credentials and server identity."""

from __future__ import annotations

import os

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError

from ns_mcp import __version__

DEFAULT_BASE_URL = "https://gateway.apiportal.ns.nl"


class ConfigError(Exception):
    """Required configuration is missing or malformed."""


class Settings(BaseModel):
    """Configuration built once at startup and passed to the server.

    Read-only after construction; the same instance is shared by the
    API client and the dispatcher for the lifetime of the process.
    """

    model_config = {"frozen": True}

    ns_api_key: str = Field(min_length=1)
    base_url: str = DEFAULT_BASE_URL
    server_name: str = "ns-mcp-server"
    server_version: str = __version__
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, *, dotenv: bool = True) -> Settings:
        """Build settings from environment variables (and ``.env`` if present)."""
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True))

        api_key = os.environ.get("NS_API_KEY")
        if not api_key:
            msg = "NS_API_KEY environment variable is required"
            raise ConfigError(msg)

        values: dict[str, str] = {"ns_api_key": api_key}
        if base_url := os.environ.get("NS_API_BASE_URL"):
            values["base_url"] = base_url
        if log_level := os.environ.get("NS_MCP_LOG_LEVEL"):
            values["log_level"] = log_level.upper()

        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc
