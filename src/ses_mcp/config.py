# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Server configuration.

Settings are read from an INI file (default ``config.ini``) with environment
variables as fallbacks. The environment names match the ones the hosting
platform injects for the worker deployment.

Environment variables:
    SES_MCP_CONFIG - Path to the INI file (default: config.ini)
    AWS_SES_USERNAME - SES SMTP username (documented, unused by simulated sends)
    AWS_SES_PASSWORD - SES SMTP password (documented, unused by simulated sends)
    AWS_REGION - SES region (default: us-east-1)
    EMAIL_DEFAULT_FROM - Sender used when a call omits ``from``
    MCP_PROTOCOL_VERSION - Protocol version announced by ``initialize``
    EMAIL_PROVIDER - Provider label reported by ``/health``
    SES_MCP_HOST - Bind host (default: 0.0.0.0)
    SES_MCP_PORT - Bind port (default: 8000)
    SES_MCP_LOG_LEVEL - Logging level (default: INFO)

Config file sections/keys:
    [aws] username, password, region
    [email] default_from, provider
    [mcp] protocol_version
    [server] host, port
    [logging] level
"""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .errors import ConfigurationError

DEFAULT_REGION = "us-east-1"
DEFAULT_PROTOCOL_VERSION = "2024-11-05"
DEFAULT_PROVIDER = "aws-ses-smtp"


@dataclass(frozen=True)
class ServerConfig:
    """Read-only settings shared by every request."""

    ses_username: str | None = None
    """SMTP credential, required by a real transport."""

    ses_password: str | None = None
    """SMTP credential, required by a real transport."""

    aws_region: str = DEFAULT_REGION
    """Region used to compute the SES SMTP host name."""

    default_from: str | None = None
    """Fallback sender when a ``send_email`` call has no ``from``."""

    protocol_version: str = DEFAULT_PROTOCOL_VERSION
    """Protocol version returned by ``initialize``."""

    provider: str = DEFAULT_PROVIDER
    """Provider label reported by the health check."""

    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    @property
    def smtp_host(self) -> str:
        """SES SMTP endpoint for the configured region."""
        return f"email-smtp.{self.aws_region}.amazonaws.com"

    def missing_credentials(self) -> list[str]:
        """Return the credential settings that are not configured."""
        missing = []
        if not self.ses_username:
            missing.append("AWS_SES_USERNAME")
        if not self.ses_password:
            missing.append("AWS_SES_PASSWORD")
        return missing


def load_config(
    config_path: str | os.PathLike[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> ServerConfig:
    """Build a :class:`ServerConfig` from the INI file and the environment.

    Values in the INI file win over environment variables. Empty strings are
    treated as unset so that blank deployment variables fall back to defaults.
    """
    env = os.environ if environ is None else environ
    path = Path(config_path or env.get("SES_MCP_CONFIG", "config.ini"))
    parser = configparser.ConfigParser()
    parser.read(path)

    def get(section: str, option: str, env_name: str, default: str | None = None) -> str | None:
        value: str | None = None
        if parser.has_option(section, option):
            value = parser.get(section, option)
        if value is None or not value.strip():
            value = env.get(env_name)
        if value is None or not value.strip():
            return default
        return value.strip()

    port_value = get("server", "port", "SES_MCP_PORT", "8000")
    try:
        port = int(port_value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid port: {port_value!r}") from None
    if not 0 < port < 65536:
        raise ConfigurationError(f"Port out of range: {port}")

    return ServerConfig(
        ses_username=get("aws", "username", "AWS_SES_USERNAME"),
        ses_password=get("aws", "password", "AWS_SES_PASSWORD"),
        aws_region=get("aws", "region", "AWS_REGION", DEFAULT_REGION),
        default_from=get("email", "default_from", "EMAIL_DEFAULT_FROM"),
        protocol_version=get("mcp", "protocol_version", "MCP_PROTOCOL_VERSION", DEFAULT_PROTOCOL_VERSION),
        provider=get("email", "provider", "EMAIL_PROVIDER", DEFAULT_PROVIDER),
        host=get("server", "host", "SES_MCP_HOST", "0.0.0.0"),
        port=port,
        log_level=get("logging", "level", "SES_MCP_LOG_LEVEL", "INFO").upper(),
    )


__all__ = [
    "DEFAULT_PROTOCOL_VERSION",
    "DEFAULT_PROVIDER",
    "DEFAULT_REGION",
    "ServerConfig",
    "load_config",
]
