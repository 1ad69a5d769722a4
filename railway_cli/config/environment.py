"""Environment-variable driven settings.

Everything here is a pure function of an :class:`EnvSnapshot`, a frozen
copy of the variables the CLI reads, so resolution never depends on
ad-hoc reads of ``os.environ``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

from railway_cli.constants import (
    CONFIG_DIR_NAME,
    DEV_HOST,
    ENV_API_TOKEN,
    ENV_CI,
    ENV_ENVIRONMENT,
    ENV_PROJECT_TOKEN,
    PRODUCTION_HOST,
    STAGING_HOST,
)


class Environment(Enum):
    """Deployment channel the CLI talks to."""

    PRODUCTION = "production"
    STAGING = "staging"
    DEV = "dev"


_ENVIRONMENT_ALIASES = {
    "production": Environment.PRODUCTION,
    "staging": Environment.STAGING,
    "dev": Environment.DEV,
    "develop": Environment.DEV,
}

_HOSTS = {
    Environment.PRODUCTION: PRODUCTION_HOST,
    Environment.STAGING: STAGING_HOST,
    Environment.DEV: DEV_HOST,
}

_CONFIG_FILE_NAMES = {
    Environment.PRODUCTION: "config.json",
    Environment.STAGING: "config-staging.json",
    Environment.DEV: "config-dev.json",
}


@dataclass(frozen=True)
class EnvSnapshot:
    """The environment variables the CLI cares about, captured once."""

    api_token: Optional[str] = None
    project_token: Optional[str] = None
    environment: Optional[str] = None
    ci: Optional[str] = None

    @classmethod
    def from_mapping(cls, env: Mapping[str, str]) -> "EnvSnapshot":
        return cls(
            api_token=env.get(ENV_API_TOKEN),
            project_token=env.get(ENV_PROJECT_TOKEN),
            environment=env.get(ENV_ENVIRONMENT),
            ci=env.get(ENV_CI),
        )

    @classmethod
    def from_os(cls) -> "EnvSnapshot":
        return cls.from_mapping(os.environ)


def resolve_environment(env: EnvSnapshot) -> Environment:
    """Map ``RAILWAY_ENV`` (case-insensitive) to an :class:`Environment`.

    Unknown or missing values select production.
    """
    if env.environment is None:
        return Environment.PRODUCTION
    return _ENVIRONMENT_ALIASES.get(env.environment.lower(), Environment.PRODUCTION)


def host_for(environment: Environment) -> str:
    return _HOSTS[environment]


def backboard_url(host: str) -> str:
    return f"https://backboard.{host}/graphql/v2"


def relay_host_path(host: str) -> str:
    """Relay server host and path without a scheme (usable for https:// or wss://)."""
    return f"backboard.{host}/relay"


def config_file_name(environment: Environment) -> str:
    return _CONFIG_FILE_NAMES[environment]


def config_relative_path(environment: Environment) -> str:
    """Path of the config file relative to the home directory."""
    return os.path.join(CONFIG_DIR_NAME, config_file_name(environment))


def is_ci(env: EnvSnapshot) -> bool:
    if env.ci is None:
        return False
    return env.ci.strip().lower() == "true"


def resolve_auth_token(env: EnvSnapshot, stored_token: Optional[str]) -> Optional[str]:
    """Return the token to authenticate with, or ``None``.

    ``RAILWAY_API_TOKEN`` wins over the persisted user token; a blank
    persisted token counts as absent.
    """
    if env.api_token is not None:
        return env.api_token
    if stored_token is not None and stored_token.strip():
        return stored_token
    return None
