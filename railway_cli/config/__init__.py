"""Persisted configuration model, environment selection and storage."""

from railway_cli.config.environment import (
    EnvSnapshot,
    Environment,
    backboard_url,
    config_relative_path,
    host_for,
    is_ci,
    relay_host_path,
    resolve_auth_token,
    resolve_environment,
)
from railway_cli.config.resolution import (
    ancestor_chain,
    find_closest_linked_directory,
    require_closest_linked_directory,
)
from railway_cli.config.schema import LinkedProject, RailwayConfig, RailwayUser
from railway_cli.config.store import (
    LoadResult,
    LoadStatus,
    load_config,
    resolve_home_dir,
    write_config,
)

__all__ = [
    "EnvSnapshot",
    "Environment",
    "LinkedProject",
    "LoadResult",
    "LoadStatus",
    "RailwayConfig",
    "RailwayUser",
    "ancestor_chain",
    "backboard_url",
    "config_relative_path",
    "find_closest_linked_directory",
    "host_for",
    "is_ci",
    "load_config",
    "relay_host_path",
    "require_closest_linked_directory",
    "resolve_auth_token",
    "resolve_environment",
    "resolve_home_dir",
    "write_config",
]
