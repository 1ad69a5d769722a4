"""
Railway CLI - local configuration and identity resolution.

Persists authentication state and the mapping from local directories to
linked Railway projects, and resolves which project, environment and
service apply to the current working directory.
"""

from railway_cli.constants import APP_NAME, CLI_VERSION

__version__ = CLI_VERSION
__app_name__ = APP_NAME

__all__ = [
    "APP_NAME",
    "CLI_VERSION",
    "__version__",
    "__app_name__",
]
