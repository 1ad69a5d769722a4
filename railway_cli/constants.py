"""Shared constants for the Railway CLI."""

APP_NAME = "railway"
CLI_VERSION = "3.2.0"

# Per-user config directory under $HOME
CONFIG_DIR_NAME = ".railway"

# Environment variables
ENV_API_TOKEN = "RAILWAY_API_TOKEN"
ENV_PROJECT_TOKEN = "RAILWAY_TOKEN"
ENV_ENVIRONMENT = "RAILWAY_ENV"
ENV_CI = "CI"

# API hosts per deployment environment
PRODUCTION_HOST = "railway.com"
STAGING_HOST = "railway-staging.com"
DEV_HOST = "railway-develop.com"

# Release metadata
GITHUB_API_RELEASE_URL = "https://api.github.com/repos/railwayapp/cli/releases/latest"
RELEASE_USER_AGENT = "railwayapp"

# HTTP timeouts (seconds)
HTTP_TIMEOUT = 10.0

# Logging defaults
DEFAULT_LOG_LEVEL = "WARNING"
