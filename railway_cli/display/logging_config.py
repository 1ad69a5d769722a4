"""Logging setup for the CLI: stderr console handler, optional log file, token masking."""

import copy
import logging
import logging.config
import re
import sys
from typing import Any, Optional, Set

from railway_cli.constants import DEFAULT_LOG_LEVEL

# ── Token redaction ──────────────────────────────────────────────────────

_REDACTED = "***REDACTED***"

# Shorter values are too likely to collide with ordinary log text.
_MIN_TOKEN_LENGTH = 4


class SecretRedactionFilter(logging.Filter):
    """Masks Railway credentials in log records before any handler emits them.

    The CLI registers ``RAILWAY_TOKEN`` and the resolved account token
    (``RAILWAY_API_TOKEN`` or the one stored in ``config.json``) right after
    loading the config, so request headers and config dumps logged at
    DEBUG never reach stderr or ``--log-file`` in clear text.
    """

    def __init__(self) -> None:
        super().__init__()
        self._tokens: Set[str] = set()
        self._pattern: Optional[re.Pattern[str]] = None

    def register(self, token: Optional[str]) -> None:
        """Add *token* to the masked set; unset or very short values are ignored."""
        if not token or len(token) < _MIN_TOKEN_LENGTH:
            return
        self._tokens.add(token)
        # Longest first: a project token may contain an account token.
        alternatives = sorted(self._tokens, key=len, reverse=True)
        self._pattern = re.compile("|".join(re.escape(t) for t in alternatives))

    def _scrub(self, value: Any) -> Any:
        if isinstance(value, str) and self._pattern is not None:
            return self._pattern.sub(_REDACTED, value)
        return value

    def filter(self, record: logging.LogRecord) -> bool:
        if self._pattern is None:
            return True
        record.msg = self._scrub(record.msg)
        if isinstance(record.args, dict):
            record.args = {key: self._scrub(val) for key, val in record.args.items()}
        elif isinstance(record.args, tuple):
            record.args = tuple(self._scrub(arg) for arg in record.args)
        return True


# Shared instance; main() registers the tokens it resolves.
secret_redaction_filter = SecretRedactionFilter()

BASE_LOG_CFG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple_console": {
            "format": "%(levelname)s %(name)s: %(message)s",
        },
        "simple_file": {
            "format": ("%(asctime)s - %(name)25s:%(lineno)-4d - " "%(levelname)-7s - %(message)s"),
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console_handler": {
            "class": "logging.StreamHandler",
            "level": DEFAULT_LOG_LEVEL,
            "formatter": "simple_console",
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        "railway_cli": {
            "handlers": ["console_handler"],
            "propagate": False,
            "level": DEFAULT_LOG_LEVEL,
        },
        "httpx": {
            "handlers": ["console_handler"],
            "propagate": False,
            "level": "WARNING",
        },
    },
    "root": {
        "handlers": ["console_handler"],
        "level": "WARNING",
    },
}

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def setup_logging(log_lvl_str: str = DEFAULT_LOG_LEVEL, log_file: Optional[str] = None) -> str:
    """
    Set up the logging system.

    Console output goes to stderr so stdout stays clean for command
    output. When *log_file* is given, a file handler at DEBUG is added.

    Args:
        log_lvl_str: The desired log level string (e.g., 'debug', 'info').
        log_file: Optional path of a log file.

    Returns:
        The validated log level.
    """
    log_lvl_valid = log_lvl_str.upper()
    if log_lvl_valid not in VALID_LEVELS:
        print(f"Warning: invalid log level '{log_lvl_str}'. Using '{DEFAULT_LOG_LEVEL}'.", file=sys.stderr)
        log_lvl_valid = DEFAULT_LOG_LEVEL

    log_cfg: dict = copy.deepcopy(BASE_LOG_CFG)
    log_cfg["handlers"]["console_handler"]["level"] = log_lvl_valid
    log_cfg["loggers"]["railway_cli"]["level"] = log_lvl_valid
    log_cfg["loggers"]["httpx"]["level"] = "INFO" if log_lvl_valid == "DEBUG" else "WARNING"

    if log_file:
        log_cfg["handlers"]["file_handler"] = {
            "class": "logging.FileHandler",
            "level": "DEBUG",
            "formatter": "simple_file",
            "filename": log_file,
            "encoding": "utf-8",
        }
        for logger_cfg in log_cfg["loggers"].values():
            logger_cfg["handlers"].append("file_handler")
        log_cfg["loggers"]["railway_cli"]["level"] = "DEBUG"

    try:
        logging.config.dictConfig(log_cfg)
    except (ValueError, OSError) as e_log_cfg:
        print(f"Error applying logging configuration: {e_log_cfg}", file=sys.stderr)
        return log_lvl_valid

    # Attach the redaction filter to every configured handler
    configured = {h for name in log_cfg["loggers"] for h in logging.getLogger(name).handlers}
    configured.update(logging.root.handlers)
    for handler in configured:
        handler.addFilter(secret_redaction_filter)

    return log_lvl_valid
