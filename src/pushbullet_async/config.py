"""
Configuration for the pushbullet command-line tool.
Loads environment variables (and a .env file, if present) and validates them.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

TOKEN_VAR = "PUSHBULLET_TOKEN"
LOG_LEVEL_VAR = "PUSHBULLET_LOG_LEVEL"


def get_log_level() -> str:
    """Log level name from the environment, WARNING if unset."""
    load_dotenv()
    return os.getenv(LOG_LEVEL_VAR, "WARNING").upper()


def get_config() -> dict[str, str]:
    """
    Read the CLI settings from the environment.
    Returns a dict keyed by variable name.
    Raises ValueError naming any required variable that is unset.
    """
    load_dotenv()

    config = {
        # Required
        TOKEN_VAR: os.getenv(TOKEN_VAR, ""),
        # Optional with defaults
        LOG_LEVEL_VAR: get_log_level(),
    }

    missing = [key for key in [TOKEN_VAR] if not config[key]]
    if missing:
        raise ValueError(f"Missing required environment variables: {', '.join(missing)}")

    return config


def validate_config() -> bool:
    """
    Check that the token is configured.
    Meant for a fail-fast check before any request is made.
    """
    try:
        get_config()
        return True
    except ValueError:
        return False
