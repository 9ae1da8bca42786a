"""
Configuration Settings for X Poster

This module centralizes all configuration settings for the X Poster application,
including the Twitter API credentials and application constants.

Credentials are read once into an immutable TwitterCredentials value that is
passed to the services that need it; nothing else reads the environment.
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from utils.exceptions import ConfigurationError


def get_env_path() -> str:
    """Return the absolute path of the .env file in the current working directory."""
    return str(Path.cwd() / ".env")


# Load environment variables from .env file
load_dotenv(dotenv_path=get_env_path())

# =============================================================================
# Twitter API Authentication
# =============================================================================

ENV_API_KEY = "TWITTER_API_KEY"
ENV_API_SECRET = "TWITTER_API_SECRET"
ENV_ACCESS_TOKEN = "TWITTER_ACCESS_TOKEN"
ENV_ACCESS_TOKEN_SECRET = "TWITTER_ACCESS_TOKEN_SECRET"
ENV_BEARER_TOKEN = "TWITTER_BEARER_TOKEN"

MISSING_CREDENTIALS_HINT = "Please check your .env file or run the setup command."

# =============================================================================
# Twitter Settings
# =============================================================================

TWITTER_CHARACTER_LIMIT = 280        # Twitter's character limit
THREAD_POST_DELAY = 1.0              # Seconds to wait between tweets of a thread
DEFAULT_RECENT_TWEETS = 10           # Default number of recent tweets to fetch
MIN_RECENT_TWEETS = 5                # Twitter API min results per request
MAX_RECENT_TWEETS = 100              # Twitter API max results per request
TWITTER_IMAGE_TIMEOUT = 10           # Seconds timeout for image download
SUPPORTED_IMAGE_EXTENSIONS = ['.jpg', '.jpeg', '.png', '.gif', '.webp']

# =============================================================================
# Scheduling Settings
# =============================================================================

SCHEDULE_TIME_FORMAT = "%Y-%m-%d %H:%M"
SCHEDULE_MISFIRE_GRACE_TIME = 60     # Seconds a late scheduled post may still fire

# =============================================================================
# Logging Settings
# =============================================================================

DEFAULT_LOG_FILE = "x_poster.log"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class TwitterCredentials:
    """Immutable set of Twitter API credentials."""
    api_key: str
    api_secret: str
    access_token: str
    access_token_secret: str
    bearer_token: Optional[str] = None


# Field name -> environment variable, in declaration order
CREDENTIAL_ENV_VARS = {
    "api_key": ENV_API_KEY,
    "api_secret": ENV_API_SECRET,
    "access_token": ENV_ACCESS_TOKEN,
    "access_token_secret": ENV_ACCESS_TOKEN_SECRET,
    "bearer_token": ENV_BEARER_TOKEN,
}

REQUIRED_CREDENTIALS = ("api_key", "api_secret", "access_token", "access_token_secret")


def load_credentials(environ: Optional[Mapping[str, str]] = None) -> TwitterCredentials:
    """
    Load the Twitter API credentials from the environment.

    Args:
        environ: Mapping to read from. Defaults to ``os.environ``.

    Returns:
        TwitterCredentials: The loaded credentials.

    Raises:
        ConfigurationError: If any required credential is missing or empty.
            Every missing field is reported, not only the first.
    """
    if environ is None:
        environ = os.environ

    values = {name: environ.get(var, "") for name, var in CREDENTIAL_ENV_VARS.items()}

    missing = [name for name in REQUIRED_CREDENTIALS if not values[name]]
    if missing:
        raise ConfigurationError(
            f"Missing required Twitter API credentials: {', '.join(missing)}"
            f"\n\n{MISSING_CREDENTIALS_HINT}",
            missing=missing
        )

    return TwitterCredentials(
        api_key=values["api_key"],
        api_secret=values["api_secret"],
        access_token=values["access_token"],
        access_token_secret=values["access_token_secret"],
        bearer_token=values["bearer_token"] or None,
    )


def write_env_file(credentials: TwitterCredentials, path: Optional[str] = None) -> str:
    """
    Write credentials to a .env file.

    Args:
        credentials: The credentials to store.
        path: Target file. Defaults to get_env_path().

    Returns:
        str: The path that was written.
    """
    path = path or get_env_path()

    lines = ["# X (Twitter) API Credentials"]
    for name in REQUIRED_CREDENTIALS:
        lines.append(f"{CREDENTIAL_ENV_VARS[name]}={getattr(credentials, name)}")
    if credentials.bearer_token:
        lines.append(f"{ENV_BEARER_TOKEN}={credentials.bearer_token}")
    else:
        lines.append(f"# {ENV_BEARER_TOKEN}=your_bearer_token_here")

    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")

    return path


def get_config_summary(credentials: Optional[TwitterCredentials]) -> dict:
    """
    Returns a summary of current configuration (without sensitive values).
    Useful for logging startup state.
    """
    present = {f.name: bool(credentials and getattr(credentials, f.name))
               for f in fields(TwitterCredentials)}
    return {
        "env_file": {
            "path": get_env_path(),
            "exists": os.path.exists(get_env_path()),
        },
        "credentials": present,
        "twitter_settings": {
            "character_limit": TWITTER_CHARACTER_LIMIT,
            "thread_post_delay": THREAD_POST_DELAY,
            "default_recent_tweets": DEFAULT_RECENT_TWEETS,
        },
    }
