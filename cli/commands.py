"""
Account Commands

One-off commands that manage the credentials file or check the account:
setup, status and quick tweets.
"""

import os

from dotenv import load_dotenv

from config import settings
from config.settings import TwitterCredentials
from services.bot import XBot, QUICK_TWEETS
from utils.exceptions import XPosterError, ConfigurationError
from utils.logger import get_logger
from cli.prompts import ask, confirm, choose

logger = get_logger(__name__)


def _required(label: str):
    return lambda value: None if value else f"{label} is required"


def setup() -> int:
    """
    Prompt for API credentials, write them to .env and verify them.

    Returns:
        int: Process exit code.
    """
    print("\n🔧 Setting up X Poster CLI...\n")

    env_path = settings.get_env_path()
    if os.path.exists(env_path):
        if not confirm(".env file already exists. Do you want to overwrite it?", default=False):
            print("Setup cancelled.")
            return 0

    credentials = TwitterCredentials(
        api_key=ask("Twitter API Key:", _required("API Key")),
        api_secret=ask("Twitter API Secret:", _required("API Secret"), secret=True),
        access_token=ask("Twitter Access Token:", _required("Access Token")),
        access_token_secret=ask("Twitter Access Token Secret:", _required("Access Token Secret"), secret=True),
        bearer_token=ask("Twitter Bearer Token (optional):") or None,
    )

    settings.write_env_file(credentials, env_path)
    logger.info(f"Credentials written to {env_path}")

    load_dotenv(dotenv_path=env_path, override=True)

    print("Testing credentials...")
    try:
        bot = XBot(credentials=settings.load_credentials())
        user = bot.verify_credentials()
    except XPosterError as e:
        print(f"❌ Failed to verify credentials. Please check your API keys.\n   {e}")
        return 1

    print(f"✅ Credentials verified! Authenticated as @{user.data.username}")
    return 0


def status() -> int:
    """
    Report whether .env exists and whether the credentials work.

    Returns:
        int: Process exit code.
    """
    print("\n📊 X Poster CLI Status\n")

    env_path = settings.get_env_path()
    env_exists = os.path.exists(env_path)
    print(f"{'✅' if env_exists else '❌'} .env file: {'Found' if env_exists else 'Not found'}")

    if not env_exists:
        print('\nRun "setup" command to configure your credentials.')
        return 1

    try:
        bot = XBot()
        user = bot.verify_credentials()
    except ConfigurationError as e:
        print(f"❌ Credentials: {e}")
        return 1
    except XPosterError as e:
        logger.debug(f"Credential check failed: {e!r}")
        print("❌ Credentials: Invalid or expired")
        print('Run "setup" command to reconfigure your credentials.')
        return 1

    print(f"✅ Credentials: Valid (authenticated as @{user.data.username})")
    print(f"   User ID: {user.data.id}")
    print(f"   Name: {user.data.name}")
    return 0


def quick_tweet(bot: XBot) -> int:
    """
    Let the user pick one of QUICK_TWEETS and post it.

    Returns:
        int: Process exit code.
    """
    selected = choose("Choose a quick tweet to post:", [(tweet, tweet) for tweet in QUICK_TWEETS])
    print("Posting quick tweet...")
    result = bot.tweet(selected)
    print(f"✅ Quick tweet posted successfully! ID: {result.data['id']}")
    return 0
