"""
Helper Utility Module

This module provides the input validation helpers used by the X Poster CLI.
Each validator returns an error message for the user, or None when the
input is acceptable.
"""

import os
from datetime import datetime
from typing import Optional, List
from urllib.parse import urlparse

from config import settings


def is_valid_url(url: str) -> bool:
    """
    Check if a URL is valid.

    Args:
        url: The URL to validate

    Returns:
        bool: True if the URL is valid, False otherwise
    """
    try:
        result = urlparse(url)
        return all([result.scheme in ("http", "https"), result.netloc])
    except Exception:
        return False


def validate_tweet_text(text: str) -> Optional[str]:
    """
    Validate the text of a single tweet.

    Args:
        text: The tweet text

    Returns:
        str: Error message, or None if the text can be posted
    """
    if len(text) == 0:
        return 'Tweet cannot be empty!'
    if len(text) > settings.TWITTER_CHARACTER_LIMIT:
        return f'Tweet is too long! Maximum {settings.TWITTER_CHARACTER_LIMIT} characters.'
    return None


def validate_image_path(path: str) -> Optional[str]:
    """
    Validate an image given as a local path or an http(s) URL.

    Args:
        path: The image location

    Returns:
        str: Error message, or None if the image can be uploaded
    """
    if len(path) == 0:
        return 'Image path cannot be empty!'

    if is_valid_url(path):
        ext = os.path.splitext(urlparse(path).path)[1].lower()
    else:
        if not os.path.exists(path):
            return 'File does not exist!'
        ext = os.path.splitext(path)[1].lower()

    if ext not in settings.SUPPORTED_IMAGE_EXTENSIONS:
        return 'Unsupported image format! Use: jpg, jpeg, png, gif, webp'
    return None


def split_thread_text(text: str) -> List[str]:
    """
    Split editor input into thread tweets, one per non-blank line.

    Args:
        text: Raw multi-line input

    Returns:
        List[str]: The tweets in order
    """
    return [line.strip() for line in text.strip().splitlines() if line.strip()]


def validate_thread(tweets: List[str]) -> Optional[str]:
    """
    Validate the tweets of a thread.

    Args:
        tweets: Thread tweets as returned by split_thread_text()

    Returns:
        str: Error message, or None if the thread can be posted
    """
    if not tweets:
        return 'Thread cannot be empty!'
    if len(tweets) < 2:
        return 'Thread must have at least 2 tweets!'
    if any(len(tweet) > settings.TWITTER_CHARACTER_LIMIT for tweet in tweets):
        return f'One or more tweets exceed {settings.TWITTER_CHARACTER_LIMIT} characters!'
    return None


def parse_schedule_time(value: str, now: Optional[datetime] = None) -> datetime:
    """
    Parse a schedule time in SCHEDULE_TIME_FORMAT that lies in the future.

    Args:
        value: User input such as "2025-01-31 09:30"
        now: Reference time, defaults to datetime.now()

    Returns:
        datetime: The parsed local time

    Raises:
        ValueError: With the message to show the user
    """
    try:
        when = datetime.strptime(value.strip(), settings.SCHEDULE_TIME_FORMAT)
    except ValueError:
        raise ValueError('Invalid date format! Use: YYYY-MM-DD HH:MM') from None

    if when <= (now or datetime.now()):
        raise ValueError('Schedule time must be in the future!')
    return when


def validate_tweet_count(count: int) -> Optional[str]:
    """
    Validate how many recent tweets to fetch.

    Returns:
        str: Error message, or None if the count is within the API limits
    """
    if count < 1 or count > settings.MAX_RECENT_TWEETS:
        return f'Please enter a number between 1 and {settings.MAX_RECENT_TWEETS}!'
    return None
