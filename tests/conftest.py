"""
Shared Test Fixtures for X Poster Application

This module provides common fixtures used across all test modules.
Fixtures include credentials, mocked tweepy handles, tweepy response and
error factories, and log capture.
"""

import pytest
from unittest.mock import MagicMock
from itertools import count
from typing import Optional, Dict, Any
import sys
import os

import tweepy

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config.settings import TwitterCredentials


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture
def credentials():
    """
    Test credentials with obvious fake values.

    Returns:
        TwitterCredentials: A complete set of credentials.
    """
    return TwitterCredentials(
        api_key="test-api-key",
        api_secret="test-api-secret",
        access_token="test-access-token",
        access_token_secret="test-access-token-secret",
        bearer_token="test-bearer-token"
    )


@pytest.fixture
def full_environ():
    """Environment mapping with every credential set."""
    return {
        "TWITTER_API_KEY": "test-api-key",
        "TWITTER_API_SECRET": "test-api-secret",
        "TWITTER_ACCESS_TOKEN": "test-access-token",
        "TWITTER_ACCESS_TOKEN_SECRET": "test-access-token-secret",
        "TWITTER_BEARER_TOKEN": "test-bearer-token",
    }


# =============================================================================
# tweepy Response / Error Factories
# =============================================================================

@pytest.fixture
def tweet_response():
    """
    Factory fixture for tweepy.Response objects of created tweets.

    Usage:
        def test_post(tweet_response):
            response = tweet_response("123", "Hello")

    Returns:
        callable: A factory building tweepy.Response(data={'id', 'text'}).
    """
    def _create(tweet_id: str = "1234567890", text: str = "Test tweet") -> tweepy.Response:
        return tweepy.Response(data={"id": tweet_id, "text": text}, includes={}, errors=[], meta={})

    return _create


@pytest.fixture
def http_error():
    """
    Factory fixture for real tweepy HTTP errors backed by a mock response.

    Usage:
        def test_forbidden(http_error):
            error = http_error(tweepy.Forbidden, 403, "Forbidden")

    Returns:
        callable: A factory returning tweepy.HTTPException subclasses.
    """
    def _create(error_cls=tweepy.HTTPException, status_code: int = 500,
                reason: str = "Internal Server Error",
                response_json: Optional[Dict[str, Any]] = None):
        response = MagicMock()
        response.status_code = status_code
        response.reason = reason
        return error_cls(response, response_json=response_json or {})

    return _create


# =============================================================================
# tweepy Handle Fixtures
# =============================================================================

@pytest.fixture
def mock_client(tweet_response):
    """
    Mock tweepy.Client whose create_tweet returns increasing tweet ids.

    Returns:
        MagicMock: The client. ``create_tweet`` ids are "1001", "1002", ...
    """
    ids = count(1001)
    client = MagicMock()
    client.create_tweet.side_effect = lambda **kwargs: tweet_response(str(next(ids)), kwargs.get("text", ""))

    me = MagicMock()
    me.data.id = "42"
    me.data.username = "testuser"
    me.data.name = "Test User"
    client.get_me.return_value = me
    return client


@pytest.fixture
def mock_api():
    """Mock tweepy.API used for media upload."""
    api = MagicMock()
    api.media_upload.return_value = MagicMock(media_id=555666777)
    return api


@pytest.fixture
def twitter_service(credentials, mock_client, mock_api):
    """TwitterService wired to the mock tweepy handles."""
    from services.twitter_service import TwitterService

    service = TwitterService(credentials, client=mock_client, api=mock_api)
    yield service
    service.scheduler.shutdown()


# =============================================================================
# Logging Fixtures
# =============================================================================

@pytest.fixture
def capture_logs():
    """
    Capture log messages for assertion in tests.

    Returns:
        list: A list that will contain captured log records.
    """
    import logging

    class LogCapture(logging.Handler):
        def __init__(self):
            super().__init__()
            self.records = []

        def emit(self, record):
            self.records.append(record)

    handler = LogCapture()
    handler.setLevel(logging.DEBUG)

    root_logger = logging.getLogger()
    original_level = root_logger.level
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(handler)

    yield handler.records

    root_logger.removeHandler(handler)
    root_logger.setLevel(original_level)
