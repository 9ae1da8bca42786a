"""
Twitter Service Module

This module handles integration with Twitter/X API.
It provides functionality for posting tweets, tweets with media and threads,
and for retrieving the authenticated account and its recent tweets.

Every failure raised by tweepy is caught at the call site, wrapped in one of
the SocialMediaError subclasses with a short context prefix, and re-raised.
Nothing is retried.
"""

import os
import tempfile
import time
from datetime import datetime
from typing import Optional, List, Any
from urllib.parse import urlparse

import requests
import tweepy

from config import settings
from config.settings import TwitterCredentials
from services.scheduler_service import TweetScheduler, ScheduledPost
from utils.exceptions import (
    PostingError, PermissionDeniedError, MediaUploadError, ThreadPostingError,
    FetchError, AuthenticationError
)
from utils.logger import get_logger

logger = get_logger(__name__)

FORBIDDEN_STATUS = 403

FORBIDDEN_MESSAGE = """
❌ 403 Forbidden Error - Possible causes:
1. Your Twitter app doesn't have WRITE permissions
2. Your account may be restricted or suspended
3. The tweet content may violate Twitter policies
4. Rate limit exceeded
5. App permissions need to be regenerated

Original error: {error}
"""


def get_status_code(error: BaseException) -> Optional[int]:
    """
    Extract the HTTP status code carried by a tweepy error.

    Args:
        error: The exception raised by tweepy (or anything else).

    Returns:
        The status code, or None if the error does not carry one.
    """
    response = getattr(error, "response", None)
    if response is not None:
        status = getattr(response, "status_code", None)
        if status is None:
            # http.client.HTTPResponse (async client) uses .status
            status = getattr(response, "status", None)
        if isinstance(status, int):
            return status

    code = getattr(error, "code", None)
    return code if isinstance(code, int) else None


def _is_remote(media_path: str) -> bool:
    return urlparse(media_path).scheme in ("http", "https")


class TwitterService:
    """Service for Twitter/X integration."""

    def __init__(self, credentials: TwitterCredentials,
                 client: Optional[Any] = None, api: Optional[Any] = None,
                 scheduler: Optional[TweetScheduler] = None):
        """
        Initialize the Twitter service with API authentication.

        Args:
            credentials: OAuth 1.0a user credentials (bearer token optional).
            client: Pre-built tweepy.Client, mainly for tests.
            api: Pre-built tweepy.API used for media upload, mainly for tests.
            scheduler: Scheduler for deferred posts. Defaults to one that
                posts through post_tweet().
        """
        self.credentials = credentials
        self.client = client
        self.api = api
        self.scheduler = scheduler or TweetScheduler(self.post_tweet)

        if self.client is None or self.api is None:
            self._setup_twitter()

    def _setup_twitter(self) -> None:
        """
        Build the tweepy handles. No request is made here; use
        verify_credentials() to check the keys against the API.
        """
        creds = self.credentials

        if self.client is None:
            # v2 endpoints: tweets, timeline, identity
            self.client = tweepy.Client(
                bearer_token=creds.bearer_token,
                consumer_key=creds.api_key,
                consumer_secret=creds.api_secret,
                access_token=creds.access_token,
                access_token_secret=creds.access_token_secret
            )

        if self.api is None:
            # v1.1 is still required for media upload
            auth = tweepy.OAuth1UserHandler(
                creds.api_key,
                creds.api_secret,
                creds.access_token,
                creds.access_token_secret
            )
            self.api = tweepy.API(auth)

        logger.debug("Twitter client configured with OAuth 1.0a user context")

    @staticmethod
    def _log_error_details(error: BaseException) -> None:
        """Log whatever structured detail tweepy attached to an error."""
        api_errors = getattr(error, "api_errors", None)
        if api_errors:
            logger.debug(f"Twitter API error data: {api_errors}")
        api_messages = getattr(error, "api_messages", None)
        if api_messages:
            logger.debug(f"Twitter API errors: {api_messages}")

    def post_tweet(self, text: str):
        """
        Post a simple text tweet.

        Args:
            text: The text to tweet.

        Returns:
            tweepy.Response: The unmodified API response (``data`` holds id and text).

        Raises:
            PermissionDeniedError: If the API answered 403 Forbidden.
            PostingError: For any other failure.
        """
        try:
            logger.info("Attempting to post tweet...")
            response = self.client.create_tweet(text=text)
            logger.info(f"Tweet posted successfully: {response.data['id']}")
            return response

        except Exception as e:
            logger.error(f"Error posting tweet: {e}")
            self._log_error_details(e)

            status_code = get_status_code(e)
            if isinstance(e, tweepy.Forbidden) or status_code == FORBIDDEN_STATUS:
                raise PermissionDeniedError(
                    FORBIDDEN_MESSAGE.format(error=e),
                    original=e,
                    status_code=FORBIDDEN_STATUS
                ) from e

            raise PostingError(f"Failed to post tweet: {e}",
                               original=e, status_code=status_code) from e

    def _download_media(self, url: str) -> str:
        """
        Download a remote image into a temporary file.

        Returns:
            str: Path of the temporary file. The caller removes it.
        """
        response = requests.get(url, timeout=settings.TWITTER_IMAGE_TIMEOUT)
        response.raise_for_status()

        suffix = os.path.splitext(urlparse(url).path)[1] or '.jpg'
        with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as temp_file:
            temp_file.write(response.content)
            return temp_file.name

    def post_tweet_with_media(self, text: str, media_path: str):
        """
        Post a tweet with a single image attached.

        Args:
            text: The text to tweet.
            media_path: Local file path, or an http(s) URL to download first.

        Returns:
            tweepy.Response: The unmodified API response.

        Raises:
            MediaUploadError: If the upload or the post fails. Media that was
                uploaded before a failed post is left to the platform.
        """
        temp_filename = None
        try:
            filename = media_path
            if _is_remote(media_path):
                temp_filename = self._download_media(media_path)
                filename = temp_filename

            # Upload media first
            media = self.api.media_upload(filename=filename)
            logger.debug(f"Uploaded media {media.media_id} from {media_path}")

            response = self.client.create_tweet(text=text, media_ids=[media.media_id])
            logger.info(f"Tweet with media posted successfully: {response.data['id']}")
            return response

        except Exception as e:
            logger.error(f"Error posting tweet with media: {e}")
            raise MediaUploadError(f"Failed to post tweet with media: {e}",
                                   original=e, status_code=get_status_code(e)) from e
        finally:
            if temp_filename:
                os.unlink(temp_filename)

    def post_thread(self, texts: List[str]) -> list:
        """
        Post a thread: each tweet after the first replies to the previous one.

        Args:
            texts: Tweet texts in thread order.

        Returns:
            list: One tweepy.Response per tweet, in order.

        Raises:
            ThreadPostingError: On the first failing tweet. Later tweets are
                not attempted; earlier ones stay posted.
        """
        results = []
        posted_ids = []
        last_tweet_id = None

        for i, text in enumerate(texts):
            try:
                if last_tweet_id is None:
                    response = self.client.create_tweet(text=text)
                else:
                    response = self.client.create_tweet(text=text, in_reply_to_tweet_id=last_tweet_id)
            except Exception as e:
                logger.error(f"Error posting tweet {i + 1}/{len(texts)} of thread: {e}")
                raise ThreadPostingError(f"Failed to post thread: {e}",
                                         original=e, status_code=get_status_code(e),
                                         failed_index=i, posted_ids=posted_ids) from e

            results.append(response)
            last_tweet_id = response.data['id']
            posted_ids.append(last_tweet_id)
            logger.info(f"Posted tweet {i + 1}/{len(texts)} of thread: {last_tweet_id}")

            # Small delay between tweets to avoid rate limiting
            if i < len(texts) - 1:
                time.sleep(settings.THREAD_POST_DELAY)

        return results

    def schedule_tweet(self, text: str, when: datetime) -> ScheduledPost:
        """
        Schedule a tweet to be posted at a future time.

        Returns immediately. A failure when the post fires is logged and
        passed to the scheduler's listeners, never to this caller.

        Returns:
            ScheduledPost: Handle that can be passed to scheduler.cancel().

        Raises:
            InvalidScheduleError: If ``when`` is not in the future.
        """
        return self.scheduler.schedule(text, when)

    def get_my_tweets(self, max_results: int = settings.DEFAULT_RECENT_TWEETS):
        """
        Fetch the authenticated user's recent tweets.

        Args:
            max_results: Number of tweets wanted. Requests below the API
                minimum page size fetch the minimum and trim the result.

        Returns:
            tweepy.Response: ``data`` is a list of tweets with
            ``created_at`` and ``public_metrics`` populated.

        Raises:
            FetchError: If the identity lookup or the timeline fetch fails.
        """
        try:
            me = self.client.get_me()
            response = self.client.get_users_tweets(
                id=me.data.id,
                max_results=max(max_results, settings.MIN_RECENT_TWEETS),
                tweet_fields=['created_at', 'public_metrics']
            )
            if response.data and len(response.data) > max_results:
                response = response._replace(data=response.data[:max_results])
            logger.info(f"Successfully retrieved {len(response.data or [])} recent tweets")
            return response

        except Exception as e:
            logger.error(f"Error fetching recent tweets: {e}")
            raise FetchError(f"Failed to fetch tweets: {e}",
                             original=e, status_code=get_status_code(e)) from e

    def verify_credentials(self):
        """
        Verify the credentials by resolving the authenticated user.

        Returns:
            tweepy.Response: ``data`` is the user (id, name, username).

        Raises:
            AuthenticationError: If the API rejects the request.
        """
        try:
            user = self.client.get_me()
            logger.info(f"Authenticated as @{user.data.username}")
            return user

        except Exception as e:
            logger.error(f"Failed to authenticate with Twitter: {e}")
            raise AuthenticationError(f"Failed to verify credentials: {e}",
                                      original=e, status_code=get_status_code(e)) from e
