"""
Service Protocol Definitions

This module defines typing.Protocol interfaces for the services used by the
X Poster bot. These protocols enable loose coupling, dependency injection,
and easier testing.

Protocols defined:
- PostingServiceProtocol: Interface for the X/Twitter platform adapter
"""

from datetime import datetime
from typing import Protocol, List

from services.scheduler_service import ScheduledPost, TweetScheduler


class PostingServiceProtocol(Protocol):
    """Protocol defining the interface of the platform adapter.

    Implementations translate the bot's verbs into calls against the
    platform's client library. Responses are returned unmodified; failures
    are raised as SocialMediaError subclasses.
    """

    scheduler: TweetScheduler

    def post_tweet(self, text: str):
        """Post a text tweet.

        Args:
            text: The text to post.

        Returns:
            The client's response for the created tweet.
        """
        ...

    def post_tweet_with_media(self, text: str, media_path: str):
        """Post a tweet with one image attached.

        Args:
            text: The text to post.
            media_path: Local path or http(s) URL of the image.

        Returns:
            The client's response for the created tweet.
        """
        ...

    def post_thread(self, texts: List[str]) -> list:
        """Post a chain of tweets, each replying to the previous one.

        Args:
            texts: Tweet texts in thread order.

        Returns:
            One response per tweet, in order.
        """
        ...

    def schedule_tweet(self, text: str, when: datetime) -> ScheduledPost:
        """Schedule a tweet for a future time.

        Args:
            text: The text to post.
            when: The time to post at; must be in the future.

        Returns:
            Handle of the pending post.
        """
        ...

    def get_my_tweets(self, max_results: int = 10):
        """Fetch the authenticated account's recent tweets.

        Args:
            max_results: Page size.

        Returns:
            The client's timeline response.
        """
        ...

    def verify_credentials(self):
        """Resolve the authenticated account.

        Returns:
            The client's user response.
        """
        ...
