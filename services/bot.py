"""
X Bot Module

Thin facade over the Twitter service: the posting verbs plus a few
canned-content helpers (random tech tweet, motivational quote, daily
progress update).
"""

import random
from datetime import datetime
from typing import Optional, List

from config import settings
from config.settings import TwitterCredentials
from services.protocols import PostingServiceProtocol
from services.scheduler_service import ScheduledPost, ScheduleListener
from services.twitter_service import TwitterService
from utils.logger import get_logger

logger = get_logger(__name__)

TECH_TWEETS = [
    "🚀 Building amazing things one line of code at a time! #coding #tech",
    "💡 Today's debugging session: 99% coffee, 1% actual debugging ☕ #developer",
    "🔥 Python making my code more readable and my life easier! #python",
    "⚡ APIs are the glue that holds the digital world together #api #development",
    "🎯 Clean code isn't just about making it work, it's about making it last #cleancode",
    "🌟 The best error messages are the ones that tell you exactly what went wrong #ux",
    "🛠️ Refactoring is like cleaning your room - painful but so worth it! #refactoring",
    "📱 Mobile-first design isn't just a trend, it's reality #webdev #mobile",
    "🔒 Security isn't a feature, it's a foundation #cybersecurity #development",
    "🎨 Good UI is invisible - users notice when it's bad, not when it's good #ux #design",
]

MOTIVATIONAL_QUOTES = [
    "💪 'The only way to do great work is to love what you do.' - Steve Jobs",
    "🌟 'Innovation distinguishes between a leader and a follower.' - Steve Jobs",
    "🚀 'Code is like humor. When you have to explain it, it's bad.' - Cory House",
    "💡 'First, solve the problem. Then, write the code.' - John Johnson",
    "⚡ 'The best way to predict the future is to implement it.' - David Heinemeier Hansson",
    "🎯 'Simplicity is the ultimate sophistication.' - Leonardo da Vinci",
    "🔥 'Make it work, make it right, make it fast.' - Kent Beck",
]

# Offered by the "quick" command for the user to pick from
QUICK_TWEETS = [
    "🚀 Building amazing things one line of code at a time! #coding #tech",
    "💡 Today's debugging session: 99% coffee, 1% actual debugging ☕ #developer",
    "🔥 Python making my code more readable and my life easier! #python",
    "⚡ APIs are the glue that holds the digital world together #api #development",
    "🎯 Clean code isn't just about making it work, it's about making it last #cleancode",
    "🌟 The best error messages are the ones that tell you exactly what went wrong #ux",
    "📚 Learning something new every day keeps the imposter syndrome away! #learning",
    "🔧 Refactoring old code feels like organizing a messy room #refactoring",
]

DAILY_UPDATE_TEMPLATE = "📈 Daily Progress Update:\n\n{progress}\n\n#buildinpublic #progress #coding"


def format_daily_update(progress: str) -> str:
    """Render the daily progress update tweet."""
    return DAILY_UPDATE_TEMPLATE.format(progress=progress)


class XBot:
    """
    Facade for posting to X.

    Credentials are loaded from the environment only when neither
    credentials nor a service are injected.
    """

    def __init__(self, credentials: Optional[TwitterCredentials] = None,
                 service: Optional[PostingServiceProtocol] = None,
                 rng: Optional[random.Random] = None):
        """
        Args:
            credentials: API credentials. Loaded with settings.load_credentials() if omitted.
            service: Platform adapter. Built from the credentials if omitted.
            rng: Random source for the canned-content helpers.

        Raises:
            ConfigurationError: If credentials have to be loaded and are incomplete.
        """
        if service is None:
            if credentials is None:
                credentials = settings.load_credentials()
            service = TwitterService(credentials)

        self.service = service
        self.rng = rng or random.Random()

    # -------------------------------------------------------------------------
    # Posting
    # -------------------------------------------------------------------------

    def tweet(self, message: str):
        """Post a simple tweet."""
        return self.service.post_tweet(message)

    def tweet_with_image(self, message: str, image_path: str):
        """Post a tweet with an image."""
        return self.service.post_tweet_with_media(message, image_path)

    def tweet_thread(self, messages: List[str]) -> list:
        """Post a thread of tweets."""
        return self.service.post_thread(messages)

    def get_recent_tweets(self, count: int = settings.DEFAULT_RECENT_TWEETS):
        """Get recent tweets from the account."""
        return self.service.get_my_tweets(count)

    def verify_credentials(self):
        return self.service.verify_credentials()

    # -------------------------------------------------------------------------
    # Scheduling
    # -------------------------------------------------------------------------

    def schedule_tweet(self, message: str, when: datetime) -> ScheduledPost:
        """Schedule a tweet for later."""
        return self.service.schedule_tweet(message, when)

    def cancel_scheduled(self, job_id: str) -> bool:
        return self.service.scheduler.cancel(job_id)

    def scheduled_posts(self) -> List[ScheduledPost]:
        return self.service.scheduler.pending()

    def on_scheduled_post(self, callback: ScheduleListener) -> None:
        """Register a callback for the outcome of each scheduled post."""
        self.service.scheduler.add_listener(callback)

    def wait_for_scheduled(self, timeout: Optional[float] = None) -> bool:
        return self.service.scheduler.wait(timeout)

    def shutdown(self) -> None:
        self.service.scheduler.shutdown(wait=False)

    # -------------------------------------------------------------------------
    # Canned content
    # -------------------------------------------------------------------------

    def post_random_tech_tweet(self):
        """Post a tweet picked uniformly from TECH_TWEETS."""
        message = self.rng.choice(TECH_TWEETS)
        logger.debug(f"Selected tech tweet: {message}")
        return self.tweet(message)

    def post_daily_update(self, progress: str):
        """Post a daily progress update."""
        return self.tweet(format_daily_update(progress))

    def post_motivational_quote(self):
        """Post a quote picked uniformly from MOTIVATIONAL_QUOTES."""
        message = self.rng.choice(MOTIVATIONAL_QUOTES)
        logger.debug(f"Selected quote: {message}")
        return self.tweet(message)
