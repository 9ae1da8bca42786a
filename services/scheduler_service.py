"""
Scheduler Service Module

Defers tweets to a future time with a one-shot APScheduler job per post.
Jobs live only in this process: nothing is persisted, so pending posts are
lost if the process exits before they fire.

Each call to schedule() returns a ScheduledPost handle that can be cancelled.
When a post fires, its outcome is logged and handed to every registered
listener; it never reaches the code that scheduled it.
"""

import threading
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional

from apscheduler.events import EVENT_JOB_MISSED
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.date import DateTrigger

from config import settings
from utils.exceptions import InvalidScheduleError, ScheduledPostMissedError, SchedulerClosedError
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ScheduledPost:
    """A tweet waiting for its run time."""
    job_id: str
    text: str
    run_at: datetime
    delay: float                       # Seconds from scheduling to run_at


ScheduleListener = Callable[[ScheduledPost, Optional[BaseException]], None]


class TweetScheduler:
    """In-process scheduler for one-shot tweets."""

    def __init__(self, post_func: Callable[[str], object],
                 scheduler: Optional[BackgroundScheduler] = None):
        """
        Args:
            post_func: Called with the tweet text when a post fires.
            scheduler: APScheduler instance to use. Started on first use.
        """
        self.post_func = post_func
        self.scheduler = scheduler or BackgroundScheduler()
        self.scheduler.add_listener(self._on_missed, EVENT_JOB_MISSED)

        self._pending: Dict[str, ScheduledPost] = {}
        self._listeners: List[ScheduleListener] = []
        self._idle = threading.Condition()
        self._closed = False

    def _ensure_started(self) -> None:
        if not self.scheduler.running:
            self.scheduler.start()

    def add_listener(self, callback: ScheduleListener) -> None:
        """
        Register a callback run after each scheduled post fires.

        The callback receives the ScheduledPost and the exception raised while
        posting, or None on success.
        """
        self._listeners.append(callback)

    def schedule(self, text: str, when: datetime) -> ScheduledPost:
        """
        Arm a one-shot job that posts ``text`` at ``when``.

        Args:
            text: The tweet text.
            when: Run time. Naive datetimes are local time.

        Returns:
            ScheduledPost: Handle for the pending post.

        Raises:
            InvalidScheduleError: If ``when`` is not strictly in the future.
                No job is armed in that case.
            SchedulerClosedError: If shutdown() has already been called.
        """
        if self._closed:
            raise SchedulerClosedError("Scheduler has been shut down")

        now = datetime.now(when.tzinfo)
        if when <= now:
            raise InvalidScheduleError("Schedule time must be in the future")

        post = ScheduledPost(
            job_id=uuid.uuid4().hex,
            text=text,
            run_at=when,
            delay=(when - now).total_seconds()
        )

        with self._idle:
            self._pending[post.job_id] = post

        try:
            self._ensure_started()
            self.scheduler.add_job(
                self._fire,
                trigger=DateTrigger(run_date=when),
                args=[post.job_id],
                id=post.job_id,
                name=f"tweet_{post.job_id[:8]}",
                misfire_grace_time=settings.SCHEDULE_MISFIRE_GRACE_TIME
            )
        except Exception:
            self._discard(post.job_id)
            raise

        logger.info(f"Tweet scheduled for: {when.isoformat()} (in {post.delay:.0f}s)")
        return post

    def cancel(self, job_id: str) -> bool:
        """
        Cancel a pending post.

        Returns:
            bool: True if the post was removed, False if it is unknown or
            has already fired.
        """
        try:
            self.scheduler.remove_job(job_id)
        except JobLookupError:
            return False

        self._discard(job_id)
        logger.info(f"Cancelled scheduled tweet {job_id}")
        return True

    def pending(self) -> List[ScheduledPost]:
        """Return the posts that have not fired yet, earliest first."""
        with self._idle:
            posts = list(self._pending.values())
        return sorted(posts, key=lambda p: p.run_at)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until no post is pending.

        Returns:
            bool: False if the timeout expired first.
        """
        with self._idle:
            return self._idle.wait_for(lambda: not self._pending, timeout)

    def shutdown(self, wait: bool = False) -> None:
        """
        Stop the underlying scheduler, dropping pending posts.

        Shutdown is final: later calls to schedule() raise SchedulerClosedError.
        """
        self._closed = True
        if self.scheduler.running:
            self.scheduler.shutdown(wait=wait)
        with self._idle:
            self._pending.clear()
            self._idle.notify_all()

    def _discard(self, job_id: str) -> Optional[ScheduledPost]:
        with self._idle:
            post = self._pending.pop(job_id, None)
            self._idle.notify_all()
        return post

    def _notify(self, post: ScheduledPost, error: Optional[BaseException]) -> None:
        for callback in list(self._listeners):
            try:
                callback(post, error)
            except Exception as e:
                logger.error(f"Schedule listener failed for {post.job_id}: {e}")

    def _fire(self, job_id: str) -> None:
        """Job body: post the tweet, log the outcome and notify listeners."""
        with self._idle:
            post = self._pending.get(job_id)
        if post is None:
            return

        error = None
        try:
            self.post_func(post.text)
            logger.info("Scheduled tweet posted successfully")
        except Exception as e:
            error = e
            logger.error(f"Error posting scheduled tweet: {e}")

        try:
            self._notify(post, error)
        finally:
            self._discard(job_id)

    def _on_missed(self, event) -> None:
        with self._idle:
            post = self._pending.get(event.job_id)
        if post is None:
            return

        logger.warning(f"Scheduled tweet {post.job_id} missed its run time {post.run_at.isoformat()}")
        try:
            self._notify(post, ScheduledPostMissedError(
                f"Scheduled tweet missed its run time {post.run_at.isoformat()}"))
        finally:
            self._discard(event.job_id)
