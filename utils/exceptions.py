"""
Custom Exception Classes for X Poster

This module defines custom exceptions for better error handling and
categorization of failures across the application. Platform errors keep
the underlying tweepy exception and, where the API reported one, the
HTTP status code so callers can branch on kind instead of message text.
"""

from typing import Optional, Sequence


class XPosterError(Exception):
    """Base exception for all X Poster application errors."""
    pass


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(XPosterError):
    """Raised when required credentials are missing or empty."""

    def __init__(self, message: str, missing: Sequence[str] = ()):
        super().__init__(message)
        self.missing = tuple(missing)


# =============================================================================
# Scheduling Errors
# =============================================================================

class InvalidScheduleError(XPosterError):
    """Raised when a post is scheduled for a time that is not in the future."""
    pass


class SchedulerClosedError(XPosterError):
    """Raised when a post is scheduled after the scheduler was shut down."""
    pass


class ScheduledPostMissedError(XPosterError):
    """Passed to schedule listeners when a post missed its run time."""
    pass


# =============================================================================
# Social Media Errors
# =============================================================================

class SocialMediaError(XPosterError):
    """Base exception for errors surfaced by the X API client."""

    def __init__(self, message: str, original: Optional[BaseException] = None,
                 status_code: Optional[int] = None):
        super().__init__(message)
        self.original = original
        self.status_code = status_code


class PostingError(SocialMediaError):
    """Raised when posting a tweet fails."""
    pass


class PermissionDeniedError(PostingError):
    """Raised when the API answers a post with 403 Forbidden."""
    pass


class MediaUploadError(SocialMediaError):
    """Raised when uploading media or posting the tweet carrying it fails."""
    pass


class ThreadPostingError(SocialMediaError):
    """Raised when a tweet in a thread fails; later tweets are not attempted."""

    def __init__(self, message: str, original: Optional[BaseException] = None,
                 status_code: Optional[int] = None, failed_index: int = 0,
                 posted_ids: Sequence[str] = ()):
        super().__init__(message, original=original, status_code=status_code)
        self.failed_index = failed_index
        self.posted_ids = list(posted_ids)


class FetchError(SocialMediaError):
    """Raised when the user's timeline cannot be fetched."""
    pass


class AuthenticationError(SocialMediaError):
    """Raised when credential verification fails."""
    pass
