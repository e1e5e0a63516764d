"""Data models for itnrelay."""

from itnrelay.models.config import (
    PAYFAST_SANDBOX_VALIDATE_URL,
    PAYFAST_VALIDATE_URL,
    Settings,
)
from itnrelay.models.notification import COMPLETE_STATUS, Notification
from itnrelay.models.session import NotificationSession, NotificationState
from itnrelay.models.submission import ConfirmedSubmission

__all__ = [
    "COMPLETE_STATUS",
    "PAYFAST_SANDBOX_VALIDATE_URL",
    "PAYFAST_VALIDATE_URL",
    "ConfirmedSubmission",
    "Notification",
    "NotificationSession",
    "NotificationState",
    "Settings",
]
