"""Confirmed submission handed to the form relay."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from itnrelay.models.config import Settings
    from itnrelay.models.notification import Notification

NOT_AVAILABLE = "N/A"


def format_timestamp(moment: datetime) -> str:
    """Format a datetime as ISO-8601 UTC with milliseconds and a ``Z`` suffix."""
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class ConfirmedSubmission:
    """A payment that passed signature, status and provider checks."""

    subject: str
    status: str
    reference_id: str
    email: str = NOT_AVAILABLE
    first_name: str = NOT_AVAILABLE
    last_name: str = NOT_AVAILABLE
    amount: str | None = None
    transaction_id: str | None = None
    confirmed_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def from_notification(
        cls,
        notification: Notification,
        settings: Settings,
        confirmed_at: datetime | None = None,
    ) -> ConfirmedSubmission:
        """Build a submission from a verified notification.

        Args:
            notification: The verified notification.
            settings: Receiver settings, used for the subject line.
            confirmed_at: Confirmation time, defaults to now.

        Returns:
            ConfirmedSubmission instance.

        Raises:
            ValueError: If the notification has no reference id.
        """
        reference_id = notification.reference_id
        if not reference_id:
            raise ValueError("Notification has no reference id")

        return cls(
            subject=settings.format_subject(reference_id),
            status=notification.payment_status or "",
            reference_id=reference_id,
            email=notification.email_address or NOT_AVAILABLE,
            first_name=notification.name_first or NOT_AVAILABLE,
            last_name=notification.name_last or NOT_AVAILABLE,
            amount=notification.amount_fee,
            transaction_id=notification.pf_payment_id,
            confirmed_at=confirmed_at or datetime.now(UTC),
        )

    def to_relay_payload(self) -> dict[str, Any]:
        """Convert to the JSON object posted to the relay.

        Amount and transaction id are left out when PayFast did not send them.
        """
        payload: dict[str, Any] = {
            "_subject": self.subject,
            "Transaction Status": self.status,
            "Email": self.email,
            "First Name": self.first_name,
            "Last Name": self.last_name,
            "Application Reference ID": self.reference_id,
            "Amount Paid": self.amount,
            "Payfast Transaction ID": self.transaction_id,
            "Confirmation Time": format_timestamp(self.confirmed_at),
        }
        return {key: value for key, value in payload.items() if value is not None}
