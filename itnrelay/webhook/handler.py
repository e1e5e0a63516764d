"""ITN notification handler."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from itnrelay.errors import (
    ConfigurationMissingError,
    ITNError,
    MalformedRequestError,
    ProviderRejectedError,
)
from itnrelay.models.notification import Notification
from itnrelay.models.session import NotificationSession, NotificationState
from itnrelay.models.submission import ConfirmedSubmission
from itnrelay.utils.logging import get_logger
from itnrelay.webhook.signature import verify_signature

if TYPE_CHECKING:
    from itnrelay.clients.payfast import PayfastValidator
    from itnrelay.clients.relay import RelayClient
    from itnrelay.models.config import Settings

logger = get_logger("webhook.handler")


@dataclass
class HandlerResult:
    """Outcome of handling one notification."""

    status_code: int
    message: str
    error: str | None = None
    session: NotificationSession = field(default_factory=NotificationSession)
    submission: ConfirmedSubmission | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class NotificationHandler:
    """Verifies a PayFast ITN and forwards confirmed payments to the relay.

    Each step either advances the session or raises an ``ITNError`` that ends
    the invocation with the error's status code. Nothing is retried.
    """

    def __init__(
        self,
        settings: Settings,
        validator: PayfastValidator,
        relay: RelayClient,
    ) -> None:
        self.settings = settings
        self.validator = validator
        self.relay = relay

    def handle(self, raw_body: str) -> HandlerResult:
        """Run a notification through the verification pipeline.

        Args:
            raw_body: The form-encoded request body exactly as received.

        Returns:
            HandlerResult carrying the HTTP status code for PayFast.
        """
        notification = Notification.from_form_body(raw_body)
        session = NotificationSession(reference_id=notification.reference_id)

        logger.info(
            "ITN received",
            extra={
                "reference_id": session.reference_id,
                "payment_status": notification.payment_status,
                "pf_payment_id": notification.pf_payment_id,
            },
        )

        try:
            self._check_required(notification)
            self._check_signature(notification, session)

            if not notification.is_complete:
                return self._acknowledge(notification, session)

            session.transition_to(NotificationState.STATUS_CHECKED)
            self._revalidate(notification, session)
            submission = self._forward(notification, session)
        except ITNError as e:
            session.reject(str(e))
            logger.error(
                "ITN rejected",
                extra={
                    "reference_id": session.reference_id,
                    "error": e.error_code,
                    "signature": notification.signature,
                    "reason": str(e),
                    "status_code": e.status_code,
                },
            )
            return HandlerResult(
                status_code=e.status_code,
                message=str(e),
                error=e.error_code,
                session=session,
            )

        logger.info(
            "ITN processed, submission relayed",
            extra={
                "reference_id": session.reference_id,
                "duration_seconds": session.duration_seconds,
            },
        )
        return HandlerResult(
            status_code=200,
            message="ITN processed. Relay submission successful.",
            session=session,
            submission=submission,
        )

    def _check_required(self, notification: Notification) -> None:
        if not self.settings.has_passphrase:
            raise ConfigurationMissingError("PayFast passphrase not configured")

        missing = [
            name
            for name, value in (
                ("signature", notification.signature),
                ("custom_str1", notification.reference_id),
            )
            if not value
        ]
        if missing:
            raise MalformedRequestError(f"Missing required parameters: {', '.join(missing)}")

    def _check_signature(self, notification: Notification, session: NotificationSession) -> None:
        verify_signature(notification.fields, self.settings.passphrase)
        session.transition_to(NotificationState.SIGNATURE_CHECKED)

    def _acknowledge(
        self,
        notification: Notification,
        session: NotificationSession,
    ) -> HandlerResult:
        """Acknowledge a non-COMPLETE payment so PayFast stops resending it."""
        session.transition_to(NotificationState.ACKNOWLEDGED)
        logger.warning(
            "Payment not complete, skipping relay",
            extra={
                "reference_id": session.reference_id,
                "payment_status": notification.payment_status,
            },
        )
        return HandlerResult(
            status_code=200,
            message=f"Payment status {notification.payment_status} received.",
            session=session,
        )

    def _revalidate(self, notification: Notification, session: NotificationSession) -> None:
        if not self.validator.validate(notification.raw_body):
            raise ProviderRejectedError("ITN validation failed")
        session.transition_to(NotificationState.PROVIDER_VALIDATED)

    def _forward(
        self,
        notification: Notification,
        session: NotificationSession,
    ) -> ConfirmedSubmission:
        submission = ConfirmedSubmission.from_notification(notification, self.settings)
        self.relay.submit(submission)
        session.transition_to(NotificationState.FORWARDED)
        return submission
