"""Inbound ITN notification model."""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import parse_qsl

COMPLETE_STATUS = "COMPLETE"
REFERENCE_FIELD = "custom_str1"


@dataclass
class Notification:
    """A PayFast ITN decoded from its form-encoded body.

    Field order follows the body. Blank values are kept so that the signature
    builder sees exactly what PayFast signed. When a key repeats, the last
    value wins.
    """

    fields: dict[str, str]
    raw_body: str = field(default="", repr=False)

    @classmethod
    def from_form_body(cls, body: str) -> Notification:
        """Decode a form-encoded request body.

        Args:
            body: The raw ``application/x-www-form-urlencoded`` body.

        Returns:
            Notification instance holding the decoded fields and the raw body.
        """
        return cls(fields=dict(parse_qsl(body, keep_blank_values=True)), raw_body=body)

    @property
    def signature(self) -> str | None:
        """The checksum PayFast claims for this notification."""
        return self.fields.get("signature") or None

    @property
    def payment_status(self) -> str | None:
        return self.fields.get("payment_status")

    @property
    def reference_id(self) -> str | None:
        """Caller-supplied reference correlating the payment to an application."""
        return self.fields.get(REFERENCE_FIELD) or None

    @property
    def email_address(self) -> str | None:
        return self.fields.get("email_address") or None

    @property
    def name_first(self) -> str | None:
        return self.fields.get("name_first") or None

    @property
    def name_last(self) -> str | None:
        return self.fields.get("name_last") or None

    @property
    def amount_fee(self) -> str | None:
        return self.fields.get("amount_fee")

    @property
    def pf_payment_id(self) -> str | None:
        return self.fields.get("pf_payment_id")

    @property
    def is_complete(self) -> bool:
        """Check whether the payment reached the terminal COMPLETE status."""
        return self.payment_status == COMPLETE_STATUS
