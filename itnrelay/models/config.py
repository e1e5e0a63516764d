"""Process-wide configuration for the ITN receiver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

PAYFAST_VALIDATE_URL = "https://www.payfast.co.za/eng/query/validate"
PAYFAST_SANDBOX_VALIDATE_URL = "https://sandbox.payfast.co.za/eng/query/validate"

DEFAULT_SUBJECT_TEMPLATE = "✅ New NTA Enrollment Application (Payment Confirmed - Ref: {reference_id})"

# Environment variable names, keyed by Settings field
ENV_VARS = {
    "passphrase": "PAYFAST_PASSPHRASE",
    "relay_endpoint": "FORMSPREE_ENDPOINT",
    "site_base_url": "YOUR_SITE_BASE_URL",
    "merchant_id": "PAYFAST_MERCHANT_ID",
    "merchant_key": "PAYFAST_MERCHANT_KEY",
    "sandbox": "PAYFAST_SANDBOX",
    "validate_url": "PAYFAST_VALIDATE_URL",
    "subject_template": "RELAY_SUBJECT_TEMPLATE",
}

# Fields that may only come from the environment
SECRET_FIELDS = {"passphrase"}

TRUTHY_VALUES = {"1", "true", "yes", "on"}


def parse_bool(value: Any) -> bool:
    """Interpret a config value as a boolean flag."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in TRUTHY_VALUES


@dataclass(frozen=True)
class Settings:
    """Secrets and endpoints for one receiver process.

    Built once at cold start and passed explicitly to the handler.
    """

    passphrase: str | None = None
    relay_endpoint: str | None = None
    site_base_url: str | None = None
    merchant_id: str | None = None
    merchant_key: str | None = None
    sandbox: bool = False
    validate_url: str | None = None
    subject_template: str = DEFAULT_SUBJECT_TEMPLATE

    def __post_init__(self) -> None:
        """Validate URLs and the subject template."""
        for name in ("relay_endpoint", "site_base_url", "validate_url"):
            url = getattr(self, name)
            if url and not url.startswith(("http://", "https://")):
                raise ValueError(f"{name} must be an http(s) URL, got {url!r}")

        try:
            rendered = self.subject_template.format(reference_id="\0")
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(f"subject_template is not a valid template: {e!r}") from e
        if "\0" not in rendered:
            raise ValueError("subject_template must contain a {reference_id} placeholder")

    @property
    def provider_validate_url(self) -> str:
        """URL that PayFast notifications are re-validated against."""
        if self.validate_url:
            return self.validate_url
        return PAYFAST_SANDBOX_VALIDATE_URL if self.sandbox else PAYFAST_VALIDATE_URL

    @property
    def has_passphrase(self) -> bool:
        """Check whether the signing passphrase is configured."""
        return bool(self.passphrase)

    def format_subject(self, reference_id: str) -> str:
        """Render the relay subject line for a reference id."""
        return self.subject_template.format(reference_id=reference_id)

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> Settings:
        """Create Settings from a mapping of field names to raw values.

        Args:
            values: Raw values keyed by Settings field name. Blank strings are
                treated as unset.

        Returns:
            Settings instance.
        """
        cleaned = {key: value for key, value in values.items() if value not in (None, "")}
        kwargs: dict[str, Any] = {
            name: str(cleaned[name]) for name in ENV_VARS if name in cleaned and name != "sandbox"
        }
        kwargs["sandbox"] = parse_bool(cleaned.get("sandbox"))
        return cls(**kwargs)
