"""Server-to-server ITN validation against PayFast."""

from __future__ import annotations

import httpx

from itnrelay.errors import ProviderUnreachableError
from itnrelay.utils.logging import get_logger

logger = get_logger("clients.payfast")

VALID_TOKEN = "VALID"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class PayfastValidator:
    """Posts a received ITN body back to PayFast for confirmation."""

    def __init__(self, validate_url: str, client: httpx.Client) -> None:
        """Initialize the validator.

        Args:
            validate_url: PayFast's validation endpoint.
            client: HTTP client used for the request.
        """
        self.validate_url = validate_url
        self._client = client

    def validate(self, raw_body: str | bytes) -> bool:
        """Ask PayFast whether a notification is genuine.

        The body is sent back exactly as received. A single attempt is made.

        Args:
            raw_body: The unmodified form-encoded ITN body.

        Returns:
            True if PayFast answered exactly ``VALID``.

        Raises:
            ProviderUnreachableError: If the request fails in transport.
        """
        try:
            response = self._client.post(
                self.validate_url,
                content=raw_body,
                headers={"Content-Type": FORM_CONTENT_TYPE},
            )
        except httpx.HTTPError as e:
            raise ProviderUnreachableError(f"PayFast validation request failed: {e}") from e

        result = response.text
        if result != VALID_TOKEN:
            logger.warning(
                "PayFast did not confirm notification",
                extra={"status_code": response.status_code, "response": result[:200]},
            )
            return False

        return True
