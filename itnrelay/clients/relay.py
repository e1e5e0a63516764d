"""Form relay client."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from itnrelay.errors import RelayRejectedError, RelayUnreachableError

if TYPE_CHECKING:
    from itnrelay.models.submission import ConfirmedSubmission


class RelayClient:
    """Posts confirmed submissions as JSON to a form relay such as Formspree."""

    def __init__(self, endpoint: str | None, client: httpx.Client) -> None:
        self.endpoint = endpoint
        self._client = client

    def submit(self, submission: ConfirmedSubmission) -> httpx.Response:
        """Send a confirmed submission to the relay.

        Args:
            submission: The submission to forward.

        Returns:
            The relay's 2xx response.

        Raises:
            RelayUnreachableError: If no endpoint is configured or the request
                fails in transport.
            RelayRejectedError: If the relay answers with a non-2xx status.
        """
        if not self.endpoint:
            raise RelayUnreachableError("Relay endpoint not configured")

        try:
            response = self._client.post(self.endpoint, json=submission.to_relay_payload())
        except httpx.HTTPError as e:
            raise RelayUnreachableError(f"Relay request failed: {e}") from e

        if not response.is_success:
            raise RelayRejectedError(f"Relay answered {response.status_code}")

        return response
