"""Error types raised while processing an ITN.

Each error carries the HTTP status code returned to PayFast and a short
machine-readable code used in the JSON response body.
"""

from typing import ClassVar


class ITNError(Exception):
    """Base class for terminal failures of a single notification."""

    status_code: ClassVar[int] = 500
    error_code: ClassVar[str] = "internal_error"


class ConfigurationMissingError(ITNError):
    """Raised when the passphrase secret is not configured."""

    status_code = 400
    error_code = "configuration_missing"


class MalformedRequestError(ITNError):
    """Raised when the notification lacks a signature or reference id."""

    status_code = 400
    error_code = "malformed_request"


class SignatureMismatchError(ITNError):
    """Raised when the recomputed checksum differs from the received one."""

    status_code = 400
    error_code = "signature_mismatch"


class ProviderRejectedError(ITNError):
    """Raised when PayFast does not answer VALID for the notification."""

    status_code = 400
    error_code = "provider_rejected"


class ProviderUnreachableError(ITNError):
    """Raised when the validation request to PayFast fails in transport."""

    status_code = 500
    error_code = "provider_unreachable"


class RelayRejectedError(ITNError):
    """Raised when the relay endpoint answers with a non-2xx status."""

    status_code = 500
    error_code = "relay_rejected"


class RelayUnreachableError(ITNError):
    """Raised when the relay endpoint cannot be reached or is not configured."""

    status_code = 500
    error_code = "relay_unreachable"
