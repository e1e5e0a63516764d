"""PayFast ITN signature computation and verification."""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING
from urllib.parse import quote

from itnrelay.errors import SignatureMismatchError

if TYPE_CHECKING:
    from collections.abc import Mapping

SIGNATURE_FIELD = "signature"

# Values PayFast leaves out of its own parameter string
EXCLUDED_VALUES = frozenset({"", "true", "false"})

# Characters encodeURIComponent leaves alone on top of quote()'s defaults
_SAFE_CHARS = "!'()*"


def encode_value(value: str) -> str:
    """Percent-encode a value the way PayFast does, with spaces as ``+``."""
    return quote(value, safe=_SAFE_CHARS).replace("%20", "+")


def build_parameter_string(fields: Mapping[str, str], passphrase: str | None = None) -> str:
    """Build the canonical string that PayFast signs.

    Keys are sorted lexicographically. The ``signature`` field and values equal
    to ``""``, ``"true"`` or ``"false"`` are skipped. Every other value is
    trimmed and encoded, and pairs are joined with ``&``. A configured
    passphrase is appended as a final ``passphrase`` pair.

    Args:
        fields: Notification fields.
        passphrase: The merchant passphrase, if one is set on the account.

    Returns:
        The canonical parameter string.
    """
    pairs = [
        f"{key}={encode_value(fields[key].strip())}"
        for key in sorted(fields)
        if key != SIGNATURE_FIELD and fields[key] not in EXCLUDED_VALUES
    ]
    parameter_string = "&".join(pairs)

    if passphrase:
        parameter_string += f"&passphrase={encode_value(passphrase)}"

    return parameter_string


def compute_signature(fields: Mapping[str, str], passphrase: str | None = None) -> str:
    """Compute the MD5 hex digest PayFast uses as the ITN signature.

    MD5 is fixed by the PayFast protocol.

    Args:
        fields: Notification fields.
        passphrase: The merchant passphrase, if one is set on the account.

    Returns:
        32-character lowercase hex digest.
    """
    parameter_string = build_parameter_string(fields, passphrase)
    return hashlib.md5(parameter_string.encode("utf-8"), usedforsecurity=False).hexdigest()


def verify_signature(fields: Mapping[str, str], passphrase: str | None = None) -> None:
    """Verify the ``signature`` field of a notification.

    Args:
        fields: Notification fields, including ``signature``.
        passphrase: The merchant passphrase, if one is set on the account.

    Raises:
        SignatureMismatchError: If the signature is missing or does not match.
    """
    received = fields.get(SIGNATURE_FIELD)
    if not received:
        raise SignatureMismatchError("Missing signature")

    if compute_signature(fields, passphrase) != received:
        raise SignatureMismatchError("ITN signature mismatch")
