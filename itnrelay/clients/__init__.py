"""Outbound HTTP collaborators: PayFast validation and the form relay."""

from itnrelay.clients.payfast import PayfastValidator
from itnrelay.clients.relay import RelayClient

__all__ = ["PayfastValidator", "RelayClient"]
