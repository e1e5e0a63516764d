"""PayFast ITN receiver that relays confirmed payments to a form service."""

__version__ = "0.1.0"
