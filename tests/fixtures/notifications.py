"""Sample ITN payloads for testing."""

from urllib.parse import urlencode

from itnrelay.webhook.signature import compute_signature

TEST_PASSPHRASE = "jt7NOE43FZPn"


def create_itn_fields(
    payment_status: str = "COMPLETE",
    reference_id: str | None = "REF1",
    amount_fee: str = "-2.30",
    pf_payment_id: str = "1089250",
    email_address: str = "jane@example.com",
    name_first: str = "Jane",
    name_last: str = "Doe",
) -> dict[str, str]:
    """Create unsigned ITN fields in the order PayFast posts them.

    Args:
        payment_status: The payment status.
        reference_id: Value for ``custom_str1``, omitted when None.
        amount_fee: The PayFast fee.
        pf_payment_id: The PayFast transaction id.
        email_address: Payer email.
        name_first: Payer first name.
        name_last: Payer last name.

    Returns:
        Ordered ITN fields without a signature.
    """
    fields = {
        "m_payment_id": "01AB",
        "pf_payment_id": pf_payment_id,
        "payment_status": payment_status,
        "item_name": "Enrollment Fee",
        "item_description": "",
        "amount_gross": "100.00",
        "amount_fee": amount_fee,
        "amount_net": "97.70",
        "custom_str1": reference_id or "",
        "custom_str2": "",
        "custom_int1": "",
        "name_first": name_first,
        "name_last": name_last,
        "email_address": email_address,
        "merchant_id": "10000100",
    }
    if reference_id is None:
        del fields["custom_str1"]
    return fields


def sign_fields(fields: dict[str, str], passphrase: str | None = TEST_PASSPHRASE) -> dict[str, str]:
    """Return a copy of the fields with a ``signature`` appended."""
    signed = dict(fields)
    signed["signature"] = compute_signature(fields, passphrase)
    return signed


def create_itn_body(passphrase: str | None = TEST_PASSPHRASE, **kwargs: str | None) -> str:
    """Create a signed, form-encoded ITN body."""
    return urlencode(sign_fields(create_itn_fields(**kwargs), passphrase))  # type: ignore[arg-type]


def tamper_body(body: str, key: str, value: str) -> str:
    """Replace one field of an encoded body while keeping its stale signature."""
    pairs = []
    for pair in body.split("&"):
        name, _, _ = pair.partition("=")
        if name == key:
            pair = urlencode({key: value})
        pairs.append(pair)
    return "&".join(pairs)
