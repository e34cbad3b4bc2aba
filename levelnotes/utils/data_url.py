"""Data URL decoding for screenshot previews."""

import base64
import binascii


def decode_data_url(data_url: str | None) -> bytes | None:
    """
    Decode the base64 payload of a ``data:`` URL.

    Args:
        data_url: e.g. ``data:image/png;base64,iVBOR...``

    Returns:
        Raw bytes, or None when the URL is missing or malformed
    """
    if not data_url:
        return None
    _header, sep, payload = data_url.partition(",")
    if not sep:
        return None
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        return None
