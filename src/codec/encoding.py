"""Base64 encoding and decoding."""
import base64
import binascii
import logging
import re

from src.codec.errors import EncodingError

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_URLSAFE = str.maketrans("-_", "+/")


def decode_base64(data: str) -> bytes:
    """Decode base64 with padding handling.

    Whitespace is ignored and the URL-safe alphabet is accepted. Anything
    else outside the alphabet raises EncodingError.
    """
    text = _WHITESPACE.sub("", data).translate(_URLSAFE)
    # Add padding if needed
    missing_padding = len(text) % 4
    if missing_padding == 1:
        raise EncodingError(f"Invalid base64 length: {len(text)} characters")
    if missing_padding:
        text += "=" * (4 - missing_padding)
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        logger.debug(f"Base64 decode error: {e}")
        raise EncodingError(f"Invalid base64 input: {e}") from e


def encode_base64(data: bytes) -> str:
    """Encode bytes to a padded base64 string."""
    return base64.b64encode(data).decode("ascii")
