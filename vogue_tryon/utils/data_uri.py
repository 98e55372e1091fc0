"""Helpers for self-describing ``data:<media type>;base64,<payload>`` URIs."""

import base64
import re


DATA_URI_PATTERN = re.compile(r"^data:(.+);base64,")


def encode_data_uri(data: bytes, media_type: str) -> str:
    """Wrap raw bytes into a base64 data URI."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{media_type};base64,{encoded}"


def strip_data_uri_prefix(uri: str) -> str:
    """Return the base64 payload of a data URI.

    Strings without a comma are assumed to be bare base64 already; a URI with
    nothing after the comma has an empty payload.
    """
    _, sep, payload = uri.partition(",")
    return payload if sep else uri


def media_type_of(uri: str, default: str = "image/jpeg") -> str:
    """Read the media type from a data URI prefix, or fall back to ``default``."""
    match = DATA_URI_PATTERN.match(uri)
    return match.group(1) if match else default


def decode_data_uri(uri: str) -> bytes:
    """Decode the payload of a data URI (or bare base64) back to bytes."""
    return base64.b64decode(strip_data_uri_prefix(uri))
