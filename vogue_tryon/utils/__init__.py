"""Shared utilities."""

from .data_uri import decode_data_uri, encode_data_uri, media_type_of, strip_data_uri_prefix

__all__ = [
    "decode_data_uri",
    "encode_data_uri",
    "media_type_of",
    "strip_data_uri_prefix",
]
