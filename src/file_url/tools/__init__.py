"""MCP tool implementations."""

from .convert import decode_component, encode_component, path_to_url, url_to_path
from .health_check import health_check

__all__ = [
    "decode_component",
    "encode_component",
    "health_check",
    "path_to_url",
    "url_to_path",
]
