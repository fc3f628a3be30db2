"""FastMCP server for file-url.

NOTE: Do NOT initialize logging here at import time.
Logging is initialized in __main__.py to avoid import side effects.

Tools:
- path_to_url: filesystem path to file:// URL
- url_to_path: file:// URL to filesystem path
- encode_component / decode_component: single path component codec
- health_check: configuration, metrics and codec self-test
"""

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP


def create_mcp_server() -> FastMCP:
    """Create the MCP server instance.

    Sets up logging only when nothing else has, so creating the server in
    tests does not add duplicate handlers.

    Returns:
        FastMCP server instance
    """
    root_logger = logging.getLogger()
    if not root_logger.hasHandlers():
        from .config import get_config
        from .logging_config import setup_logging

        setup_logging(get_config())

    return FastMCP("file-url")


mcp = create_mcp_server()


@mcp.tool()
async def path_to_url(path: str, flavour: str | None = None) -> dict[str, Any]:
    """
    Convert a filesystem path to a file:// URL.

    Each path component is percent-encoded; a Windows drive letter such as
    "C:" is kept as is. The path is not resolved and need not exist.

    Args:
        path: Path to convert (absolute or relative)
        flavour: Path convention: "native" (server OS), "posix" or "windows".
                 Defaults to the server configuration.

    Returns:
        Dictionary with status field indicating success or error.
        Success includes url and flavour.
        Error includes error_code and message.

    Example:
        path="C:\\WINDOWS\\clock.avi", flavour="windows"
        -> url: "file:///C:/WINDOWS/clock.avi"
    """
    from .tools.convert import path_to_url as path_to_url_impl

    return await path_to_url_impl(path, flavour)


@mcp.tool()
async def url_to_path(url: str, flavour: str | None = None) -> dict[str, Any]:
    """
    Convert a file:// URL to a filesystem path.

    Args:
        url: file:// URL, e.g. "file:///foo/bar%20baz.txt"
        flavour: Path convention: "native" (server OS), "posix" or "windows".
                 Defaults to the server configuration.

    Returns:
        Dictionary with status field indicating success or error.
        Success includes path and flavour.
        Error includes error_code, message and, when known, segment_index.
    """
    from .tools.convert import url_to_path as url_to_path_impl

    return await url_to_path_impl(url, flavour)


@mcp.tool()
async def encode_component(text: str) -> dict[str, Any]:
    """
    Percent-encode a single path component (no separators are kept).

    Args:
        text: Component text, e.g. "some & what.whtvr"

    Returns:
        Dictionary with status and encoded, e.g. "some%20%26%20what.whtvr".
    """
    from .tools.convert import encode_component as encode_component_impl

    return await encode_component_impl(text)


@mcp.tool()
async def decode_component(encoded: str) -> dict[str, Any]:
    """
    Percent-decode a single path component.

    Args:
        encoded: Encoded component, e.g. "bar%20baz.txt"

    Returns:
        Dictionary with status, text (null if not UTF-8) and hex of the raw bytes.
    """
    from .tools.convert import decode_component as decode_component_impl

    return await decode_component_impl(encoded)


@mcp.tool()
async def health_check() -> dict[str, Any]:
    """
    Check server health.

    Returns:
        Dictionary with status "healthy" or "degraded", the active flavour,
        configuration summary, uptime and per-tool metrics.
    """
    from .config import get_config
    from .tools.health_check import health_check as health_check_impl

    if not get_config().enable_health_check:
        return {
            "status": "error",
            "error_code": "disabled",
            "message": "Health check tool is disabled. Set FILE_URL_ENABLE_HEALTH_CHECK=true to enable.",
        }

    return await health_check_impl()
