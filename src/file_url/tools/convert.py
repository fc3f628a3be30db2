"""Conversion tool implementations.

This module provides the MCP tools that convert between paths and file://
URLs, and that encode or decode single path components. Each tool returns a
discriminated union dict keyed on "status".
"""

import time
import uuid
from typing import Any, Callable

from ..codec import decode_component as decode_component_bytes
from ..codec import encode_component as encode_component_bytes
from ..config import get_config
from ..errors import FileUrlError
from ..logging_config import call_id_var, get_logger
from ..metrics import get_metrics_collector
from ..translator import file_url_to_path, path_to_file_url
from ..validation import (
    ValidationError,
    validate_component_input,
    validate_flavour_input,
    validate_path_input,
    validate_url_input,
)

logger = get_logger("tools.convert")


async def _run(operation: str, convert: Callable[[], dict[str, Any]]) -> dict[str, Any]:
    """Run a conversion, mapping errors to responses and recording metrics."""
    token = call_id_var.set(uuid.uuid4().hex[:12])
    start = time.perf_counter()
    success = False
    try:
        result = convert()
        success = True
        return result
    except ValidationError as e:
        logger.warning(f"{operation}: input validation failed: {e}")
        return e.to_error_response()
    except FileUrlError as e:
        logger.warning(
            f"{operation}: {e.message}",
            extra={"error_code": e.error_code, "segment_index": e.segment_index},
        )
        return e.to_error_response()
    finally:
        duration_ms = (time.perf_counter() - start) * 1000
        await get_metrics_collector().record(operation, duration_ms, success)
        logger.debug(
            f"{operation} finished",
            extra={"tool": operation, "duration_ms": round(duration_ms, 3)},
        )
        call_id_var.reset(token)


async def path_to_url(path: str, flavour: str | None = None) -> dict[str, Any]:
    """
    Convert a filesystem path to a file:// URL.

    Args:
        path: Path to convert, absolute or relative
        flavour: "native", "posix" or "windows"; defaults to FILE_URL_FLAVOUR

    Returns:
        Success:
            {"status": "success", "url": "file:///some/file.txt", "flavour": "posix"}

        Error:
            {
                "status": "error",
                "error_code": "validation_error" | "encoding_not_representable",
                "message": "Human-readable error message"
            }
    """
    logger.info(f"path_to_url called: path={path!r}, flavour={flavour}")

    def convert() -> dict[str, Any]:
        config = get_config()
        validated = validate_path_input(path)
        resolved = validate_flavour_input(flavour, config.flavour)
        url = path_to_file_url(validated, flavour=resolved, errors=config.text_errors)
        return {"status": "success", "url": url, "flavour": resolved.name}

    return await _run("path_to_url", convert)


async def url_to_path(url: str, flavour: str | None = None) -> dict[str, Any]:
    """
    Convert a file:// URL to a filesystem path.

    Args:
        url: URL to convert, e.g. "file:///foo/bar%20baz.txt"
        flavour: "native", "posix" or "windows"; defaults to FILE_URL_FLAVOUR

    Returns:
        Success:
            {"status": "success", "path": "/foo/bar baz.txt", "flavour": "posix"}

        Error:
            {
                "status": "error",
                "error_code": "validation_error" | "decoding_not_representable"
                              | "malformed_escape",
                "message": "Human-readable error message",
                "segment_index": 3
            }

    Raw bytes that are not valid text are shown with backslash escapes.
    """
    logger.info(f"url_to_path called: url={url!r}, flavour={flavour}")

    def convert() -> dict[str, Any]:
        config = get_config()
        validated = validate_url_input(url)
        resolved = validate_flavour_input(flavour, config.flavour)
        path = file_url_to_path(
            validated,
            flavour=resolved,
            errors=config.text_errors,
            strict_escapes=config.strict_escapes,
        )
        return {
            "status": "success",
            "path": _printable(str(path)),
            "flavour": resolved.name,
        }

    return await _run("url_to_path", convert)


async def encode_component(text: str) -> dict[str, Any]:
    """
    Percent-encode a single path component given as text.

    Returns:
        {"status": "success", "encoded": "some%20%26%20what.whtvr"}
    """

    def convert() -> dict[str, Any]:
        value = validate_component_input("text", text)
        return {"status": "success", "encoded": encode_component_bytes(value)}

    return await _run("encode_component", convert)


async def decode_component(encoded: str) -> dict[str, Any]:
    """
    Percent-decode a single path component.

    Returns:
        {"status": "success", "text": "bar baz.txt", "hex": "6261722062617a2e747874"}

        text is null when the decoded bytes are not valid UTF-8.
    """

    def convert() -> dict[str, Any]:
        value = validate_component_input("encoded", encoded)
        raw = decode_component_bytes(value, strict=get_config().strict_escapes)
        try:
            text: str | None = raw.decode("utf-8")
        except UnicodeDecodeError:
            text = None
        return {"status": "success", "text": text, "hex": raw.hex()}

    return await _run("decode_component", convert)


def _printable(text: str) -> str:
    """Render surrogate-escaped bytes as backslash escapes."""
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "backslashreplace")
