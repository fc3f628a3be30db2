"""Conversion between filesystem paths and file:// URLs.

Handles platform differences through flavours:
- POSIX: file:///path/to/file, components kept as raw bytes
- Windows: file:///C:/path/to/file, drive letter left unencoded

Each call is a single left-to-right pass over the path components; no state
is kept between calls.
"""

import os
import re
from pathlib import PurePath

from .codec import decode_component, encode_component
from .errors import DecodingNotRepresentableError, MalformedEscapeError
from .flavours import Flavour, TextErrors, get_flavour
from .logging_config import get_logger

logger = get_logger("translator")

SCHEME_TOKEN = "file:"

_SEPARATOR = re.compile(r"[/\\]")
_PATH_OPERATORS = (b".", b"..")


def path_to_file_url(
    path: str | bytes | os.PathLike,
    *,
    flavour: Flavour | str | None = None,
    errors: TextErrors = "strict",
) -> str:
    """Convert a filesystem path to a file:// URL.

    The path is not resolved or normalized. A relative path is emitted under
    the root like an absolute one. '.' and '..' components pass through
    literally.

    Args:
        path: Path to convert (str, bytes or os.PathLike)
        flavour: Flavour instance or name; None selects the native flavour
        errors: "strict" raises on components that are not valid text on
                text-only flavours, "replace" substitutes U+FFFD

    Returns:
        file:// URL string

    Raises:
        EncodingNotRepresentableError: If errors="strict" and a component
            cannot be represented as text
        ValueError: If flavour names an unknown flavour

    Example:
        >>> path_to_file_url("/gi>/some & what.whtvr", flavour="posix")
        'file:///gi%3E/some%20%26%20what.whtvr'
        >>> path_to_file_url(r"C:\\WINDOWS\\clock.avi", flavour="windows")
        'file:///C:/WINDOWS/clock.avi'
    """
    flavour = _resolve_flavour(flavour)
    prefix, components = flavour.split_path(path, errors=errors)

    encoded = "/".join(
        component.decode("ascii")
        if component in _PATH_OPERATORS
        else encode_component(component)
        for component in components
    )

    if prefix is None:
        url = f"file:///{encoded}"
    else:
        url = f"file://{prefix}/{encoded}"

    logger.debug(f"path_to_file_url: {path!r} -> {url} ({flavour.name})")
    return url


def file_url_to_path(
    url: str,
    *,
    flavour: Flavour | str | None = None,
    errors: TextErrors = "strict",
    strict_escapes: bool = False,
) -> PurePath:
    """Convert a file:// URL to a filesystem path.

    The URL is split on both '/' and '\\'. A leading 'file:' token becomes
    the root, so file URLs always give absolute paths. Input without the
    scheme token is decoded as a relative path.

    Args:
        url: URL string, e.g. 'file:///foo/bar%20baz.txt'
        flavour: Flavour instance or name; None selects the native flavour
        errors: "strict" raises on segments that are not valid text on
                text-only flavours, "replace" substitutes U+FFFD
        strict_escapes: Raise on malformed %-escapes instead of passing
                        them through literally

    Returns:
        Path built by the flavour (pathlib.Path for the native flavour)

    Raises:
        MalformedEscapeError: If strict_escapes and a segment has a bad escape
        DecodingNotRepresentableError: If a segment is not valid text or a
            decoded segment is not a valid path component
        ValueError: If flavour names an unknown flavour

    Example:
        >>> file_url_to_path("file:///foo/bar%20baz.txt", flavour="posix")
        PurePosixPath('/foo/bar baz.txt')
    """
    flavour = _resolve_flavour(flavour)
    pieces = _SEPARATOR.split(url)

    absolute = pieces[0] == SCHEME_TOKEN
    first_index = 1 if absolute else 0

    segments = []
    for index, piece in enumerate(pieces[first_index:], start=first_index):
        try:
            segments.append(decode_component(piece, strict=strict_escapes))
        except MalformedEscapeError as e:
            logger.debug(f"Malformed escape in segment {index} of {url!r}")
            raise MalformedEscapeError(
                f"Segment {index} of {url!r}: {e.message}",
                offset=e.offset,
                segment_index=index,
            ) from e
        except DecodingNotRepresentableError as e:
            raise DecodingNotRepresentableError(
                f"Segment {index} of {url!r}: {e.message}",
                segment_index=index,
                details=e.details,
            ) from e

    path = flavour.build_path(
        segments, absolute=absolute, first_index=first_index, errors=errors
    )
    logger.debug(f"file_url_to_path: {url} -> {path!r} ({flavour.name})")
    return path


def _resolve_flavour(flavour: Flavour | str | None) -> Flavour:
    if isinstance(flavour, Flavour):
        return flavour
    return get_flavour(flavour)
