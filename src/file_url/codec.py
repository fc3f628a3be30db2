"""Percent-encoding of single path components.

A component is handled as raw bytes so that names which are not valid text
on byte-transparent platforms survive the trip through a URL unchanged.

The Reserved Byte Set follows RFC 3986 section 2.2, except ':' which is
left alone so Windows drive designators stay readable. Anything outside the
RFC 3986 unreserved set is escaped as well, including '%' itself.

The escaping itself is urllib.parse quote_from_bytes and unquote_to_bytes.
Strict decoding adds a check for malformed escapes in front of unquoting.
"""

import re
from urllib.parse import quote_from_bytes, unquote_to_bytes

from .errors import (
    DecodingNotRepresentableError,
    EncodingNotRepresentableError,
    MalformedEscapeError,
)

# Control bytes plus RFC 3986 reserved characters, minus ':'.
RESERVED_BYTES: frozenset[int] = frozenset(
    [*range(0x00, 0x20), 0x7F]
    + list(b"/ #$&+,;=?@[]{}`<>^!'()*")
)

UNRESERVED_BYTES: frozenset[int] = frozenset(
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-._~"
)

# Kept literal on top of the RFC 3986 unreserved set that quote() never escapes.
SAFE_CHARS = ":"

_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def encode_component(segment: bytes | str) -> str:
    """Percent-encode one path component.

    Args:
        segment: Raw component bytes. A str is taken as UTF-8 with surrogateescape,
                 so surrogate-escaped bytes come back out as the original bytes.

    Returns:
        ASCII string with every non-literal byte written as %XX (uppercase hex)

    Raises:
        EncodingNotRepresentableError: If a str holds a lone surrogate that
            surrogateescape cannot map back to a byte

    Example:
        >>> encode_component(b"some & what.whtvr")
        'some%20%26%20what.whtvr'
    """
    if isinstance(segment, str):
        try:
            segment = segment.encode("utf-8", "surrogateescape")
        except UnicodeEncodeError as e:
            raise EncodingNotRepresentableError(
                f"Component {segment!r} is not valid text at offset {e.start}",
                details={"start": e.start, "end": e.end},
            ) from e
    return quote_from_bytes(segment, safe=SAFE_CHARS)


def decode_component(segment: str, *, strict: bool = False) -> bytes:
    """Percent-decode one URL path segment back to raw bytes.

    Literal characters are taken as UTF-8. Escapes accept either hex case.

    Args:
        segment: Encoded segment, may contain %XX escapes
        strict: Raise on a '%' not followed by two hex digits instead of
                passing it through literally

    Returns:
        Decoded raw bytes

    Raises:
        MalformedEscapeError: If strict and a malformed escape is found
        DecodingNotRepresentableError: If the segment holds a lone surrogate
            that has no byte form
    """
    if strict:
        match = _MALFORMED_ESCAPE.search(segment)
        if match is not None:
            offset = match.start()
            raise MalformedEscapeError(
                f"Malformed percent escape at offset {offset}: "
                f"{segment[offset:offset + 3]!r}",
                offset=offset,
            )

    try:
        raw = segment.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError as e:
        raise DecodingNotRepresentableError(
            f"Segment {segment!r} is not valid text at offset {e.start}",
            details={"start": e.start, "end": e.end},
        ) from e
    return unquote_to_bytes(raw)
