"""Platform path flavours.

A flavour knows how a platform spells paths: which bytes separate
components, whether a drive or UNC prefix leads the path, and whether
components are raw bytes or must be valid text.

The set of flavours is closed:
- PosixFlavour: byte-transparent, components may hold any byte except '/'
- WindowsFlavour: text-only, drive letters and UNC shares, '/' and '\\'
  both separate components

The native flavour is chosen once at import from os.name.
"""

import ntpath
import os
import re
import sys
from abc import ABC, abstractmethod
from pathlib import Path, PurePath, PurePosixPath, PureWindowsPath
from typing import Literal

from .codec import encode_component
from .errors import DecodingNotRepresentableError, EncodingNotRepresentableError

TextErrors = Literal["strict", "replace"]

_DRIVE_LETTER = re.compile(r"^[A-Za-z]:$")
_WINDOWS_SEPARATOR = re.compile(r"[\\/]")
_LONE_SURROGATE = re.compile(r"[\ud800-\udc7f\udd00-\udfff]")


class Flavour(ABC):
    """Abstract base for platform path strategies.

    Subclasses may only be defined in this module.
    """

    name: str
    separators: bytes

    def __init__(self, path_cls: type[PurePath]) -> None:
        """Initialize flavour.

        Args:
            path_cls: Path class built by build_path()
        """
        self.path_cls = path_cls

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__module__ != __name__:
            raise TypeError(
                f"Cannot subclass Flavour outside {__name__}: {cls.__qualname__}"
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path_cls={self.path_cls.__name__})"

    @abstractmethod
    def split_path(
        self, path: str | bytes | os.PathLike, *, errors: TextErrors = "strict"
    ) -> tuple[str | None, list[bytes]]:
        """
        Split a path into its URL prefix and raw components.

        The root marker and empty components are dropped.

        Args:
            path: Path to split
            errors: Policy for components that are not valid text

        Returns:
            Tuple of (prefix, components). prefix is the text placed between
            'file://' and the first '/' of the URL path (e.g. "/C:" or
            "host/share"), or None when the path has no drive.

        Raises:
            EncodingNotRepresentableError: If errors="strict" and a component
                cannot be represented as text
        """
        ...

    @abstractmethod
    def build_path(
        self,
        segments: list[bytes],
        *,
        absolute: bool,
        first_index: int = 0,
        errors: TextErrors = "strict",
    ) -> PurePath:
        """
        Reassemble decoded URL segments into a path.

        Args:
            segments: Decoded segments in URL order, empty ones included
            absolute: Whether the URL carried the 'file:' scheme token
            first_index: URL position of segments[0], used in error reports
            errors: Policy for segments that are not valid text

        Returns:
            Instance of path_cls

        Raises:
            DecodingNotRepresentableError: If a segment holds a separator or
                NUL byte, or (text-only flavours, errors="strict") is not
                valid UTF-8
        """
        ...

    def _check_segment(self, segment: bytes, index: int) -> None:
        for separator in self.separators:
            if separator in segment:
                raise DecodingNotRepresentableError(
                    f"Segment {index} decodes to a path separator: {segment!r}",
                    segment_index=index,
                )
        if 0 in segment:
            raise DecodingNotRepresentableError(
                f"Segment {index} decodes to a NUL byte: {segment!r}",
                segment_index=index,
            )


class PosixFlavour(Flavour):
    """Byte-transparent flavour for POSIX-like systems.

    Text paths are converted with the filesystem encoding and
    surrogateescape, the same way os.fsencode/os.fsdecode do, so names that
    are not valid text still round-trip exactly. A str holding a lone
    surrogate that surrogateescape cannot map to a byte is rejected, or
    with errors="replace" written as U+FFFD.
    """

    name = "posix"
    separators = b"/"

    def __init__(self, path_cls: type[PurePath] = PurePosixPath) -> None:
        super().__init__(path_cls)
        self._encoding = sys.getfilesystemencoding()

    def split_path(
        self, path: str | bytes | os.PathLike, *, errors: TextErrors = "strict"
    ) -> tuple[str | None, list[bytes]]:
        raw = os.fspath(path)
        if isinstance(raw, bytes):
            return None, [part for part in raw.split(b"/") if part]

        components = []
        for index, part in enumerate(p for p in raw.split("/") if p):
            components.append(self._text_to_bytes(part, raw, index, errors))
        return None, components

    def _text_to_bytes(
        self, text: str, path: str, index: int, errors: TextErrors
    ) -> bytes:
        # surrogateescape only carries \udc80-\udcff back to a byte
        try:
            return text.encode(self._encoding, "surrogateescape")
        except UnicodeEncodeError as e:
            if errors == "replace":
                return _LONE_SURROGATE.sub("\ufffd", text).encode(
                    self._encoding, "surrogateescape"
                )
            raise EncodingNotRepresentableError(
                f"Path {path!r} is not valid text at component {index}",
                segment_index=index,
                details={"path": path, "start": e.start, "end": e.end},
            ) from e

    def build_path(
        self,
        segments: list[bytes],
        *,
        absolute: bool,
        first_index: int = 0,
        errors: TextErrors = "strict",
    ) -> PurePath:
        parts = []
        for index, segment in enumerate(segments, start=first_index):
            if not segment:
                continue
            self._check_segment(segment, index)
            parts.append(segment)

        joined = b"/".join(parts)
        if absolute:
            joined = b"/" + joined
        return self.path_cls(joined.decode(self._encoding, "surrogateescape"))


class WindowsFlavour(Flavour):
    """Text-only flavour for drive-letter systems.

    Components must be valid Unicode. With errors="replace" invalid
    sequences become U+FFFD instead of raising.
    """

    name = "windows"
    separators = b"/\\"

    def __init__(self, path_cls: type[PurePath] = PureWindowsPath) -> None:
        super().__init__(path_cls)

    def split_path(
        self, path: str | bytes | os.PathLike, *, errors: TextErrors = "strict"
    ) -> tuple[str | None, list[bytes]]:
        raw = os.fspath(path)
        text_path = raw if isinstance(raw, str) else _path_bytes_to_text(raw, errors)
        drive, rest = ntpath.splitdrive(text_path)

        components = []
        for index, part in enumerate(p for p in _WINDOWS_SEPARATOR.split(rest) if p):
            components.append(_text_to_utf8(part, text_path, index, errors))

        if not drive:
            return None, components
        if _DRIVE_LETTER.match(drive):
            return "/" + drive, components

        # UNC share: \\host\share becomes the URL authority host/share
        share = [
            encode_component(_text_to_utf8(part, text_path, None, errors))
            for part in _WINDOWS_SEPARATOR.split(drive)
            if part
        ]
        return "/".join(share), components

    def build_path(
        self,
        segments: list[bytes],
        *,
        absolute: bool,
        first_index: int = 0,
        errors: TextErrors = "strict",
    ) -> PurePath:
        texts: list[str] = []
        for index, segment in enumerate(segments, start=first_index):
            if segment:
                self._check_segment(segment, index)
            texts.append(_bytes_to_text(segment, index, errors))

        prefix = ""
        # file://host/share/... carries a UNC share in the authority
        if (
            absolute
            and len(texts) > 1
            and texts[0] == ""
            and texts[1] != ""
            and not _DRIVE_LETTER.match(texts[1])
        ):
            prefix = "\\\\" + "\\".join(texts[1:3])
            texts = texts[3:]

        parts = [text for text in texts if text]
        if not prefix and parts and _DRIVE_LETTER.match(parts[0]):
            prefix = parts.pop(0)

        if prefix:
            return self.path_cls(prefix + "\\" + "\\".join(parts))
        if absolute:
            return self.path_cls("\\" + "\\".join(parts))
        return self.path_cls("\\".join(parts))


def _bytes_to_text(data: bytes, index: int, errors: TextErrors) -> str:
    """Decode UTF-8 bytes, raising a typed error or substituting U+FFFD."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        if errors == "replace":
            return data.decode("utf-8", "replace")
        raise DecodingNotRepresentableError(
            f"Invalid UTF-8 in segment {index}: {data!r}",
            segment_index=index,
            details={"start": e.start, "end": e.end},
        ) from e


def _path_bytes_to_text(path: bytes, errors: TextErrors) -> str:
    """Decode a bytes path given to a text-only flavour."""
    try:
        return path.decode("utf-8")
    except UnicodeDecodeError as e:
        if errors == "replace":
            return path.decode("utf-8", "replace")
        raise EncodingNotRepresentableError(
            f"Path {path!r} is not valid UTF-8",
            details={"start": e.start, "end": e.end},
        ) from e


def _text_to_utf8(
    text: str, path: str, index: int | None, errors: TextErrors
) -> bytes:
    """Encode a path component to UTF-8, handling lone surrogates."""
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as e:
        if errors == "replace":
            return (
                text.encode("utf-16", "surrogatepass")
                .decode("utf-16", "replace")
                .encode("utf-8")
            )
        where = f"component {index}" if index is not None else "drive"
        raise EncodingNotRepresentableError(
            f"Path {path!r} is not valid text at {where}",
            segment_index=index,
            details={"path": path, "start": e.start, "end": e.end},
        ) from e


POSIX = PosixFlavour()
WINDOWS = WindowsFlavour()
NATIVE: Flavour = WindowsFlavour(Path) if os.name == "nt" else PosixFlavour(Path)

_FLAVOURS: dict[str, Flavour] = {
    "native": NATIVE,
    "posix": POSIX,
    "windows": WINDOWS,
}


def get_flavour(name: str | None = None) -> Flavour:
    """
    Look up a flavour by name.

    Args:
        name: "native", "posix" or "windows". None means "native".

    Returns:
        The flavour. "native" builds concrete pathlib.Path objects, the
        named flavours build pure paths usable on any host.

    Raises:
        ValueError: If name is not a known flavour
    """
    if name is None:
        return NATIVE
    try:
        return _FLAVOURS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown flavour: {name!r}. Expected one of {sorted(_FLAVOURS)}"
        ) from None


def flavour_names() -> list[str]:
    """Return the accepted flavour names."""
    return sorted(_FLAVOURS)
