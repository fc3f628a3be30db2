"""Conversion between filesystem paths and file:// URLs."""

from .codec import RESERVED_BYTES, decode_component, encode_component
from .errors import (
    DecodingNotRepresentableError,
    EncodingNotRepresentableError,
    FileUrlError,
    MalformedEscapeError,
)
from .flavours import Flavour, PosixFlavour, WindowsFlavour, get_flavour
from .translator import file_url_to_path, path_to_file_url

__version__ = "0.1.0"

__all__ = [
    "RESERVED_BYTES",
    "DecodingNotRepresentableError",
    "EncodingNotRepresentableError",
    "FileUrlError",
    "Flavour",
    "MalformedEscapeError",
    "PosixFlavour",
    "WindowsFlavour",
    "decode_component",
    "encode_component",
    "file_url_to_path",
    "get_flavour",
    "path_to_file_url",
]
