"""Exception types raised by the path/URL codec."""

from typing import Any


class FileUrlError(Exception):
    """Base exception for conversion errors."""

    def __init__(
        self,
        error_code: str,
        message: str,
        segment_index: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize conversion error.

        Args:
            error_code: One of: encoding_not_representable,
                        decoding_not_representable, malformed_escape
            message: Human-readable error description
            segment_index: 0-indexed position of the offending segment, if known
            details: Optional additional context
        """
        super().__init__(message)
        self.error_code = error_code
        self.message = message
        self.segment_index = segment_index
        self.details = details or {}

    def to_error_response(self) -> dict[str, Any]:
        """Convert to MCP-compatible error response.

        Returns:
            Error dict with status, error_code and message fields, plus
            segment_index when the failing segment is known
        """
        response: dict[str, Any] = {
            "status": "error",
            "error_code": self.error_code,
            "message": self.message,
        }
        if self.segment_index is not None:
            response["segment_index"] = self.segment_index
        return response


class EncodingNotRepresentableError(FileUrlError):
    """A path component cannot be converted to the platform's text form."""

    def __init__(
        self,
        message: str,
        segment_index: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__("encoding_not_representable", message, segment_index, details)


class DecodingNotRepresentableError(FileUrlError):
    """A decoded segment cannot form a valid path component."""

    def __init__(
        self,
        message: str,
        segment_index: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__("decoding_not_representable", message, segment_index, details)


class MalformedEscapeError(FileUrlError):
    """A '%' is not followed by two hex digits (strict decoding only)."""

    def __init__(
        self,
        message: str,
        offset: int,
        segment_index: int | None = None,
    ):
        super().__init__(
            "malformed_escape", message, segment_index, {"offset": offset}
        )
        self.offset = offset
