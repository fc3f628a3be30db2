"""Input validation for MCP tool parameters.

Only the shape of the input is checked here. Paths are never resolved or
checked for existence.
"""

from ..flavours import Flavour, flavour_names, get_flavour


class ValidationError(Exception):
    """Base exception for validation errors."""

    def __init__(self, field: str, message: str) -> None:
        """Initialize validation error.

        Args:
            field: The field that failed validation
            message: Description of what went wrong
        """
        super().__init__(message)
        self.field = field
        self.message = message

    def to_error_response(self) -> dict[str, str]:
        """Convert to MCP-compatible error response.

        Returns:
            Error dict with status, error_code, and message fields
        """
        return {
            "status": "error",
            "error_code": "validation_error",
            "message": f"{self.field}: {self.message}",
        }


def validate_path_input(path: str | None) -> str:
    """Validate path parameter for path_to_url tool.

    Raises:
        ValidationError: If path is None or empty
    """
    if path is None:
        raise ValidationError("path", "path parameter is required")
    if not path.strip():
        raise ValidationError("path", "path parameter cannot be empty")
    return path


def validate_url_input(url: str | None) -> str:
    """Validate url parameter for url_to_path tool.

    Scheme-less input is accepted and decodes to a relative path.

    Raises:
        ValidationError: If url is None, empty, or uses a scheme other than file
    """
    if url is None:
        raise ValidationError("url", "url parameter is required")
    if not url.strip():
        raise ValidationError("url", "url parameter cannot be empty")

    scheme, sep, _ = url.partition(":")
    if sep and scheme.isalpha() and len(scheme) > 1 and scheme.lower() != "file":
        raise ValidationError("url", f"Expected file:// URL, got scheme: {scheme}")
    return url


def validate_component_input(field: str, value: str | None) -> str:
    """Validate a single path component parameter.

    Empty strings are allowed, they encode and decode to empty.

    Raises:
        ValidationError: If value is None
    """
    if value is None:
        raise ValidationError(field, f"{field} parameter is required")
    return value


def validate_flavour_input(flavour: str | None, default: str) -> Flavour:
    """Resolve the flavour parameter, falling back to the configured default.

    Args:
        flavour: Flavour name from the caller, or None
        default: Configured default flavour name

    Returns:
        Flavour instance

    Raises:
        ValidationError: If flavour is not a known name
    """
    name = flavour if flavour is not None else default
    try:
        return get_flavour(name)
    except ValueError as e:
        raise ValidationError(
            "flavour", f"Unknown flavour {name!r}, expected one of {flavour_names()}"
        ) from e
