"""Input validation utilities."""

from .inputs import (
    ValidationError,
    validate_component_input,
    validate_flavour_input,
    validate_path_input,
    validate_url_input,
)

__all__ = [
    "ValidationError",
    "validate_component_input",
    "validate_flavour_input",
    "validate_path_input",
    "validate_url_input",
]
