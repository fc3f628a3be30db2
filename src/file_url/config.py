"""Runtime configuration management.

Environment Variables:
    FILE_URL_LOG_LEVEL: Logging level (default: INFO)
    FILE_URL_LOG_MODE: Logging mode: stderr, file, both (default: stderr)
    FILE_URL_LOG_FILE: Log file path (optional, for file/both modes)
    FILE_URL_FLAVOUR: Path flavour: native, posix, windows (default: native)
    FILE_URL_TEXT_ERRORS: Invalid text policy: strict, replace (default: strict)
    FILE_URL_STRICT_ESCAPES: Reject malformed %-escapes (default: false)
    FILE_URL_ENABLE_HEALTH_CHECK: Enable health_check tool (default: true)
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, cast


@dataclass
class Config:
    """Runtime configuration for file-url."""

    log_level: str  # Logging level: DEBUG, INFO, WARNING, ERROR
    log_mode: Literal["stderr", "file", "both"]  # Logging mode
    log_file: Path | None  # Log file path (for file/both modes)
    flavour: Literal["native", "posix", "windows"]  # Default path flavour
    text_errors: Literal["strict", "replace"]  # Policy for non-text components
    strict_escapes: bool  # Reject malformed %-escapes when decoding
    enable_health_check: bool  # Enable health_check tool


_config: Config | None = None


def _parse_bool(name: str, default: str) -> bool:
    value = os.getenv(name, default).lower()
    if value not in ("true", "false"):
        raise ValueError(f"{name} must be true or false, got: {value}")
    return value == "true"


def load_config() -> Config:
    """
    Load configuration from environment variables.

    Validates all configuration values and returns a Config instance with
    defaults applied.

    Returns:
        Config instance with validated values

    Raises:
        ValueError: If configuration values are invalid
    """
    # Parse log level
    log_level = os.getenv("FILE_URL_LOG_LEVEL", "INFO").upper()
    valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if log_level not in valid_levels:
        raise ValueError(
            f"FILE_URL_LOG_LEVEL must be one of {valid_levels}, got: {log_level}"
        )

    # Parse log mode
    log_mode_str = os.getenv("FILE_URL_LOG_MODE", "stderr").lower()
    valid_modes = {"stderr", "file", "both"}
    if log_mode_str not in valid_modes:
        raise ValueError(
            f"FILE_URL_LOG_MODE must be one of {valid_modes}, got: {log_mode_str}"
        )
    log_mode = cast(Literal["stderr", "file", "both"], log_mode_str)

    # Parse log file
    log_file = None
    if log_file_str := os.getenv("FILE_URL_LOG_FILE"):
        log_file = Path(log_file_str).resolve()

    # Parse flavour
    flavour_str = os.getenv("FILE_URL_FLAVOUR", "native").lower()
    valid_flavours = {"native", "posix", "windows"}
    if flavour_str not in valid_flavours:
        raise ValueError(
            f"FILE_URL_FLAVOUR must be one of {valid_flavours}, got: {flavour_str}"
        )
    flavour = cast(Literal["native", "posix", "windows"], flavour_str)

    # Parse text error policy
    text_errors_str = os.getenv("FILE_URL_TEXT_ERRORS", "strict").lower()
    valid_policies = {"strict", "replace"}
    if text_errors_str not in valid_policies:
        raise ValueError(
            f"FILE_URL_TEXT_ERRORS must be one of {valid_policies}, got: {text_errors_str}"
        )
    text_errors = cast(Literal["strict", "replace"], text_errors_str)

    strict_escapes = _parse_bool("FILE_URL_STRICT_ESCAPES", "false")
    enable_health_check = _parse_bool("FILE_URL_ENABLE_HEALTH_CHECK", "true")

    return Config(
        log_level=log_level,
        log_mode=log_mode,
        log_file=log_file,
        flavour=flavour,
        text_errors=text_errors,
        strict_escapes=strict_escapes,
        enable_health_check=enable_health_check,
    )


def get_config() -> Config:
    """
    Get singleton config instance.

    Loads configuration on first call and caches the result.

    Returns:
        Config instance (loads on first call)
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """
    Reset cached config (for testing only).

    This clears the singleton config instance, forcing load_config() to be
    called again on the next get_config() call.
    """
    global _config
    _config = None
