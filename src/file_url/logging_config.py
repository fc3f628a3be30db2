"""Logging configuration for file-url.

JSON lines go to stderr by default. A human-readable rotating log file can
be enabled for development.

IMPORTANT: Nothing here runs at import time. The server entry point calls
setup_logging() explicitly; library users configure logging themselves.
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import Config

# Identifier of the tool call being served, for correlating log lines
call_id_var: ContextVar[str | None] = ContextVar("call_id", default=None)

# Extra fields copied from log records into JSON output
EXTRA_FIELDS = ("tool", "flavour", "duration_ms", "error_code", "segment_index")


class JsonFormatter(logging.Formatter):
    """Format log records as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record as a JSON line.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log line
        """
        log_obj = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if call_id := call_id_var.get():
            log_obj["call_id"] = call_id

        for key in EXTRA_FIELDS:
            if hasattr(record, key):
                log_obj[key] = getattr(record, key)

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        # Paths may carry surrogate-escaped bytes
        return json.dumps(log_obj, default=str)


class CallIdFilter(logging.Filter):
    """Inject call_id into log records from the context variable."""

    def filter(self, record: logging.LogRecord) -> bool:
        if call_id := call_id_var.get():
            record.call_id = call_id  # type: ignore[attr-defined]
        return True


def setup_logging(config: "Config") -> None:
    """
    Configure logging from config.log_mode and config.log_level.

    Args:
        config: Configuration instance with logging settings

    Logging Modes:
        - "stderr": JSON lines to stderr
        - "file": Human-readable lines to config.log_file (or a
          timestamped file in the platform log directory)
        - "both": Both outputs

    Existing root handlers are replaced, so calling this twice does not
    duplicate output.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(config.log_level)
    root_logger.handlers.clear()

    call_id_filter = CallIdFilter()

    if config.log_mode in ("stderr", "both"):
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setFormatter(JsonFormatter())
        stderr_handler.addFilter(call_id_filter)
        root_logger.addHandler(stderr_handler)

    if config.log_mode in ("file", "both"):
        log_file = _get_log_file(config)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=5 * 1024 * 1024,  # 5MB
            backupCount=3,
            encoding="utf-8",
            errors="backslashreplace",
        )
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        file_handler.addFilter(call_id_filter)
        root_logger.addHandler(file_handler)

    logging.getLogger("file_url").setLevel(config.log_level)

    logging.info(
        "Logging initialized",
        extra={"log_mode": config.log_mode, "log_level": config.log_level},
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the file_url namespace.

    Example:
        >>> get_logger("translator").name
        'file_url.translator'
    """
    return logging.getLogger(f"file_url.{name}")


def _get_log_file(config: "Config") -> Path:
    if config.log_file:
        return config.log_file

    if sys.platform == "win32":
        log_dir = Path.home() / "AppData" / "Local" / "file-url" / "logs"
    else:
        log_dir = Path.home() / ".file-url" / "logs"

    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    return log_dir / f"file-url-{timestamp}.log"
