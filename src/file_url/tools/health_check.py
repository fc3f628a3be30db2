"""Health check tool implementation.

This module provides the health_check MCP tool, which reports configuration
and metrics and verifies the codec against known conversions.
"""

from typing import Any

from ..config import get_config
from ..errors import FileUrlError
from ..flavours import Flavour, get_flavour
from ..logging_config import get_logger
from ..metrics import get_metrics_collector
from ..translator import file_url_to_path, path_to_file_url

logger = get_logger("tools.health_check")

# (flavour, path, url) triples every build must reproduce
SELF_TEST_CASES = (
    ("posix", "/some/file.txt", "file:///some/file.txt"),
    ("posix", "/gi>/some & what.whtvr", "file:///gi%3E/some%20%26%20what.whtvr"),
    ("posix", "/tmp/\U0001F600/#{}^.txt", "file:///tmp/%F0%9F%98%80/%23%7B%7D%5E.txt"),
    ("windows", "C:\\WINDOWS\\clock.avi", "file:///C:/WINDOWS/clock.avi"),
)


def _run_self_test() -> list[str]:
    """Convert the self-test cases both ways and describe any mismatch."""
    problems: list[str] = []
    for flavour_name, path, expected_url in SELF_TEST_CASES:
        flavour = get_flavour(flavour_name)
        try:
            url = path_to_file_url(path, flavour=flavour)
            back = file_url_to_path(expected_url, flavour=flavour)
        except FileUrlError as e:
            problems.append(f"{flavour_name}: {path!r} failed: {e.message}")
            continue
        if url != expected_url:
            problems.append(f"{flavour_name}: {path!r} encoded to {url}, expected {expected_url}")
        if back != flavour.path_cls(path):
            problems.append(f"{flavour_name}: {expected_url} decoded to {back}, expected {path!r}")
    return problems


async def health_check() -> dict[str, Any]:
    """
    Report server health.

    Returns:
        Healthy:
            {
                "status": "healthy",
                "flavour": "posix",
                "config": {
                    "log_level": "INFO",
                    "log_mode": "stderr",
                    "flavour": "native",
                    "text_errors": "strict",
                    "strict_escapes": false,
                    "enable_health_check": true
                },
                "uptime_seconds": 12.5,
                "metrics": {"path_to_url": {"count": 3, ...}, ...}
            }

        Degraded (self-test mismatch): same fields plus
            "diagnostics": ["posix: '/some/file.txt' encoded to ..., expected ..."]
    """
    logger.info("health_check called")

    config = get_config()
    flavour: Flavour = get_flavour(config.flavour)

    diagnostics = _run_self_test()
    for problem in diagnostics:
        logger.warning(problem)

    collector = get_metrics_collector()
    response: dict[str, Any] = {
        "status": "degraded" if diagnostics else "healthy",
        "flavour": flavour.name,
        "config": {
            "log_level": config.log_level,
            "log_mode": config.log_mode,
            "flavour": config.flavour,
            "text_errors": config.text_errors,
            "strict_escapes": config.strict_escapes,
            "enable_health_check": config.enable_health_check,
        },
        "uptime_seconds": round(collector.uptime_seconds(), 2),
        "metrics": collector.to_dict(),
    }
    if diagnostics:
        response["diagnostics"] = diagnostics

    logger.info(f"Health check completed: {response['status']}")
    return response
