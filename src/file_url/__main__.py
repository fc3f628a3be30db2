"""Entry point for the file-url MCP server.

Logging is initialized BEFORE the server module is imported so that
nothing logs through an unconfigured root logger.
"""

import sys


def main() -> int:
    """
    Run the MCP server over stdio.

    Returns:
        Exit code (0 for success)
    """
    from .config import get_config
    from .logging_config import setup_logging

    config = get_config()
    setup_logging(config)

    from .server import mcp

    mcp.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
