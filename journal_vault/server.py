"""FastMCP server for the journal vault tools."""

import logging
from mcp.server.fastmcp import FastMCP

from journal_vault.constants import CONFIG_PATH, LOG_LEVEL

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

mcp = FastMCP("journal_vault")

# journal_vault/__init__.py imports journal_vault.tools, whose modules register
# their functions on ``mcp`` at import time.


def run_server():
    """Serve the journal tools over stdio."""
    logger.info("Starting journal vault server (config: %s)", CONFIG_PATH)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
