"""MCP tools for vault discovery."""

import logging
from typing import Any
from mcp.server.fastmcp import Context

from journal_vault.server import mcp
from journal_vault.models import ListVaultsInput
from journal_vault.config import get_vault_registry

logger = logging.getLogger(__name__)


@mcp.tool()
async def list_journal_vaults(
    input: ListVaultsInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """List configured journal vaults.

    Returns:
        {
            "default": str,    # Vault used when a tool omits 'vault'
            "vaults": [
                {
                    "name": str,
                    "path": str,
                    "exists": bool,
                    "locale": str,
                    "representation": "bullet" | "table",
                    "section_header": str | None,
                    "categories": [str]
                }
            ]
        }

    Error Handling:
        - Config file missing → Error with expected config path
        - Invalid config format → Error describing the offending vault
    """
    registry = get_vault_registry()
    logger.debug("Listing %d configured vault(s)", len(registry.vaults))
    return registry.as_payload()
