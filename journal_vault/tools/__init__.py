"""MCP tool definitions for journal vault operations.

This module imports all tool submodules to register them with the MCP server.
Each tool module uses the @mcp.tool() decorator to auto-register its tools.
"""

# Import all tool modules to register their @mcp.tool() decorated functions
from journal_vault.tools import vault_tools
from journal_vault.tools import journal_tools

__all__ = [
    "vault_tools",
    "journal_tools",
]
