"""Journal Vault MCP Server

Timestamped daily notes in markdown vaults via Model Context Protocol.
"""

from journal_vault.config import load_vault_registry, get_vault_registry
from journal_vault.data_models import Representation, VaultConfiguration, VaultRegistry
from journal_vault.errors import ConfigurationError, JournalError, NoteIOError, ParseError
from journal_vault.core.date_time import DateTimeResolver
from journal_vault.core.note_operations import add_note, add_notes, list_notes, note_path_for
from journal_vault.core.vault_operations import get_note_path
from journal_vault.server import mcp, run_server

# Import tools to register them with the MCP server
from journal_vault import tools  # noqa: F401

__version__ = "0.3.0"
__all__ = [
    "ConfigurationError",
    "DateTimeResolver",
    "JournalError",
    "NoteIOError",
    "ParseError",
    "Representation",
    "VaultConfiguration",
    "VaultRegistry",
    "add_note",
    "add_notes",
    "get_note_path",
    "get_vault_registry",
    "list_notes",
    "load_vault_registry",
    "mcp",
    "note_path_for",
    "run_server",
]
