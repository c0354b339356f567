"""Journal note MCP tools.

This module provides MCP tool wrappers for the journal core:
- Add a timestamped note to a day file
- Add several notes at once
- List a day's notes
- Resolve the day file path for an editor

All tools delegate to core operations in journal_vault.core.note_operations.
"""
from __future__ import annotations

from datetime import date
from typing import Any

from mcp.server.fastmcp import Context

from journal_vault.config import get_vault_registry
from journal_vault.core.date_time import DateTimeResolver
from journal_vault.core.note_operations import add_note, add_notes, list_notes, note_path_for
from journal_vault.data_models import VaultConfiguration
from journal_vault.models import AddNoteInput, AddNotesInput, ListNotesInput, NotePathInput
from journal_vault.models.base import BaseDayInput
from journal_vault.server import mcp


def _resolve_day(vault: VaultConfiguration, input: BaseDayInput) -> date:
    resolver = DateTimeResolver(vault.locale)
    if input.date is not None:
        return resolver.parse_date(input.date, vault.date_format)
    if input.relative_days is not None:
        return resolver.resolve_relative_date(input.relative_days)
    return date.today()


# ==============================================================================
# WRITE OPERATIONS
# ==============================================================================

# Appends one entry; the day file is created from the template on first use.
@mcp.tool()
async def add_journal_note(
    input: AddNoteInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Add a timestamped note to a day file.

    Args:
        input (AddNoteInput): Validated input containing:
            - content (str): Note text; shorthand phrases are expanded
            - date (str, optional): Day in the vault locale's format
            - relative_days (int, optional): 1 = yesterday, -1 = tomorrow
            - time (str, optional): Time of day, defaults to now
            - time_format (str, optional): '12h' or '24h'
            - category (str, optional): Selects a section header override
            - vault (str, optional): Vault name (omit to use default vault)

    Returns:
        {"vault": str, "note": str, "path": str, "entry": str, "section": str | None,
         "status": "created" | "appended"}

    Error Handling:
        - Unparseable date/time → Error naming the input and locale/override
        - Template file missing → Error naming the template path, nothing written
    """
    vault = get_vault_registry().get(input.vault)
    timestamp = DateTimeResolver(vault.locale).resolve_timestamp(
        date_text=input.date,
        relative_days=input.relative_days,
        time_text=input.time,
        time_format=input.time_format,
        date_format=vault.date_format,
    )
    return add_note(vault, input.content, timestamp, input.category)


# Adds each non-blank line of ``content`` as its own entry, all with the same timestamp.
@mcp.tool()
async def add_journal_notes(
    input: AddNotesInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Add several notes, one per non-blank line of content.

    Returns:
        {"vault": str, "path": str, "count": int, "status": "appended" | "empty"}
    """
    vault = get_vault_registry().get(input.vault)
    timestamp = DateTimeResolver(vault.locale).resolve_timestamp(
        date_text=input.date,
        relative_days=input.relative_days,
        time_text=input.time,
        time_format=input.time_format,
        date_format=vault.date_format,
    )
    return add_notes(vault, input.content.splitlines(), timestamp, input.category)


# ==============================================================================
# READ OPERATIONS
# ==============================================================================

@mcp.tool()
async def list_journal_notes(
    input: ListNotesInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """List the entries recorded for a day.

    Returns:
        {"vault": str, "date": "YYYY-MM-DD", "section": str | None, "notes": [str]}

    Examples:
        - Use when: Reviewing what was logged today or on a past day
        - Don't use: Need the raw file → Use get_journal_note_path()
    """
    vault = get_vault_registry().get(input.vault)
    day = _resolve_day(vault, input)
    return {
        "vault": vault.name,
        "date": DateTimeResolver.format_date(day),
        "section": vault.header_for(input.category),
        "notes": list_notes(vault, day, input.category),
    }


@mcp.tool()
async def get_journal_note_path(
    input: NotePathInput,
    ctx: Context | None = None,
) -> dict[str, Any]:
    """Return the day file path for a date, e.g. to open it in an editor.

    Returns:
        {"vault": str, "note": str, "path": str, "exists": bool}
    """
    vault = get_vault_registry().get(input.vault)
    return note_path_for(vault, _resolve_day(vault, input))
