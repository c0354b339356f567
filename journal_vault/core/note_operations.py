"""Core business logic for adding and listing journal notes."""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable, Optional

from journal_vault.core.date_time import DateTimeResolver
from journal_vault.core.entry_format import (
    classify_lines,
    convert_if_needed,
    is_header_like,
    known_header_labels,
    remove_table_gaps,
    render_entry,
    render_entry_block,
    render_table_header,
    table_headers_for,
)
from journal_vault.core.phrases import expand_phrases
from journal_vault.core.section_operations import (
    append_section,
    body_start_index,
    find_section,
    is_heading,
    locate_section,
)
from journal_vault.core.template_operations import create_from_template
from journal_vault.core.vault_operations import ensure_vault_ready, get_note_path, note_display_name
from journal_vault.data_models import NoteEntry, Representation, VaultConfiguration
from journal_vault.errors import NoteIOError

logger = logging.getLogger(__name__)


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _read_note(note_path: Path) -> str:
    try:
        return note_path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as exc:
        raise NoteIOError(f"Note '{note_path}' is not UTF-8 encoded and cannot be processed.", note_path) from exc
    except OSError as exc:
        raise NoteIOError(f"Failed to read note '{note_path}': {exc}", note_path) from exc


def _write_note(vault: VaultConfiguration, note_path: Path, text: str) -> None:
    """Replace ``note_path`` with ``text``; the old file is untouched if encoding fails."""
    try:
        data = text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise NoteIOError(f"Note '{note_path}' content cannot be encoded as UTF-8: {exc}", note_path) from exc

    ensure_vault_ready(vault)
    try:
        note_path.parent.mkdir(parents=True, exist_ok=True)
        note_path.write_bytes(data)
    except OSError as exc:
        raise NoteIOError(f"Failed to write note '{note_path}': {exc}", note_path) from exc


def _newline_of(text: str) -> str:
    return "\r\n" if "\r\n" in text else "\n"


def _join_lines(lines: list[str], newline: str = "\n") -> str:
    return newline.join(lines) + newline


def _default_document(timestamp: datetime, block: list[str], header: Optional[str]) -> str:
    """Build a minimal day file: frontmatter, optional heading, then the entry."""
    document = f"---\ndate: {DateTimeResolver.format_date(timestamp.date())}\n---\n\n"
    if header:
        document += f"# {header}\n\n"
    return document + _join_lines(block)


def _insert_into_region(
    lines: list[str],
    region_start: int,
    region_end: int,
    insert_at: int,
    vault: VaultConfiguration,
    row: str,
) -> list[str]:
    """Insert ``row`` into ``lines[region_start:region_end]``.

    Bullet rows go to ``insert_at``. Table rows are appended right after the
    last table line of the region, or start a new table at ``insert_at``
    when the region has none.
    """
    block = [row]
    if vault.representation is Representation.TABLE:
        region = classify_lines(lines[region_start:region_end], known_header_labels(vault))
        table_offsets = [offset for offset, line in enumerate(region) if line.is_table_line]
        if table_offsets:
            insert_at = region_start + table_offsets[-1] + 1
        else:
            block = render_table_header(table_headers_for(vault)) + block
            previous = lines[insert_at - 1] if insert_at > 0 else ""
            if previous.strip() and not is_heading(previous):
                block.insert(0, "")

    return lines[:insert_at] + block + lines[insert_at:]


def _update_document(
    text: str,
    vault: VaultConfiguration,
    row: str,
    header: Optional[str],
) -> str:
    """Return the new text of an existing day file with ``row`` added."""
    lines = convert_if_needed(text.splitlines(), vault)
    start = body_start_index(_join_lines(lines)) if lines else 0

    if header:
        section = find_section(lines, header, start)
        if section is None:
            logger.debug("Section '%s' not found; creating it at end of file", header)
            block = [row]
            if vault.representation is Representation.TABLE:
                block = render_table_header(table_headers_for(vault)) + block
            lines = append_section(lines, header, block)
        else:
            lines = _insert_into_region(lines, section.heading + 1, section.end, section.content_end, vault, row)
    else:
        lines = _insert_into_region(lines, start, len(lines), len(lines), vault, row)

    if vault.representation is Representation.TABLE:
        lines = remove_table_gaps(lines, known_header_labels(vault))
    return _join_lines(lines, _newline_of(text))


# ==============================================================================
# NOTE OPERATIONS
# ==============================================================================


def note_path_for(vault: VaultConfiguration, day: date) -> dict[str, Any]:
    """Describe the day file an editor should open for ``day``.

    Returns:
        A dictionary with the vault name, note display name, absolute path and
        whether the file exists yet.
    """
    target_path = get_note_path(vault, day)
    return {
        "vault": vault.name,
        "note": note_display_name(vault, target_path),
        "path": str(target_path),
        "exists": target_path.is_file(),
    }


def add_note(
    vault: VaultConfiguration,
    content: str,
    timestamp: Optional[datetime] = None,
    category: Optional[str] = None,
) -> dict[str, Any]:
    """Append a timestamped note to the day file for ``timestamp``.

    New files are built from the vault template when one is configured,
    otherwise from a minimal frontmatter document. Existing files are first
    brought into the configured representation, then the entry is placed in
    the category's section (created at the end of the file when absent) or
    at the end of the file.

    Args:
        vault: Vault configuration.
        content: Free-text note; configured phrases are expanded.
        timestamp: Effective note time. Defaults to now.
        category: Optional category selecting a section header override.

    Returns:
        A dictionary describing the written note (vault, note, path, status,
        the rendered entry line).

    Raises:
        NoteIOError: If the template file cannot be read; nothing is written.
        ConfigurationError: If the configured path format escapes the vault.
    """
    entry = NoteEntry(timestamp or DateTimeResolver.now(), expand_phrases(content, vault.phrases), category)
    target_path = get_note_path(vault, entry.timestamp.date())
    header = vault.header_for(entry.category)
    row = render_entry(vault, entry.timestamp, entry.content)

    if target_path.is_file():
        updated = _update_document(_read_note(target_path), vault, row, header)
        status = "appended"
    else:
        block = render_entry_block(vault, entry.timestamp, entry.content)
        if vault.template_file is not None:
            updated = create_from_template(vault.template_file, entry.timestamp, "\n".join(block), header)
        else:
            updated = _default_document(entry.timestamp, block, header)
        status = "created"

    _write_note(vault, target_path, updated)
    note_name = note_display_name(vault, target_path)
    logger.info("Added note to '%s' in vault '%s' (%s)", note_name, vault.name, status)
    return {
        "vault": vault.name,
        "note": note_name,
        "path": str(target_path),
        "entry": row,
        "section": header,
        "status": status,
    }


def add_notes(
    vault: VaultConfiguration,
    lines: Iterable[str],
    timestamp: Optional[datetime] = None,
    category: Optional[str] = None,
) -> dict[str, Any]:
    """Add every non-blank line of ``lines`` as its own note.

    Returns:
        A dictionary with the vault name, the day file path and the number of
        notes written.
    """
    timestamp = timestamp or DateTimeResolver.now()
    count = 0
    for line in lines:
        stripped = line.strip()
        if not stripped:
            continue
        add_note(vault, stripped, timestamp, category)
        count += 1

    target_path = get_note_path(vault, timestamp.date())
    return {
        "vault": vault.name,
        "path": str(target_path),
        "count": count,
        "status": "appended" if count else "empty",
    }


def list_notes(vault: VaultConfiguration, day: date, category: Optional[str] = None) -> list[str]:
    """List the entry lines written for ``day``.

    Only data rows of either representation are returned; table header and
    separator rows never are. When a section header applies to ``category``
    the listing is restricted to that section.

    Returns:
        Entry lines in file order. Empty when the file or section is missing.
    """
    target_path = get_note_path(vault, day)
    if not target_path.is_file():
        return []

    text = _read_note(target_path)
    lines = text.splitlines()
    header = vault.header_for(category)

    if header:
        section = locate_section(text, header)
        if section is None:
            return []
        scope = lines[section.heading + 1 : section.end]
    else:
        scope = lines[body_start_index(text) :]

    labels = known_header_labels(vault)
    return [
        line.text
        for line in classify_lines(scope, labels)
        if line.is_data_row and not is_header_like(line, labels)
    ]
