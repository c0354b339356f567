"""First-creation templating for day files."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

from journal_vault.core.date_time import DateTimeResolver
from journal_vault.core.tokens import build_token_pattern, contains_token, substitute_tokens
from journal_vault.core.vault_operations import WEEKDAY_NAMES
from journal_vault.errors import NoteIOError

logger = logging.getLogger(__name__)

NOTE_TOKEN = "note"

TEMPLATE_TOKENS = (
    "date",
    "time",
    "datetime",
    "created",
    "today",
    "yesterday",
    "tomorrow",
    "weekday",
    "Weekday",
    "section_header",
)

_TEMPLATE_TOKEN_PATTERN = build_token_pattern(TEMPLATE_TOKENS)


def load_template(template_path: Path) -> str:
    """Read a template file.

    Raises:
        NoteIOError: If the template cannot be read; the message names the path.
    """
    try:
        return template_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise NoteIOError(f"Failed to read template file '{template_path}': {exc}", template_path) from exc


def template_values(timestamp: datetime, section_header: Optional[str]) -> dict[str, str]:
    """Compute template token values from the note's own timestamp.

    ``weekday`` is the full day name and ``Weekday`` the three-letter form.
    """
    day = timestamp.date()
    weekday = WEEKDAY_NAMES[day.weekday()]
    return {
        "date": DateTimeResolver.format_date(day),
        "time": DateTimeResolver.format_time(timestamp),
        "datetime": timestamp.strftime("%Y-%m-%dT%H:%M:%S"),
        "created": timestamp.strftime("%Y-%m-%d %H:%M:%S"),
        "today": DateTimeResolver.format_date(day),
        "yesterday": DateTimeResolver.format_date(day - timedelta(days=1)),
        "tomorrow": DateTimeResolver.format_date(day + timedelta(days=1)),
        "weekday": weekday,
        "Weekday": weekday[:3],
        "section_header": section_header or "",
    }


def render_template(
    template_text: str,
    timestamp: datetime,
    entry: str,
    section_header: Optional[str] = None,
) -> str:
    """Substitute template tokens and place the rendered entry.

    Args:
        template_text: Raw template contents.
        timestamp: Effective timestamp of the note (not necessarily now).
        entry: Rendered entry text, possibly several lines, without a
            trailing newline.
        section_header: Section header applied to this note, if any.

    Returns:
        The complete initial document, ending with a newline.
    """
    document = substitute_tokens(template_text, template_values(timestamp, section_header), _TEMPLATE_TOKEN_PATTERN)

    if contains_token(document, NOTE_TOKEN):
        document = substitute_tokens(document, {NOTE_TOKEN: entry})
    else:
        if document and not document.endswith("\n"):
            document += "\n"
        document += entry

    if not document.endswith("\n"):
        document += "\n"
    return document


def create_from_template(
    template_path: Path,
    timestamp: datetime,
    entry: str,
    section_header: Optional[str] = None,
) -> str:
    """Load ``template_path`` and render the initial document for a new day file."""
    text = load_template(template_path)
    logger.debug("Rendering day file from template %s", template_path)
    return render_template(text, timestamp, entry, section_header)
