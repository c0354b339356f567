"""Pydantic input models for journal note operations.

This module defines input models for:
- Adding a single note
- Adding several notes at once (one per line)
- Listing a day's notes
- Resolving the day file path for an editor
"""

from __future__ import annotations

from typing import Optional
from pydantic import Field, field_validator

from .base import BaseDayInput


class AddNoteInput(BaseDayInput):
    """Input model for add_journal_note tool.

    Examples:
        >>> AddNoteInput(content="Standup went well")
        >>> AddNoteInput(content="Gym", relative_days=1, time="18:30", vault="personal")
    """

    content: str = Field(
        description=(
            "Free-text note. Configured shorthand phrases are expanded "
            "before the entry is written."
        )
    )

    time: Optional[str] = Field(
        None,
        description=(
            "Time of day for the entry (defaults to now). "
            "Examples: '14:30', '14:30:45', '2:30 PM'."
        ),
        examples=["14:30", "2:30 PM"]
    )

    time_format: Optional[str] = Field(
        None,
        description="Restrict time parsing to '12h' or '24h' patterns."
    )

    @field_validator('content')
    @classmethod
    def validate_content_not_empty(cls, v: str) -> str:
        """Validate that content is not empty or just whitespace."""
        if not v.strip():
            raise ValueError(
                "Note content cannot be empty. "
                "Provide the text you want to record."
            )
        return v.strip()

    @field_validator('time_format')
    @classmethod
    def validate_time_format(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        cleaned = v.strip().lower()
        if cleaned not in {"12h", "24h"}:
            raise ValueError(f"Invalid time format '{v}'. Use '12h' or '24h'.")
        return cleaned


class AddNotesInput(AddNoteInput):
    """Input model for add_journal_notes tool.

    ``content`` may hold several lines; each non-blank line becomes a note.

    Examples:
        >>> AddNotesInput(content="Coffee\\nEmails\\nLunch")
    """


class ListNotesInput(BaseDayInput):
    """Input model for list_journal_notes tool.

    Examples:
        >>> ListNotesInput()
        >>> ListNotesInput(relative_days=1, category="work")
    """


class NotePathInput(BaseDayInput):
    """Input model for get_journal_note_path tool."""
