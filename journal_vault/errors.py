"""Exception taxonomy for journal vault operations."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class JournalError(Exception):
    """Base class for all errors raised by the journal core."""


class ParseError(JournalError, ValueError):
    """A date or time string did not match any candidate pattern.

    Attributes:
        raw: The input string exactly as supplied by the caller.
        context: Human-readable description of what was attempted, e.g.
            ``"locale: en-US"`` or ``"format override: DD.MM.YYYY"``.
    """

    def __init__(self, kind: str, raw: str, context: str) -> None:
        self.kind = kind
        self.raw = raw
        self.context = context
        super().__init__(f"Could not parse {kind}: {raw} for {context}")


class ConfigurationError(JournalError, ValueError):
    """Vault configuration is unusable (unknown vault, bad override, bad path)."""


class NoteIOError(JournalError, OSError):
    """A filesystem operation failed; ``path`` names the file involved."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        self.path = path
        super().__init__(message)
