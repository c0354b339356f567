"""Data models for vault configuration, note entries and parsed note lines."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from journal_vault.errors import ConfigurationError


class Representation(str, Enum):
    """Textual rendering style used for note entries in a day file."""

    BULLET = "bullet"
    TABLE = "table"


class LineKind(Enum):
    """Shape of a single markdown line as seen by the entry parser."""

    BULLET_ROW = "bullet_row"
    TABLE_ROW = "table_row"
    TABLE_HEADER = "table_header"
    TABLE_SEPARATOR = "table_separator"
    HEADING = "heading"
    BLANK = "blank"
    OTHER = "other"


DATA_ROW_KINDS = frozenset({LineKind.BULLET_ROW, LineKind.TABLE_ROW})
TABLE_LINE_KINDS = frozenset({LineKind.TABLE_ROW, LineKind.TABLE_HEADER, LineKind.TABLE_SEPARATOR})


def expand_user_path(value: str) -> Path:
    """Expand ``~`` and environment variables (``$HOME``, ``%APPDATA%``) in a path string."""
    return Path(os.path.expandvars(value)).expanduser()


class TableHeaders(BaseModel):
    """Explicit column labels for the Table representation."""

    model_config = ConfigDict(frozen=True)

    time: str = Field(min_length=1, description="Label of the time column.")
    content: str = Field(min_length=1, description="Label of the note column.")


class VaultConfiguration(BaseModel):
    """Settings for a single journal vault.

    Instances are read-only and are passed explicitly to every core
    operation; nothing in the core keeps a reference between calls.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    path: Path
    locale: str = "en-US"
    phrases: dict[str, str] = Field(default_factory=dict)
    section_header: Optional[str] = None
    section_headers: dict[str, str] = Field(default_factory=dict)
    table_headers: Optional[TableHeaders] = None
    date_format: Optional[str] = None
    template_file: Optional[Path] = None
    file_path_format: Optional[str] = None
    representation: Representation = Representation.BULLET

    @field_validator("path", mode="before")
    @classmethod
    def validate_path(cls, v: Any) -> Path:
        """Expand user and environment references in the vault root."""
        if isinstance(v, Path):
            return v.expanduser()
        if not isinstance(v, str) or not v.strip():
            raise ValueError("Vault path must be a non-empty string.")
        return expand_user_path(v.strip())

    @field_validator("template_file", mode="before")
    @classmethod
    def validate_template_file(cls, v: Any) -> Optional[Path]:
        if v is None or isinstance(v, Path):
            return v
        if not isinstance(v, str) or not v.strip():
            return None
        return expand_user_path(v.strip())

    @field_validator("locale")
    @classmethod
    def validate_locale(cls, v: str) -> str:
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("Locale cannot be empty; use a tag such as 'en-US' or 'nb-NO'.")
        return cleaned

    @field_validator("representation", mode="before")
    @classmethod
    def validate_representation(cls, v: Any) -> Any:
        # Accept "Table", "BULLET" and friends from hand-written YAML.
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("section_header", "date_format", "file_path_format")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

    def header_for(self, category: Optional[str]) -> Optional[str]:
        """Return the section header used for ``category``.

        A category-specific override wins, then the vault default. ``None``
        means entries are not scoped to a section.
        """
        if category and category in self.section_headers:
            return self.section_headers[category]
        return self.section_header

    def as_payload(self) -> dict[str, Any]:
        """Return a serializable payload representation."""
        return {
            "name": self.name,
            "path": str(self.path),
            "exists": self.path.is_dir(),
            "locale": self.locale,
            "representation": self.representation.value,
            "section_header": self.section_header,
            "categories": sorted(self.section_headers),
        }


class VaultRegistry:
    """Holds loaded vault configurations and default resolution helpers."""

    def __init__(self, default_vault: str, vaults: dict[str, VaultConfiguration]) -> None:
        self.default_vault = default_vault
        self.vaults = vaults

    def get(self, name: Optional[str] = None) -> VaultConfiguration:
        """Get vault configuration by name, falling back to the default vault.

        Raises:
            ConfigurationError: If the vault name is not found in configuration.
        """
        key = name or self.default_vault
        try:
            return self.vaults[key]
        except KeyError as exc:
            available = ", ".join(sorted(self.vaults)) or "none"
            raise ConfigurationError(f"Unknown vault '{key}' (available: {available})") from exc

    def as_payload(self) -> dict[str, Any]:
        return {
            "default": self.default_vault,
            "vaults": [vault.as_payload() for vault in self.vaults.values()],
        }


@dataclass(frozen=True)
class NoteEntry:
    """A single note about to be written; only its rendered line is stored."""

    timestamp: datetime
    content: str
    category: Optional[str] = None


@dataclass(frozen=True)
class RenderedLine:
    """A markdown line tagged with its shape.

    ``time`` and ``content`` are populated for data rows only.
    """

    text: str
    kind: LineKind
    time: Optional[str] = None
    content: Optional[str] = None

    @property
    def is_data_row(self) -> bool:
        return self.kind in DATA_ROW_KINDS

    @property
    def is_table_line(self) -> bool:
        return self.kind in TABLE_LINE_KINDS


@dataclass(frozen=True)
class Section:
    """Line-index bounds of a heading-delimited region.

    ``heading`` is the heading line index, ``end`` the next heading (or the
    line count) and ``content_end`` the default insertion point.
    """

    heading: int
    end: int
    content_end: int
    title: str
