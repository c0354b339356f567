"""Base Pydantic models for MCP tool input validation.

This module defines base models that provide common validation patterns
for journal operations. Other input models inherit from these bases.

Base Models:
- BaseVaultInput: Optional vault name shared by every tool
- BaseDayInput: Adds day selection (explicit date or relative offset) and category
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator


class BaseVaultInput(BaseModel):
    """Base model carrying the optional vault name."""

    vault: Optional[str] = Field(
        None,
        description=(
            "Vault name (omit to use the default vault). "
            "Use list_journal_vaults() to discover available vaults."
        )
    )

    @field_validator('vault')
    @classmethod
    def validate_vault(cls, v: Optional[str]) -> Optional[str]:
        """Validate vault name format.

        Raises:
            ValueError: If vault name is an empty string
        """
        if v is not None and not v.strip():
            raise ValueError(
                "Vault name cannot be empty. "
                "Either omit the vault parameter to use the default vault, "
                "or provide a valid vault name from list_journal_vaults()."
            )

        return v.strip() if v else None


class BaseDayInput(BaseVaultInput):
    """Base model for operations addressing one day file.

    The day is either an explicit ``date`` string (parsed with the vault's
    locale or date-format override) or a ``relative_days`` offset where
    positive values are in the past. Omitting both means today.
    """

    date: Optional[str] = Field(
        None,
        description=(
            "Date of the day file, in a format the vault locale understands. "
            "Examples: '2025-10-24', '10/24/2025' (en), '24.10.2025' (nb)."
        ),
        examples=["2025-10-24", "10/24/2025", "24.10.2025"]
    )

    relative_days: Optional[int] = Field(
        None,
        description=(
            "Day offset from today: 1 is yesterday, -1 is tomorrow, 0 is today. "
            "Cannot be combined with 'date'."
        )
    )

    category: Optional[str] = Field(
        None,
        description=(
            "Category selecting a configured section header override. "
            "Falls back to the vault's default section header."
        ),
        examples=["work", "personal"]
    )

    @field_validator('date', 'category')
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty strings as omitted."""
        if v is None:
            return None
        cleaned = v.strip()
        return cleaned or None

    @model_validator(mode='after')
    def validate_day_selection(self) -> "BaseDayInput":
        """Reject an explicit date combined with a relative offset."""
        if self.date is not None and self.relative_days is not None:
            raise ValueError(
                "Provide either 'date' or 'relative_days', not both. "
                "Use 'relative_days' for offsets like yesterday (1) or tomorrow (-1)."
            )
        return self
