"""Pydantic input models for MCP tool validation.

Each model represents the input schema for one journal tool, with
field-level validation and descriptive error messages.

Architecture:
- base: BaseVaultInput, BaseDayInput for common validation
- note_models: Input models for adding and listing notes
- vault_models: Input models for vault discovery
"""

from .base import BaseVaultInput, BaseDayInput
from .note_models import (
    AddNoteInput,
    AddNotesInput,
    ListNotesInput,
    NotePathInput,
)
from .vault_models import ListVaultsInput

__all__ = [
    # Base models
    "BaseVaultInput",
    "BaseDayInput",
    # Note models
    "AddNoteInput",
    "AddNotesInput",
    "ListNotesInput",
    "NotePathInput",
    # Vault models
    "ListVaultsInput",
]
