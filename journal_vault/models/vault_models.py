"""Pydantic input models for vault discovery."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ListVaultsInput(BaseModel):
    """Input model for list_journal_vaults tool.

    Takes no parameters; the model keeps every tool on a validated input.
    """

    model_config = ConfigDict(json_schema_extra={"examples": [{}]})
