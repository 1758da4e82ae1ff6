"""Settings consumed by the transaction builders and the document renderer."""

from __future__ import annotations

import logging

from pydantic import Field, field_validator

from .values import FrozenModel


class ExportSettings(FrozenModel):
    """Chart-of-accounts defaults, rendering and logging options."""

    accounts_receivable: str = Field(default="Accounts Receivable", min_length=1)
    accounts_payable: str = Field(default="Accounts Payable", min_length=1)
    render_workers: int = Field(default=1, ge=1)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level `{value}`")
        return level


__all__ = ["ExportSettings"]
