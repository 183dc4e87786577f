"""Data model for a configured parser instance."""
from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator


class ParserDefinition(BaseModel):
    """One parser instance as it appears in a definition file.

    ``options`` keeps the order the pairs were written in, since a later
    ``regex`` replaces an earlier one. A mapping is accepted as well and is
    read in its key order.
    """

    name: str
    plugin: str = "regex-rs"
    description: Optional[str] = None
    options: List[Tuple[str, str]] = Field(default_factory=list)

    @field_validator("options", mode="before")
    @classmethod
    def _normalize_options(cls, value):
        if value is None:
            return []
        if isinstance(value, dict):
            return [(str(k), str(v)) for k, v in value.items()]
        return value
