"""
Typed Pydantic model for rule table rows.

One RuleEntry is produced per mapping-file line (or lexicon dict item)
before the pattern is compiled into a Rule.
"""
from __future__ import annotations

from typing import FrozenSet

from pydantic import BaseModel, Field, field_validator

from regexner.config.constants import DEFAULT_PRIORITY


class RuleEntry(BaseModel):
    """A validated, not yet compiled, rule table row."""

    pattern: str = Field(..., description="Whitespace-separated per-token regular expressions.")
    label: str = Field(..., description="Entity label assigned to matching tokens.")
    priority: float = Field(DEFAULT_PRIORITY, description="Higher wins over lower on overlap.")
    overwritable_types: FrozenSet[str] = Field(
        default_factory=frozenset,
        description="Pre-existing labels this rule may replace regardless of span.",
    )

    @field_validator("pattern", "label")
    @classmethod
    def strip_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("overwritable_types", mode="before")
    @classmethod
    def clean_types(cls, v):
        if v is None:
            return frozenset()
        return frozenset(t.strip() for t in v if t and t.strip())

    @property
    def token_patterns(self) -> list[str]:
        return self.pattern.split()
