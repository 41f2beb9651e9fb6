"""
Rule and Match models for the token-sequence matcher.
"""
import re
from dataclasses import dataclass, field
from typing import FrozenSet, Tuple


@dataclass(frozen=True)
class Rule:
    """A compiled rule: one regex per token, mapped to an entity label."""

    patterns: Tuple[re.Pattern, ...]
    label: str
    priority: float
    index: int                      # declaration order in the rule table
    source: str = ""                # pattern text as written in the mapping
    overwritable_types: FrozenSet[str] = field(default_factory=frozenset)

    def __len__(self) -> int:
        return len(self.patterns)

    def __repr__(self) -> str:
        return f"Rule('{self.source}', {self.label}, priority={self.priority})"


@dataclass(frozen=True)
class Match:
    """A candidate binding of the half-open token span [start, end) to a rule."""

    start: int
    end: int
    rule: Rule

    @property
    def label(self) -> str:
        return self.rule.label

    @property
    def priority(self) -> float:
        return self.rule.priority

    def span_length(self) -> int:
        return self.end - self.start

    def __repr__(self) -> str:
        return f"Match({self.label}, [{self.start},{self.end}], '{self.rule.source}')"
