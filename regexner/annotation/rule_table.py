"""
Rule Table — immutable, compiled set of token-sequence rules.

Built once (usually from a mapping file) and shared read-only by every
annotation pass. Malformed patterns fail here, never during annotation.
"""
import logging
import re
from typing import Iterable, List, Optional, Tuple

from regexner.models.rule import Rule
from regexner.models.rule_io import RuleEntry

logger = logging.getLogger(__name__)


class RuleTableError(ValueError):
    """Raised when a rule cannot be parsed or compiled."""


def compile_rule(entry: RuleEntry, index: int, ignore_case: bool = False) -> Rule:
    """
    Compile one RuleEntry into a Rule with one regex per token.

    Args:
        entry: Validated rule row.
        index: Declaration order, used as the final tie-break.
        ignore_case: Compile with re.IGNORECASE.

    Raises:
        RuleTableError: if any per-token regex fails to compile.
    """
    flags = re.IGNORECASE if ignore_case else 0
    compiled: List[re.Pattern] = []

    for token_pattern in entry.token_patterns:
        try:
            compiled.append(re.compile(token_pattern, flags))
        except re.error as e:
            logger.error("Invalid regex '%s' in rule '%s': %s", token_pattern, entry.pattern, e)
            raise RuleTableError(
                f"Invalid regex '{token_pattern}' in rule '{entry.pattern}': {e}"
            ) from e

    return Rule(
        patterns=tuple(compiled),
        label=entry.label,
        priority=entry.priority,
        index=index,
        source=entry.pattern,
        overwritable_types=entry.overwritable_types,
    )


class RuleTable:
    """
    Ordered, immutable collection of compiled rules.

    Options fixed at construction:
        ignore_case:        case-insensitive token matching.
        valid_pos_pattern:  if set, a match needs at least one token whose
                            POS tag fully matches this regex.
    """

    def __init__(
        self,
        entries: Iterable[RuleEntry],
        ignore_case: bool = False,
        valid_pos_pattern: Optional[str] = None,
    ):
        self._ignore_case = ignore_case
        self._rules: Tuple[Rule, ...] = tuple(
            compile_rule(entry, i, ignore_case) for i, entry in enumerate(entries)
        )

        self._valid_pos: Optional[re.Pattern] = None
        if valid_pos_pattern:
            try:
                self._valid_pos = re.compile(valid_pos_pattern)
            except re.error as e:
                logger.error("Invalid POS pattern '%s': %s", valid_pos_pattern, e)
                raise RuleTableError(
                    f"Invalid POS pattern '{valid_pos_pattern}': {e}"
                ) from e

        logger.info(
            "Rule table compiled: %d rules, %d labels (ignore_case=%s)",
            len(self._rules), len(self.labels), ignore_case,
        )

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return self._rules

    @property
    def ignore_case(self) -> bool:
        return self._ignore_case

    @property
    def valid_pos(self) -> Optional[re.Pattern]:
        return self._valid_pos

    @property
    def labels(self) -> frozenset:
        """All entity labels this table can assign."""
        return frozenset(r.label for r in self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self):
        return iter(self._rules)

    def __repr__(self) -> str:
        return f"RuleTable({len(self._rules)} rules)"
