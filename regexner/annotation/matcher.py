"""
Pattern Matcher — token-sequence regex matching over one sentence.

Each rule is a sequence of per-token regexes; a rule matches at offset s
when pattern i fully matches the word of token s + i for every i. Every
start offset of every rule is scanned and all matches are kept, including
overlapping ones. Existing entity labels are never consulted.
"""
import logging
import re
from typing import List, Optional, Sequence

from regexner.annotation.rule_table import RuleTable
from regexner.models.rule import Match, Rule

logger = logging.getLogger(__name__)


def _matches_at(rule: Rule, words: Sequence[str], start: int) -> bool:
    for offset, pattern in enumerate(rule.patterns):
        if pattern.fullmatch(words[start + offset]) is None:
            return False
    return True


def _has_valid_pos(tokens: Sequence, start: int, end: int, valid_pos: re.Pattern) -> bool:
    """At least one token in [start, end) has a POS tag accepted by valid_pos."""
    for token in tokens[start:end]:
        tag: Optional[str] = getattr(token, "tag", None)
        if tag is not None and valid_pos.fullmatch(tag):
            return True
    return False


def find_rule_matches(rule: Rule, words: Sequence[str]) -> List[Match]:
    """All offsets at which a single rule matches the word sequence."""
    n = len(rule)
    if n == 0 or n > len(words):
        return []

    return [
        Match(start=s, end=s + n, rule=rule)
        for s in range(len(words) - n + 1)
        if _matches_at(rule, words, s)
    ]


def find_matches(tokens: Sequence, rule_table: RuleTable) -> List[Match]:
    """
    Find every match of every rule in a sentence.

    Args:
        tokens: Ordered tokens of one sentence (objects with ``word``).
        rule_table: Compiled rules; its POS restriction is applied if set.

    Returns:
        Candidate matches in rule order, then start offset. Overlap
        resolution is left to the resolver.
    """
    if not tokens:
        return []

    words = [token.word for token in tokens]
    matches: List[Match] = []

    for rule in rule_table:
        matches.extend(find_rule_matches(rule, words))

    if rule_table.valid_pos is not None:
        matches = [
            m for m in matches
            if _has_valid_pos(tokens, m.start, m.end, rule_table.valid_pos)
        ]

    logger.debug("Found %d candidate matches over %d tokens", len(matches), len(tokens))
    return matches
