"""
Conflict Resolver — picks one label per token from overlapping matches.

Ranking:
1. Higher priority wins, regardless of span length
2. Same priority → longest span wins
3. Same length   → earliest start wins
4. Same start    → earliest declared rule wins

Overwrite policy: a token already carrying a (non-background) label L only
accepts a new label when the match covers exactly the maximal run of
consecutive tokens labelled L, when L is the match's own label, or when the
rule lists L among its overwritable types. A match that fails the policy is
rejected as a whole and claims no tokens.

Accepted labels can reshape the entity runs the policy looks at, so a
sentence is resolved repeatedly over its working labels until a round
changes nothing. The settled labels are what a second annotation pass
would see, which keeps annotation idempotent.
"""
import logging
from typing import AbstractSet, List, Optional, Sequence, Tuple

from regexner.annotation.metrics import record_labels_applied, record_overwrite_blocked
from regexner.config.constants import BACKGROUND_SYMBOLS
from regexner.models.rule import Match

logger = logging.getLogger(__name__)


def rank_key(match: Match) -> Tuple[float, int, int, int]:
    """Sort key putting the strongest match first."""
    return (-match.priority, -match.span_length(), match.start, match.rule.index)


def entity_run(labels: Sequence[Optional[str]], index: int) -> Tuple[int, int]:
    """
    Maximal half-open run [start, end) of consecutive positions sharing the
    label at labels[index].
    """
    label = labels[index]
    start = index
    while start > 0 and labels[start - 1] == label:
        start -= 1
    end = index + 1
    while end < len(labels) and labels[end] == label:
        end += 1
    return start, end


def is_overwrite_allowed(
    labels: Sequence[Optional[str]],
    match: Match,
    background_symbols: AbstractSet[str] = BACKGROUND_SYMBOLS,
) -> bool:
    """Check the overwrite policy for every position covered by the match."""
    for i in range(match.start, match.end):
        existing = labels[i]
        if existing is None or existing in background_symbols:
            continue
        if existing == match.label:
            continue
        if existing in match.rule.overwritable_types:
            continue
        if entity_run(labels, i) != (match.start, match.end):
            return False
    return True


def _claim(
    labels: Sequence[Optional[str]],
    matches: List[Match],
    background_symbols: AbstractSet[str],
) -> Tuple[List[Match], List[Match]]:
    """One ranked pass: returns (accepted, blocked by the overwrite policy)."""
    claimed = [False] * len(labels)
    accepted: List[Match] = []
    blocked: List[Match] = []

    for match in sorted(matches, key=rank_key):
        if any(claimed[match.start:match.end]):
            continue

        if not is_overwrite_allowed(labels, match, background_symbols):
            blocked.append(match)
            continue

        for i in range(match.start, match.end):
            claimed[i] = True
        accepted.append(match)

    accepted.sort(key=lambda m: m.start)
    return accepted, blocked


def resolve_matches(
    labels: Sequence[Optional[str]],
    matches: List[Match],
    background_symbols: AbstractSet[str] = BACKGROUND_SYMBOLS,
) -> List[Match]:
    """
    Select the non-overlapping winning matches for one round.

    Args:
        labels: Current label of every sentence position.
        matches: All candidate matches from the matcher.
        background_symbols: Labels meaning "no entity".

    Returns:
        Accepted matches sorted by position.
    """
    if not matches:
        return []
    return _claim(labels, matches, background_symbols)[0]


def _relabel(labels: Sequence[Optional[str]], accepted: List[Match]) -> List[Optional[str]]:
    relabelled = list(labels)
    for match in accepted:
        for i in range(match.start, match.end):
            relabelled[i] = match.label
    return relabelled


def resolve_sentence(
    tokens: Sequence,
    matches: List[Match],
    background_symbols: AbstractSet[str] = BACKGROUND_SYMBOLS,
) -> List[Match]:
    """
    Resolve matches until the labels settle, then write them to the tokens.

    Args:
        tokens: Sentence tokens exposing a settable ``ner``.
        matches: All candidate matches from the matcher.
        background_symbols: Labels meaning "no entity".

    Returns:
        Matches accepted in the settled round, sorted by position.
    """
    labels: List[Optional[str]] = [token.ner for token in tokens]
    accepted: List[Match] = []
    blocked: List[Match] = []

    # A round only ever promotes higher-ranked matches, so this bound suffices
    for _ in range(len(matches) + 1):
        accepted, blocked = _claim(labels, matches, background_symbols)
        relabelled = _relabel(labels, accepted)
        if relabelled == labels:
            break
        labels = relabelled
    else:
        logger.warning("Labels did not settle after %d rounds", len(matches) + 1)

    for match in blocked:
        logger.debug("Overwrite blocked for %r", match)
        record_overwrite_blocked(match.label)

    for token, label in zip(tokens, labels):
        token.ner = label
    for match in accepted:
        record_labels_applied(match.label, match.span_length())

    return accepted
