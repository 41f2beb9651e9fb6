"""
RegexNER Annotator — main entry point for rule-based entity annotation.

For each sentence of a corpus:
    1. Pattern matching   (every rule, every start offset)
    2. Conflict resolution (priority > span length > position > rule order)
    3. Overwrite policy    (existing entities only replaced when coextensive)
    4. In-place label update, unlabelled tokens set to the background symbol

The rule table is immutable and may be shared by annotators running in
parallel threads, provided each annotates its own corpus.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Sequence, Union

from regexner.annotation.mapping_loader import load_rule_table
from regexner.annotation.matcher import find_matches
from regexner.annotation.metrics import record_match, record_sentence, timed_annotation
from regexner.annotation.resolver import resolve_sentence
from regexner.annotation.rule_table import RuleTable
from regexner.config.constants import DEFAULT_BACKGROUND_SYMBOL
from regexner.models.rule import Match

logger = logging.getLogger(__name__)


class AnnotationConfigError(RuntimeError):
    """Raised when a corpus is not segmented into sentences of tokens."""


class RegexNERAnnotator:
    """
    Assigns entity labels to tokens from a prioritized regex rule table.

    Args:
        rule_table: Compiled rules, shared read-only.
        background_symbol: Label meaning "no entity".
        fill_background: Set unlabelled tokens to ``background_symbol``
            after annotation.
        max_workers: Annotate sentences in a thread pool when > 1.
    """

    def __init__(
        self,
        rule_table: RuleTable,
        background_symbol: str = DEFAULT_BACKGROUND_SYMBOL,
        fill_background: bool = True,
        max_workers: Optional[int] = None,
    ):
        self.rule_table = rule_table
        self.background_symbol = background_symbol
        self.background_symbols = frozenset({background_symbol})
        self.fill_background = fill_background
        self.max_workers = max_workers

    @classmethod
    def from_mapping(
        cls,
        path: Union[str, Path],
        ignore_case: bool = False,
        valid_pos_pattern: Optional[str] = None,
        **kwargs,
    ) -> "RegexNERAnnotator":
        """Build an annotator from a mapping file."""
        rule_table = load_rule_table(
            path,
            ignore_case=ignore_case,
            valid_pos_pattern=valid_pos_pattern,
        )
        return cls(rule_table, **kwargs)

    @classmethod
    def from_settings(cls) -> "RegexNERAnnotator":
        """Build an annotator from REGEXNER_* environment settings."""
        from regexner.config import settings

        return cls.from_mapping(
            settings.REGEXNER_MAPPING,
            ignore_case=settings.REGEXNER_IGNORE_CASE,
            valid_pos_pattern=settings.REGEXNER_VALID_POS or None,
            background_symbol=settings.REGEXNER_BACKGROUND_SYMBOL,
            max_workers=settings.REGEXNER_MAX_WORKERS,
        )

    # ------------------------------------------------------------------
    # Per-sentence
    # ------------------------------------------------------------------

    def annotate_sentence(self, tokens: Sequence) -> List[Match]:
        """
        Annotate one sentence in place.

        Args:
            tokens: Ordered tokens exposing ``word`` and a settable ``ner``.

        Returns:
            The accepted matches, sorted by position.
        """
        candidates = find_matches(tokens, self.rule_table)
        for match in candidates:
            record_match(match.label)

        accepted = resolve_sentence(tokens, candidates, self.background_symbols)

        if self.fill_background:
            for token in tokens:
                if token.ner is None:
                    token.ner = self.background_symbol

        record_sentence()
        return accepted

    # ------------------------------------------------------------------
    # Corpus
    # ------------------------------------------------------------------

    def _validate(self, corpus) -> List[Sequence]:
        sentences = getattr(corpus, "sentences", None)
        if sentences is None:
            logger.error("Corpus has no sentences; run sentence segmentation first")
            raise AnnotationConfigError(
                "Unable to find sentences in corpus: "
                "RegexNER requires a corpus segmented into sentences"
            )

        token_lists: List[Sequence] = []
        for i, sentence in enumerate(sentences):
            tokens = getattr(sentence, "tokens", None)
            if tokens is None:
                logger.error("Sentence %d has no tokens", i)
                raise AnnotationConfigError(f"Unable to find tokens in sentence {i}")
            token_lists.append(tokens)
        return token_lists

    def annotate(self, corpus) -> None:
        """
        Annotate every sentence of the corpus, mutating tokens in place.

        Raises:
            AnnotationConfigError: the corpus (or one of its sentences) is
                missing its sentences (tokens); no token is modified.
        """
        token_lists = self._validate(corpus)

        with timed_annotation():
            if self.max_workers and self.max_workers > 1 and len(token_lists) > 1:
                with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                    results = list(executor.map(self.annotate_sentence, token_lists))
            else:
                results = [self.annotate_sentence(tokens) for tokens in token_lists]

        logger.debug(
            "Annotated %d sentences, %d matches accepted",
            len(token_lists), sum(len(r) for r in results),
        )
