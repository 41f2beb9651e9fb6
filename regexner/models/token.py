"""
Token, Sentence and Corpus containers handed to the annotator.

The annotator only relies on attribute access (``corpus.sentences``,
``sentence.tokens``, ``token.word`` / ``token.ner`` / ``token.tag``), so
any objects exposing the same fields work too.
"""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Token:
    """A single word with a mutable entity label."""

    word: str
    ner: Optional[str] = None       # None = no entity
    tag: Optional[str] = None       # part-of-speech tag, optional

    def __repr__(self) -> str:
        return f"Token('{self.word}', {self.ner})"


@dataclass
class Sentence:
    """Ordered tokens of one sentence."""

    tokens: List[Token] = field(default_factory=list)

    @property
    def words(self) -> List[str]:
        return [t.word for t in self.tokens]

    @property
    def labels(self) -> List[Optional[str]]:
        return [t.ner for t in self.tokens]


@dataclass
class Corpus:
    """
    A document segmented into sentences.

    ``sentences`` stays None until an upstream segmenter fills it; the
    annotator refuses to run on such a corpus.
    """

    text: str = ""
    sentences: Optional[List[Sentence]] = None

    @classmethod
    def from_words(cls, *sentences: List[str], text: str = "") -> "Corpus":
        """Build a corpus from pre-tokenized sentences (lists of words)."""
        return cls(
            text=text,
            sentences=[Sentence([Token(w) for w in words]) for words in sentences],
        )
