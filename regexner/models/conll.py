"""
CoNLL-style corpus reader/writer.

One token per line, blank line between sentences:

    word
    word<TAB>label
    word<TAB>label<TAB>pos

An empty label column or the background symbol are read as "no entity".
"""
import logging
from pathlib import Path
from typing import List, Union

from regexner.config.constants import CONLL_DELIMITER, DEFAULT_BACKGROUND_SYMBOL
from regexner.models.token import Corpus, Sentence, Token

logger = logging.getLogger(__name__)


def read_conll(
    path: Union[str, Path],
    background_symbol: str = DEFAULT_BACKGROUND_SYMBOL,
) -> Corpus:
    """
    Read a CoNLL-style file into a Corpus.

    Args:
        path: File to read (UTF-8).
        background_symbol: Label read back as ``None``.

    Returns:
        Corpus with one Sentence per blank-line separated block.
    """
    sentences: List[Sentence] = []
    current: List[Token] = []

    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.rstrip("\r\n")
            if not line.strip():
                if current:
                    sentences.append(Sentence(current))
                    current = []
                continue

            cols = line.split(CONLL_DELIMITER)
            label = cols[1].strip() if len(cols) > 1 else ""
            tag = cols[2].strip() if len(cols) > 2 else ""
            current.append(
                Token(
                    word=cols[0],
                    ner=label if label and label != background_symbol else None,
                    tag=tag or None,
                )
            )

    if current:
        sentences.append(Sentence(current))

    logger.info("Read %d sentences from %s", len(sentences), path)
    return Corpus(
        text="\n".join(" ".join(s.words) for s in sentences),
        sentences=sentences,
    )


def write_conll(
    corpus: Corpus,
    path: Union[str, Path],
    background_symbol: str = DEFAULT_BACKGROUND_SYMBOL,
) -> None:
    """Write ``word<TAB>label`` lines, blank line after each sentence."""
    with open(path, "w", encoding="utf-8") as f:
        for sentence in corpus.sentences or []:
            for token in sentence.tokens:
                f.write(f"{token.word}{CONLL_DELIMITER}{token.ner or background_symbol}\n")
            f.write("\n")

    logger.info("Wrote %d sentences to %s", len(corpus.sentences or []), path)
