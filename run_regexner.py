"""
Batch runner for the RegexNER annotator.

Reads:
  - REGEXNER_MAPPING  mapping file (pattern<TAB>label[<TAB>types][<TAB>priority])
  - REGEXNER_INPUT    CoNLL-style corpus (word[<TAB>label[<TAB>pos]])

Produces:
  - REGEXNER_OUTPUT   the same corpus, word<TAB>label
"""
import logging
import sys
from collections import Counter

from regexner.annotation.annotator import RegexNERAnnotator
from regexner.config import settings
from regexner.models.conll import read_conll, write_conll


def main() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        stream=sys.stdout,
    )
    logger = logging.getLogger("run_regexner")

    logger.info("mapping : %s", settings.REGEXNER_MAPPING)
    logger.info("input   : %s", settings.REGEXNER_INPUT)

    annotator = RegexNERAnnotator.from_settings()
    corpus = read_conll(settings.REGEXNER_INPUT, annotator.background_symbol)

    annotator.annotate(corpus)
    write_conll(corpus, settings.REGEXNER_OUTPUT, annotator.background_symbol)

    counts = Counter(
        token.ner
        for sentence in corpus.sentences
        for token in sentence.tokens
        if token.ner != annotator.background_symbol
    )
    for label, count in counts.most_common():
        logger.info("  %-20s %d", label, count)

    logger.info("Output saved to: %s", settings.REGEXNER_OUTPUT)


if __name__ == "__main__":
    main()
