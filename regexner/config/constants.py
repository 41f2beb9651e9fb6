"""
Constants used across the annotator.
Versioned and pinned for determinism.
"""
from typing import FrozenSet

# =============================================================================
# Labels
# =============================================================================
DEFAULT_BACKGROUND_SYMBOL: str = "O"

# Labels treated as "no entity" when deciding whether a token may be relabelled
BACKGROUND_SYMBOLS: FrozenSet[str] = frozenset({DEFAULT_BACKGROUND_SYMBOL})

# =============================================================================
# Mapping file format
# =============================================================================
MAPPING_DELIMITER: str = "\t"
OVERWRITABLE_TYPES_DELIMITER: str = ","
MIN_MAPPING_COLUMNS: int = 2
MAX_MAPPING_COLUMNS: int = 4

DEFAULT_PRIORITY: float = 0.0

# =============================================================================
# Corpus file format (CoNLL style, one token per line)
# =============================================================================
CONLL_DELIMITER: str = "\t"
