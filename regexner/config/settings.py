"""
Environment settings loaded from .env file.
"""
import os
from dotenv import load_dotenv

load_dotenv()


# --- Rule table ---
REGEXNER_MAPPING: str = os.getenv("REGEXNER_MAPPING", "regexner_mapping.tab")
REGEXNER_IGNORE_CASE: bool = os.getenv("REGEXNER_IGNORE_CASE", "false").lower() == "true"
REGEXNER_VALID_POS: str = os.getenv("REGEXNER_VALID_POS", "")

# --- Annotation ---
REGEXNER_BACKGROUND_SYMBOL: str = os.getenv("REGEXNER_BACKGROUND_SYMBOL", "O")
REGEXNER_MAX_WORKERS: int = int(os.getenv("REGEXNER_MAX_WORKERS", "1"))

# --- Batch runner ---
REGEXNER_INPUT: str = os.getenv("REGEXNER_INPUT", "corpus.conll")
REGEXNER_OUTPUT: str = os.getenv("REGEXNER_OUTPUT", "corpus.regexner.conll")
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
