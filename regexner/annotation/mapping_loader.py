"""
Mapping Loader — parses rule tables from mapping files or lexicon dicts.

Mapping file: one rule per line, TAB separated:

    pattern<TAB>label
    pattern<TAB>label<TAB>priority
    pattern<TAB>label<TAB>overwritable,types
    pattern<TAB>label<TAB>overwritable,types<TAB>priority

Line order is declaration order (final tie-break between rules).
"""
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from jsonschema import ValidationError as SchemaValidationError
from jsonschema import validate
from pydantic import ValidationError

from regexner.annotation.rule_table import RuleTable, RuleTableError
from regexner.config.constants import (
    MAPPING_DELIMITER,
    MAX_MAPPING_COLUMNS,
    MIN_MAPPING_COLUMNS,
    OVERWRITABLE_TYPES_DELIMITER,
)
from regexner.config.schemas import RULE_LEXICON_SCHEMA
from regexner.models.rule_io import RuleEntry

logger = logging.getLogger(__name__)


def _split_types(column: str) -> List[str]:
    return [t for t in column.split(OVERWRITABLE_TYPES_DELIMITER) if t.strip()]


def _parse_priority(column: str, line_no: int) -> float:
    try:
        return float(column)
    except ValueError as e:
        raise RuleTableError(
            f"Line {line_no}: priority must be a number, got '{column}'"
        ) from e


def parse_mapping_line(line: str, line_no: int = 0) -> RuleEntry:
    """
    Parse a single mapping line into a RuleEntry.

    Raises:
        RuleTableError: wrong column count, bad priority, blank pattern/label.
    """
    cols = line.rstrip("\r\n").split(MAPPING_DELIMITER)
    if not MIN_MAPPING_COLUMNS <= len(cols) <= MAX_MAPPING_COLUMNS:
        raise RuleTableError(
            f"Line {line_no}: expected {MIN_MAPPING_COLUMNS}-{MAX_MAPPING_COLUMNS} "
            f"tab-separated columns, got {len(cols)}: '{line.strip()}'"
        )

    fields: dict = {"pattern": cols[0], "label": cols[1]}

    if len(cols) == 3:
        # Third column is either a priority or a list of overwritable types
        try:
            fields["priority"] = float(cols[2])
        except ValueError:
            fields["overwritable_types"] = _split_types(cols[2])
    elif len(cols) == 4:
        fields["overwritable_types"] = _split_types(cols[2])
        fields["priority"] = _parse_priority(cols[3].strip(), line_no)

    try:
        return RuleEntry(**fields)
    except ValidationError as e:
        raise RuleTableError(f"Line {line_no}: invalid rule '{line.strip()}': {e}") from e


def parse_mapping_lines(lines: Iterable[str]) -> List[RuleEntry]:
    """
    Parse mapping lines in order, skipping blanks.

    A pattern that repeats an earlier one is skipped (first declaration wins).
    """
    entries: List[RuleEntry] = []
    seen: Dict[str, int] = {}

    for line_no, line in enumerate(lines, start=1):
        if not line.strip():
            continue

        entry = parse_mapping_line(line, line_no)
        if entry.pattern in seen:
            logger.warning(
                "Line %d: duplicate pattern '%s' (first seen on line %d), skipped",
                line_no, entry.pattern, seen[entry.pattern],
            )
            continue

        seen[entry.pattern] = line_no
        entries.append(entry)

    return entries


def load_mapping(path: Union[str, Path]) -> List[RuleEntry]:
    """Read and parse a UTF-8 mapping file."""
    with open(path, encoding="utf-8") as f:
        entries = parse_mapping_lines(f)

    logger.info("Loaded %d rules from mapping %s", len(entries), path)
    return entries


def entries_from_lexicon(lexicon: Dict[str, List[dict]]) -> List[RuleEntry]:
    """
    Convert a lexicon dict into RuleEntry rows.

    Args:
        lexicon: {
            "RELIGION": [{"regex_pattern": "Christianity", "priority": 2.0}, ...],
            ...
        }
        Entries inherit the enclosing key as label unless they set "label".

    Raises:
        RuleTableError: lexicon does not conform to RULE_LEXICON_SCHEMA.
    """
    try:
        validate(instance=lexicon, schema=RULE_LEXICON_SCHEMA)
    except SchemaValidationError as e:
        raise RuleTableError(f"Invalid rule lexicon: {e.message}") from e

    entries: List[RuleEntry] = []
    for entity_label, items in lexicon.items():
        for item in items:
            fields: dict = {
                "pattern": item["regex_pattern"],
                "label": item.get("label", entity_label),
                "overwritable_types": item.get("overwritable_types", []),
            }
            if "priority" in item:
                fields["priority"] = item["priority"]
            try:
                entries.append(RuleEntry(**fields))
            except ValidationError as e:
                raise RuleTableError(f"Invalid lexicon entry {item}: {e}") from e

    return entries


def load_rule_table(
    path: Union[str, Path],
    ignore_case: bool = False,
    valid_pos_pattern: Optional[str] = None,
) -> RuleTable:
    """Load a mapping file and compile it into a RuleTable."""
    return RuleTable(
        load_mapping(path),
        ignore_case=ignore_case,
        valid_pos_pattern=valid_pos_pattern,
    )
