"""
Shared test fixtures for the RegexNER test suite.
"""
from pathlib import Path

import pytest

from regexner.annotation.annotator import RegexNERAnnotator
from regexner.annotation.rule_table import RuleTable
from regexner.models.rule_io import RuleEntry

DATA_DIR = Path(__file__).parent / "data"


# ==========================================================================
# Mapping / rule tables
# ==========================================================================

@pytest.fixture
def mapping_path():
    return DATA_DIR / "itest_map.tab"


@pytest.fixture
def annotator(mapping_path):
    return RegexNERAnnotator.from_mapping(mapping_path)


@pytest.fixture
def make_table():
    """Factory: build a RuleTable from (pattern, label[, priority]) tuples."""

    def _make(*rows, **kwargs):
        entries = []
        for row in rows:
            fields = {"pattern": row[0], "label": row[1]}
            if len(row) > 2:
                fields["priority"] = row[2]
            if len(row) > 3:
                fields["overwritable_types"] = row[3]
            entries.append(RuleEntry(**fields))
        return RuleTable(entries, **kwargs)

    return _make


# ==========================================================================
# Lexicons
# ==========================================================================

@pytest.fixture
def mock_rule_lexicon():
    return {
        "RELIGION": [
            {"regex_pattern": "Christianity", "priority": 2.0},
            {"regex_pattern": "Early Christianity", "priority": 1.0},
        ],
        "LOCATION": [
            {"regex_pattern": "Illinois", "label": "STATE_OR_PROVINCE"},
            {"regex_pattern": "[A-Z][a-z]+ City", "overwritable_types": ["MISC"]},
        ],
    }
