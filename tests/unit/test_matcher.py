"""
Unit tests for token-sequence pattern matching.
"""
from regexner.annotation.matcher import find_matches, find_rule_matches
from regexner.models.token import Token


def _tokens(text, tags=None):
    words = text.split(" ")
    tags = tags or [None] * len(words)
    return [Token(w, tag=t) for w, t in zip(words, tags)]


def _spans(matches):
    return sorted((m.start, m.end, m.label) for m in matches)


class TestFindMatches:

    def test_single_token_rule(self, make_table):
        table = make_table(("Illinois", "STATE_OR_PROVINCE"))
        matches = find_matches(_tokens("Chicago , Illinois ."), table)
        assert _spans(matches) == [(2, 3, "STATE_OR_PROVINCE")]

    def test_multi_token_rule(self, make_table):
        table = make_table(("Early Christianity", "RELIGION"))
        matches = find_matches(_tokens("than Early Christianity ."), table)
        assert _spans(matches) == [(1, 3, "RELIGION")]

    def test_full_match_required(self, make_table):
        table = make_table(("Christian", "IDEOLOGY"))
        assert find_matches(_tokens("Christianity ."), table) == []

    def test_per_token_regex(self, make_table):
        table = make_table(("[A-Z][a-z]+ (City|Town)", "CITY"))
        matches = find_matches(_tokens("Kansas City and Cape Town"), table)
        assert _spans(matches) == [(0, 2, "CITY"), (3, 5, "CITY")]

    def test_overlapping_matches_all_kept(self, make_table):
        table = make_table(
            ("Christianity", "RELIGION", 2.0),
            ("Early Christianity", "RELIGION", 1.0),
        )
        matches = find_matches(_tokens("Early Christianity"), table)
        assert _spans(matches) == [(0, 2, "RELIGION"), (1, 2, "RELIGION")]

    def test_repeated_matches_of_one_rule(self, make_table):
        table = make_table(("Christianity", "RELIGION"))
        matches = find_matches(_tokens("Christianity and Christianity"), table)
        assert [m.start for m in matches] == [0, 2]

    def test_case_sensitive_by_default(self, make_table):
        table = make_table(("illinois", "STATE_OR_PROVINCE"))
        assert find_matches(_tokens("Illinois"), table) == []

    def test_ignore_case(self, make_table):
        table = make_table(("illinois", "STATE_OR_PROVINCE"), ignore_case=True)
        assert len(find_matches(_tokens("ILLINOIS"), table)) == 1

    def test_existing_labels_not_consulted(self, make_table):
        table = make_table(("Ontario", "STATE_OR_PROVINCE"))
        tokens = _tokens("Ontario Place")
        tokens[0].ner = "LOCATION"
        tokens[1].ner = "LOCATION"
        assert len(find_matches(tokens, table)) == 1
        assert tokens[0].ner == "LOCATION"

    def test_rule_longer_than_sentence(self, make_table):
        table = make_table(("Native American Church", "ORGANIZATION"))
        assert find_matches(_tokens("Native American"), table) == []

    def test_empty_sentence(self, make_table):
        table = make_table(("a", "A"))
        assert find_matches([], table) == []


class TestPosRestriction:

    def test_match_needs_one_valid_tag(self, make_table):
        table = make_table(("Early Christianity", "RELIGION"), valid_pos_pattern="NN.*")
        tokens = _tokens("Early Christianity", tags=["JJ", "NNP"])
        assert len(find_matches(tokens, table)) == 1

    def test_match_dropped_without_valid_tag(self, make_table):
        table = make_table(("Christian", "IDEOLOGY"), valid_pos_pattern="NN.*")
        tokens = _tokens("Christian", tags=["JJ"])
        assert find_matches(tokens, table) == []

    def test_untagged_tokens_fail_restriction(self, make_table):
        table = make_table(("Christian", "IDEOLOGY"), valid_pos_pattern="NN.*")
        assert find_matches(_tokens("Christian"), table) == []


class TestFindRuleMatches:

    def test_offsets(self, make_table):
        rule = make_table(("a b", "X")).rules[0]
        matches = find_rule_matches(rule, ["a", "b", "a", "b"])
        assert [(m.start, m.end) for m in matches] == [(0, 2), (2, 4)]
