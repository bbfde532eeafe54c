"""
Tests for candidate search.
"""

from doctracker.rules import Candidate
from doctracker.search import filter_candidates, matches


def _people():
    return [
        Candidate(name="Ali Khan", email="ali@example.com", designation="Site Engineer", mobile="9876543210"),
        Candidate(name="Jane Doe", email="JANE@X.COM", designation="Accountant", mobile="9123456789"),
        Candidate(name="Priya Sharma", email="priya@example.com", designation="HR Executive", mobile=""),
    ]


class TestFilterCandidates:
    """Test filtering behaviour."""

    def test_empty_term_returns_everything_in_order(self):
        people = _people()
        assert filter_candidates(people, "") == people
        assert filter_candidates(people, None) == people

    def test_name_is_case_insensitive(self):
        result = filter_candidates(_people(), "ALI")
        assert [c.name for c in result] == ["Ali Khan"]

    def test_email_is_case_insensitive(self):
        result = filter_candidates(_people(), "jane@x")
        assert [c.name for c in result] == ["Jane Doe"]

    def test_designation_match(self):
        result = filter_candidates(_people(), "engineer")
        assert [c.name for c in result] == ["Ali Khan"]

    def test_mobile_substring(self):
        result = filter_candidates(_people(), "12345")
        assert [c.name for c in result] == ["Jane Doe"]

    def test_any_field_matches_and_order_preserved(self):
        result = filter_candidates(_people(), "example.com")
        assert [c.name for c in result] == ["Ali Khan", "Priya Sharma"]

    def test_no_match(self):
        assert filter_candidates(_people(), "zzz") == []

    def test_matches_single_candidate(self):
        assert matches(_people()[2], "hr exec")
