"""
Legal citation extraction tests.

Tests verify each reference pattern and the first-seen, exact-string
deduplication rule.
"""
from clarity_core.parsing.citations import extract_citations, extract_citations_from_lines


class TestCitationPatterns:
    """Tests for individual citation patterns."""

    def test_section_reference(self):
        assert extract_citations("as provided in Sec. 4(a)(1) of this Act") == ["Sec. 4(a)(1)"]

    def test_usc_reference(self):
        assert "15 U.S.C. 78j(b)" in extract_citations("under 15 U.S.C. 78j(b), the Commission")

    def test_cfr_part_reference(self):
        assert extract_citations("see 17 C.F.R. Part 240") == ["17 C.F.R. Part 240"]

    def test_cfr_section_reference(self):
        assert extract_citations("see 17 C.F.R. 240.10") == ["17 C.F.R. 240.10"]

    def test_act_of_year(self):
        assert extract_citations("the Securities Exchange Act of 1934") == ["Securities Exchange Act of 1934"]

    def test_commodity_exchange_act(self):
        assert extract_citations("amends the Commodity Exchange Act") == ["Commodity Exchange Act"]

    def test_no_citations(self):
        assert extract_citations("A digital commodity exchange shall register.") == []

    def test_empty_text(self):
        assert extract_citations("") == []


class TestCitationDeduplication:
    """Tests for order-preserving deduplication."""

    def test_repeated_citation_appears_once(self):
        """'Section 10(b) ... Section 10(b)' yields exactly one citation."""
        assert extract_citations("Section 10(b) ... Section 10(b)") == ["Section 10(b)"]

    def test_pattern_order_then_position(self):
        """Matches are pooled pattern by pattern, each in text order."""
        text = "the Commodity Exchange Act (7 U.S.C. 1) and section 2 and section 3"

        assert extract_citations(text) == [
            "section 2",
            "section 3",
            "7 U.S.C. 1",
            "Commodity Exchange Act",
        ]

    def test_near_duplicates_kept(self):
        """Citations differing only in punctuation are distinct strings."""
        citations = extract_citations("15 U.S.C. 78 and 15 U.S.C 78")
        assert citations == ["15 U.S.C. 78", "15 U.S.C 78"]

    def test_from_lines_dedupes_across_lines(self):
        lines = [
            "SEC. 102. RULEMAKING.",
            "rules under Section 10(b) of the Securities Exchange Act of 1934",
            "consistent with Section 10(b)",
        ]

        assert extract_citations_from_lines(lines) == [
            "SEC. 102",
            "Section 10(b)",
            "Securities Exchange Act of 1934",
        ]
