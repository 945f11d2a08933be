"""Tests for splitting marker-delimited replies."""

from docugen.documents.models import FALLBACK_TITLE
from docugen.documents.sections import split_sections


class TestSplitSections:
    """Tests for split_sections."""

    def test_single_work_order(self):
        text = (
            "### Work Order: Painting\n"
            "**BUDGET (RCV):** $100.00\n"
            "**INSTRUCTIONS:**\n"
            "1. Prep walls"
        )
        documents = split_sections(text)

        assert len(documents) == 1
        assert documents[0].title == "Work Order: Painting"
        assert documents[0].content == (
            "<p><strong>BUDGET (RCV):</strong> $100.00</p>"
            "<p><strong>INSTRUCTIONS:</strong></p>"
            "<ul><li>Prep walls</li></ul>"
        )

    def test_sections_keep_source_order(self):
        text = (
            "### Section 1: Project Scope of Work\n"
            "Intro\n"
            "### Section 2: Project Budget\n"
            "<table><tr><td>x</td></tr></table>\n"
            "### Work Order: Painting\n"
            "- Prime\n"
            "### Work Order: Drywall\n"
            "- Hang\n"
            "### Section 4: Customer Selection Schedule\n"
            "Choose colors"
        )
        documents = split_sections(text)

        assert [doc.title for doc in documents] == [
            "Section 1: Project Scope of Work",
            "Section 2: Project Budget",
            "Work Order: Painting",
            "Work Order: Drywall",
            "Section 4: Customer Selection Schedule",
        ]
        assert documents[1].content == "<table><tr><td>x</td></tr></table>"
        assert documents[2].content == "<ul><li>Prime</li></ul>"

    def test_text_before_first_marker_is_dropped(self):
        documents = split_sections("Here is your report.\n### Section 1: Scope\nbody")

        assert len(documents) == 1
        assert documents[0].title == "Section 1: Scope"
        assert documents[0].content == "<p>body</p>"

    def test_no_markers_gives_fallback(self):
        documents = split_sections("Just text")

        assert len(documents) == 1
        assert documents[0].title == FALLBACK_TITLE
        assert documents[0].content == "<p>Just text</p>"

    def test_level_two_heading_is_not_a_marker(self):
        documents = split_sections("## Section 1: Not a marker\nbody")

        assert len(documents) == 1
        assert documents[0].title == FALLBACK_TITLE

    def test_marker_needs_colon(self):
        documents = split_sections("### Section 3 without colon\nbody")
        assert documents[0].title == FALLBACK_TITLE

    def test_other_headings_stay_in_section(self):
        documents = split_sections("### Section 1: Scope\n### Details\ntext")

        assert len(documents) == 1
        assert documents[0].content == "<h3>Details</h3><p>text</p>"

    def test_marker_without_body(self):
        documents = split_sections("### Section 1: Empty")

        assert documents[0].title == "Section 1: Empty"
        assert documents[0].content == ""

    def test_blank_text_gives_nothing(self):
        assert split_sections("   \n") == []
        assert split_sections("") == []
