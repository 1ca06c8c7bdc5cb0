"""Tests for response formatting."""

import pytest

from npoconnect.formatting import banking_details_text, format_markdown, to_plain_text
from npoconnect.models import BankingDetails


class TestFormatMarkdown:
    def test_bold(self):
        assert format_markdown("a **b** c", "donor") == "a <strong>b</strong> c"

    def test_headings_consume_their_newline(self):
        text = "### Small\n## Medium\n# Large\nbody"
        assert format_markdown(text, "donor") == "<h3>Small</h3><h2>Medium</h2><h1>Large</h1>body"

    def test_bold_inside_heading(self):
        assert format_markdown("## **Title**\n", "donor") == "<h2><strong>Title</strong></h2>"

    def test_document_breaks_before_numbered_items(self):
        text = "Intro\n1. First\n2. Second"
        assert format_markdown(text) == "Intro<br/><br/><br/>1. First<br/><br/><br/>2. Second"

    def test_donor_style_plain_newlines(self):
        assert format_markdown("Intro\n1. First", "donor") == "Intro<br/>1. First"

    def test_unsupported_constructs_pass_through(self):
        text = "- item [link](https://x.org) | cell |"
        assert format_markdown(text) == text

    def test_hash_mid_line_is_not_a_heading(self):
        assert format_markdown("Room # 5\n", "donor") == "Room # 5<br/>"

    def test_chat_style(self):
        assert format_markdown("**Tip:** use *short* lines\nok", "chat") == (
            "<strong>Tip:</strong> use <em>short</em> lines<br />ok"
        )

    def test_unknown_style(self):
        with pytest.raises(ValueError):
            format_markdown("x", "slides")


class TestPlainText:
    def test_strips_markers(self):
        text = "## 1. Introduction\nWe **really** need ### help"
        assert to_plain_text(text) == "1. Introduction\nWe really need help"

    def test_banking_details(self):
        details = BankingDetails(
            bank_name="Absa",
            account_holder="Hope",
            account_number="4071234567",
            branch_code="632005",
            account_type="Savings",
        )
        assert banking_details_text(details).splitlines() == [
            "Bank Name: Absa",
            "Account Holder: Hope",
            "Account Number: 4071234567",
            "Branch Code: 632005",
            "Account Type: Savings",
            "Reference: Donation",
        ]
