"""Rendering of the Markdown subset Gemini responses use.

This is a fixed sequence of regex substitutions, not a Markdown parser.
The order matters: bold runs before headings, headings before line breaks,
so ``## **Title**`` becomes ``<h2><strong>Title</strong></h2>``. Lists,
links and tables are left as literal text.
"""

import re

from .models import BankingDetails

_BOLD = (re.compile(r"\*\*(.*?)\*\*"), r"<strong>\1</strong>")
_ITALIC = (re.compile(r"\*(.*?)\*"), r"<em>\1</em>")
_H3 = (re.compile(r"###\s(.*?)\n"), r"<h3>\1</h3>")
_H2 = (re.compile(r"##\s(.*?)\n"), r"<h2>\1</h2>")
# Line start, or straight after an h2/h3 that swallowed the newline
_H1 = (re.compile(r"(?:^|(?<=</h[23]>))#\s(.*?)\n", re.MULTILINE), r"<h1>\1</h1>")
_NUMBERED_ITEM = (re.compile(r"(\n\d\.\s)"), r"<br/><br/>\1")
_NEWLINE = (re.compile(r"\n"), "<br/>")
_CHAT_NEWLINE = (re.compile(r"\n"), "<br />")

PIPELINES = {
    # Proposals and monthly reports
    "document": (_BOLD, _H3, _H2, _H1, _NUMBERED_ITEM, _NEWLINE),
    # Donor matching results
    "donor": (_BOLD, _H3, _H2, _H1, _NEWLINE),
    "chat": (_BOLD, _ITALIC, _CHAT_NEWLINE),
}


def format_markdown(text: str, style: str = "document") -> str:
    """Convert response Markdown to HTML markup.

    Apply once only; running the output through again is not supported.
    """
    try:
        steps = PIPELINES[style]
    except KeyError:
        raise ValueError(f"Unknown format style: {style}") from None

    for pattern, replacement in steps:
        text = pattern.sub(replacement, text)
    return text


def to_plain_text(text: str) -> str:
    """Strip bold markers and heading hashes for clipboard copies."""
    text = re.sub(r"\*\*(.*?)\*\*", r"\1", text)
    text = re.sub(r"###\s?", "", text)
    text = re.sub(r"##\s?", "", text)
    return re.sub(r"#\s?", "", text)


def banking_details_text(details: BankingDetails) -> str:
    """EFT details block copied from the donation dialog."""
    return "\n".join([
        f"Bank Name: {details.bank_name}",
        f"Account Holder: {details.account_holder}",
        f"Account Number: {details.account_number}",
        f"Branch Code: {details.branch_code}",
        f"Account Type: {details.account_type}",
        "Reference: Donation",
    ])
