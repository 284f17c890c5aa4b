"""Cleanup of model output before it enters a listing document.

Listing documents are stored as plain text, so any markup the model emits
(HTML tags, markdown emphasis and headings) is stripped here. Shared by the
compliance and data completion stages.
"""

import re

_TAG_RE = re.compile(r"<[^>]*>")
_BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
_ITALIC_RE = re.compile(r"\*(.*?)\*")
_HEADING_RE = re.compile(r"#{1,6}\s")
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")
_WHITESPACE_RUN_RE = re.compile(r"\s{3,}")


def clean_generated_content(content: str) -> str:
    """
    Strip markup from generated section text.

    Processing order:
    1. Remove HTML tags
    2. Collapse 3+ newlines to 2
    3. Unwrap bold then italic markers
    4. Drop markdown heading markers
    5. Collapse whitespace runs of 3+ to two spaces

    Args:
        content: Raw model output

    Returns:
        Plain text, trimmed
    """
    if not content:
        return ""

    text = _TAG_RE.sub("", content)
    text = _EXCESS_NEWLINES_RE.sub("\n\n", text)
    text = _BOLD_RE.sub(r"\1", text)
    text = _ITALIC_RE.sub(r"\1", text)
    text = _HEADING_RE.sub("", text)
    text = _WHITESPACE_RUN_RE.sub("  ", text)
    return text.strip()
