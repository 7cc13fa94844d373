"""Text normalization shared by the content extractor and the rule engine."""

from __future__ import annotations

import re

_WHITESPACE = re.compile(r"\s+")
_BLANK_LINES = re.compile(r"\n\s*\n")


def clean_text(text: str) -> str:
    """Collapse every whitespace run (line breaks included) to one space and trim.

    The blank-line pass runs after the collapse, matching the historical
    output, so normalized text is always a single line.
    """
    if not text:
        return ""
    text = _WHITESPACE.sub(" ", text)
    text = _BLANK_LINES.sub("\n\n", text)
    return text.strip()
