from __future__ import annotations

import re

FENCED_BLOCK_PATTERN = re.compile(r"```(json)?\s*([\s\S]*?)\s*```")


def extract_json(text: str) -> str:
    """Return the body of a ```json fenced block, or ``text`` unchanged."""
    match = FENCED_BLOCK_PATTERN.search(text)
    if match and match.group(2):
        return match.group(2)
    return text
