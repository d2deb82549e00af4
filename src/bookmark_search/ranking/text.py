"""Text normalization shared by vocabulary construction and vectorization."""

from __future__ import annotations

import re

TOKEN_SPLIT_PATTERN = re.compile(r"[^A-Za-z0-9_]+")


def tokenize(text: str) -> list[str]:
    """Lowercase `text` and split it on runs of non-word characters.

    Empty fragments left at the string edges are dropped, so text without any
    word characters yields no tokens at all.
    """

    return [token for token in TOKEN_SPLIT_PATTERN.split(text.lower()) if token]
