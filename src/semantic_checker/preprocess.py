"""Neutralize non-markup regions of an HTML document.

Comments and the full extent of ``<script>`` and ``<style>`` elements are
blanked in place: every character except ``\\n`` and ``\\r`` becomes a space.
The output therefore has the same length and the same line/column layout as
the input, so offsets found in the preprocessed text are valid in the
original.

Closing delimiters are found non-greedily. A ``</script>`` inside a string
literal still ends the block early; that is a known limitation of working on
raw text.
"""

from __future__ import annotations

import re

FILLER = " "

NEUTRALIZED_PATTERNS = (
    re.compile(r"<!--(?:-?>|.*?(?:-->|\Z))", re.DOTALL),
    re.compile(r"<script\b[^>]*>.*?(?:</script\s*>|\Z)", re.IGNORECASE | re.DOTALL),
    re.compile(r"<style\b[^>]*>.*?(?:</style\s*>|\Z)", re.IGNORECASE | re.DOTALL),
)

_BLANK = re.compile(r"[^\r\n]")


def neutralized_regions(text: str) -> list[tuple[int, int]]:
    """Return the sorted, non-overlapping (start, end) ranges that get blanked.

    Regions are resolved left to right; a construct that starts inside an
    earlier region is part of that region and is not matched on its own.
    """
    regions: list[tuple[int, int]] = []
    position = 0
    while position < len(text):
        earliest: re.Match[str] | None = None
        for pattern in NEUTRALIZED_PATTERNS:
            match = pattern.search(text, position)
            if match is None:
                continue
            if earliest is None or match.start() < earliest.start():
                earliest = match
        if earliest is None:
            break
        regions.append((earliest.start(), earliest.end()))
        position = earliest.end()
    return regions


def preprocess(text: str) -> str:
    if not text:
        return text

    pieces: list[str] = []
    cursor = 0
    for start, end in neutralized_regions(text):
        pieces.append(text[cursor:start])
        pieces.append(_BLANK.sub(FILLER, text[start:end]))
        cursor = end
    pieces.append(text[cursor:])
    return "".join(pieces)


def is_filler(text: str) -> bool:
    return not text or text.isspace()
