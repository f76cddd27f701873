"""Low-level text helpers used by the corpus library.

No dependency on schemas, graphs, or any other project module.
"""

import re

_WORD_PATTERN = re.compile(r"[åÅäÄöÖa-zA-Z]+|[0-9]+|\s+|.", re.DOTALL)

_OPEN_BRACKET_SPACE = re.compile(r"([(\[{])\s")
_SPACE_BEFORE_CLOSE = re.compile(r"\s([,;:)\]}])")

_BRACKET_PAIRS = (("(", ")"), ("[", "]"), ("{", "}"))


def normalize_whitespace(text: str) -> str:
    return " ".join((text or "").split()).strip()


def parse_words(text: str) -> list[str]:
    """Split *text* into letter runs, digit runs, whitespace runs and single symbols.

    Joining the result gives back the original text.
    """
    return _WORD_PATTERN.findall(text or "")


def _complete_brackets(text: str, left: str, right: str) -> str:
    return text if text.rfind(left) <= text.rfind(right) else text + right


def format_segments(text: str, min_length: int = 20) -> list[str]:
    """Turn raw article prose into clean, sentence-terminated segments."""
    result = []
    for line in (text or "").split("\n"):
        trimmed = line.strip()
        if not trimmed:
            continue

        first = trimmed[0]
        if first == first.lower():
            continue

        length = trimmed.rfind(".") + 1
        if length < min_length:
            continue

        segment = re.sub(r"\s+", " ", trimmed[:length])
        segment = _OPEN_BRACKET_SPACE.sub(r"\1", segment, count=1)
        segment = _SPACE_BEFORE_CLOSE.sub(r"\1", segment, count=1)

        for left, right in _BRACKET_PAIRS:
            segment = _complete_brackets(segment, left, right)

        result.append(segment)
    return result
