"""Line trimming and whitespace tokenization."""

from __future__ import annotations

import re

_TRIM_CHARS = " \t\n\r"
_TOKEN_RE = re.compile(r"[^ \t\n\v\f\r]+")


def trim(s: str) -> str:
    """Strip spaces, tabs, newlines and carriage returns from both ends."""
    return s.strip(_TRIM_CHARS)


def tokenize(line: str) -> list[str]:
    """Split a line into words separated by ASCII whitespace."""
    return _TOKEN_RE.findall(line)