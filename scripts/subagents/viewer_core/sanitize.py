"""Strip characters that confuse terminal width calculations."""

from __future__ import annotations

import re

ANSI_RE = re.compile(r"\x1b\[[0-9;]*[a-zA-Z]")
CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")
ZERO_WIDTH_RE = re.compile("[​‌‍﻿︎️]")
WIDE_EMOJI_RE = re.compile("[\U0001f300-\U0001f9ff]")

REPLACEMENTS = {
    "\n": " ",
    "\t": " ",
    "\r": "",
    "⚡": "*",
    "→": "|",
    "✓": "",
    "✗": "",
}


def sanitize_text(text: str) -> str:
    result = ANSI_RE.sub("", text)
    for old, new in REPLACEMENTS.items():
        result = result.replace(old, new)
    result = CONTROL_RE.sub("", result)
    result = ZERO_WIDTH_RE.sub("", result)
    return WIDE_EMOJI_RE.sub("", result)
