from __future__ import annotations

import re

_WORD_START_RE = re.compile(r"(^|\s)(\S)")


def clean(value: str | None) -> str:
    return (value or "").strip()


def title_case_words(text: str) -> str:
    """Uppercase the first character of every whitespace-delimited word.

    Unlike ``str.title`` the rest of each word keeps its casing, so
    ``"iOS dev"`` becomes ``"IOS Dev"`` rather than ``"Ios Dev"``.
    """
    return _WORD_START_RE.sub(lambda m: m.group(1) + m.group(2).upper(), text.strip())


def non_blank_lines(text: str) -> list[str]:
    return [line for line in (text or "").split("\n") if line.strip()]
