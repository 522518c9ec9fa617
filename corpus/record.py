"""
Record model - the minimal decoded unit of a post dump.

A dump line is a JSON object; only its `lang` and `text` members are used.
Every other member is ignored.
"""

import json
from dataclasses import dataclass
from typing import Dict, Optional

# word -> occurrence count
WordMap = Dict[str, int]
# language tag -> WordMap
LanguageMap = Dict[str, WordMap]


@dataclass(frozen=True)
class Record:
    """
    One decoded post.

    Attributes:
        language: Language tag reported by the platform (e.g. "en", "und")
        text: Raw post text
    """

    language: str
    text: str

    @classmethod
    def from_line(cls, line: str) -> Optional["Record"]:
        """
        Decode one JSON line.

        Returns None when the line is not a JSON object, nests too deeply,
        or when `lang` or `text` is missing, not a string, or holds a lone
        surrogate escape.
        """
        try:
            data = json.loads(line)
        except (ValueError, RecursionError):
            return None

        if not isinstance(data, dict):
            return None

        language = data.get("lang")
        text = data.get("text")
        if not isinstance(language, str) or not isinstance(text, str):
            return None

        try:
            language.encode("utf-8")
            text.encode("utf-8")
        except UnicodeEncodeError:
            return None

        return cls(language=language, text=text)
