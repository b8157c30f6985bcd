"""
Keyword matching shared by the classifier, weighter and validator.

Tables are plain keyword lists mixing English and Chinese terms. Latin
keywords only match on ASCII-letter boundaries ("ETH" must not hit
"method"); CJK keywords match as plain substrings since Chinese text has
no word separators. Short all-caps acronyms (US, AI, QE) are matched
case-sensitively so "us" or "said" never count.
"""

import re
from typing import Iterable, List, Optional


def keyword_pattern(keyword: str) -> str:
    """Regex source for one keyword."""
    escaped = re.escape(keyword)
    if keyword.isascii():
        return rf'(?<![A-Za-z]){escaped}(?![A-Za-z])'
    return escaped


def is_acronym(keyword: str) -> bool:
    return keyword.isascii() and keyword.isupper() and len(keyword) <= 4


def compile_keyword(keyword: str) -> re.Pattern:
    flags = 0 if is_acronym(keyword) else re.IGNORECASE
    return re.compile(keyword_pattern(keyword), flags)


class KeywordMatcher:
    """Matcher over one keyword list; list order is match priority."""

    def __init__(self, keywords: Iterable[str]):
        self.keywords: List[str] = list(keywords)
        self._patterns = [compile_keyword(kw) for kw in self.keywords]

    def first_match(self, text: str) -> Optional[str]:
        """Return the first keyword found in text, or None."""
        for kw, pattern in zip(self.keywords, self._patterns):
            if pattern.search(text):
                return kw
        return None

    def matches(self, text: str) -> bool:
        return self.first_match(text) is not None

    def all_matches(self, text: str) -> List[str]:
        return [kw for kw, p in zip(self.keywords, self._patterns) if p.search(text)]
