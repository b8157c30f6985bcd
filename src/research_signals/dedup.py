"""
Deduplicator - collapse repeated coverage of the same story.

Two items are duplicates when any of these hold:
- same normalized URL
- same normalized title (attribution suffix like " - Reuters" removed)
- same title prefix (both titles at least `title_prefix_length` chars)
- more than `overlap_threshold` shared words of length >= `min_word_length`

Candidates are only compared against survivors, so running dedupe on its
own output is a no-op.
"""

import logging
from typing import List, Optional, Sequence, Set
from urllib.parse import urlsplit

from .config import SignalConfig
from .schema import NewsItem

logger = logging.getLogger(__name__)


def normalize_url(url: Optional[str]) -> Optional[str]:
    """Host + path, lowercased, without scheme, www., query or fragment."""
    if not url or not url.strip():
        return None
    parts = urlsplit(url.strip().lower())
    if not parts.netloc:
        # Scheme-less input like "example.com/a"
        parts = urlsplit('//' + url.strip().lower())
    host = parts.netloc
    if host.startswith('www.'):
        host = host[4:]
    path = parts.path.rstrip('/')
    return f"{host}{path}"


class Deduplicator:
    """Removes exact and near-duplicate news items."""

    def __init__(self, config: Optional[SignalConfig] = None):
        self.config = config or SignalConfig()

    def dedupe(self, items: Sequence[NewsItem]) -> List[NewsItem]:
        """
        Remove duplicates, keeping survivors in insertion order.

        The first item of a duplicate group is kept unless a later one has a
        strictly higher priority, in which case it takes the survivor's slot.
        """
        survivors: List[NewsItem] = []

        for item in items:
            match = self._find_duplicate(item, survivors)
            if match is None:
                survivors.append(item)
                continue

            existing = survivors[match]
            others = survivors[:match] + survivors[match + 1:]
            # Survivors must stay pairwise distinct
            if self._outranks(item, existing) and self._find_duplicate(item, others) is None:
                logger.debug(f"Replacing duplicate by priority: {existing.text[:40]}")
                survivors[match] = item
            else:
                logger.debug(f"Dropped duplicate: {item.text[:40]}")

        if len(survivors) != len(items):
            logger.info(f"Dedup: {len(items)} -> {len(survivors)} items")
        return survivors

    def is_duplicate(self, a: NewsItem, b: NewsItem) -> bool:
        url_a, url_b = normalize_url(a.source_url), normalize_url(b.source_url)
        if url_a and url_a == url_b:
            return True

        title_a, title_b = a.title, b.title
        if title_a and title_a == title_b:
            return True

        prefix = self.config.title_prefix_length
        if prefix and len(title_a) >= prefix and len(title_b) >= prefix:
            if title_a[:prefix] == title_b[:prefix]:
                return True

        shared = self._significant_words(title_a) & self._significant_words(title_b)
        return len(shared) > self.config.overlap_threshold

    def _find_duplicate(self, item: NewsItem, survivors: List[NewsItem]) -> Optional[int]:
        for idx, existing in enumerate(survivors):
            if self.is_duplicate(item, existing):
                return idx
        return None

    def _significant_words(self, title: str) -> Set[str]:
        return {w for w in title.split() if len(w) >= self.config.min_word_length}

    @staticmethod
    def _outranks(candidate: NewsItem, existing: NewsItem) -> bool:
        if candidate.priority is None:
            return False
        if existing.priority is None:
            return True
        return candidate.priority > existing.priority


def dedupe(items: Sequence[NewsItem], config: Optional[SignalConfig] = None) -> List[NewsItem]:
    """Convenience wrapper around Deduplicator.dedupe()."""
    return Deduplicator(config).dedupe(items)
