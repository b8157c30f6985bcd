"""
Commentary filter - drop strategy advice and analyst opinion.

Items like "法人建議低接半導體族群" or "analysts say the rally has room to
run" describe what someone thinks should happen, not what happened. They
never make good research signals, so they are removed before dedup.
"""

import re
import logging
from typing import List, Sequence

from .schema import NewsItem

logger = logging.getLogger(__name__)


class CommentaryFilter:
    """Hard relevance drop for strategy/commentary items."""

    DROP_PATTERNS: List[str] = [
        r'抱股過年',
        r'低接.*族群',
        r'操作建議',
        r'布局策略',
        r'怎麼走',
        r'如何操作',
        r'投資策略',
        r'法人建議',
        r'分析師.*看',
        r'專家.*認為',
        r'預期.*點',
        r'目標價',
        r'上看.*元',
        r'下探.*元',
        r'\bprice target\b',
        r'\banalysts? (say|says|see|expect)\b',
        r'\bhow to (trade|invest|position)\b',
        r'\btrading strateg(y|ies)\b',
    ]

    def __init__(self, extra_patterns: Sequence[str] = ()):
        self._compiled = [
            re.compile(p, re.IGNORECASE)
            for p in list(self.DROP_PATTERNS) + list(extra_patterns)
        ]

    def is_commentary(self, item: NewsItem) -> bool:
        return any(p.search(item.text) for p in self._compiled)

    def filter(self, items: Sequence[NewsItem]) -> List[NewsItem]:
        kept = []
        for item in items:
            if self.is_commentary(item):
                logger.debug(f"Dropped commentary: {item.text[:40]}")
                continue
            kept.append(item)
        return kept
