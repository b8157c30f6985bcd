"""
Global weighter - scale category scores by region of impact.

US news moves global assets more than G10 news, which moves them more
than EM news. Items with no recognizable region are treated as thematic
and get the lowest weight.
"""

import logging
from typing import Dict, List, Optional, Sequence

from .config import SignalConfig
from .keywords import KeywordMatcher
from .schema import RegionTag, ScoredItem

logger = logging.getLogger(__name__)


class GlobalWeighter:
    """Region detection + finalScore = baseScore * regionWeight."""

    # Checked in order US -> G10 -> EM -> THEMATIC
    REGION_KEYWORDS: Dict[RegionTag, List[str]] = {
        RegionTag.US: [
            '美國', '美股', '美元', '美債', '聯準會', '鮑爾', '道瓊', '川普', '白宮',
            'Fed', 'FOMC', 'Federal Reserve', 'Powell', 'Wall Street', 'S&P',
            'Nasdaq', 'Dow', 'DXY', 'Treasury', 'Treasuries', 'US', 'U.S.',
            'American', 'Trump', 'White House', 'WTI',
        ],
        RegionTag.G10: [
            '歐洲', '歐元', '歐洲央行', '英國', '英鎊', '英國央行', '日本', '日圓',
            '日銀', '加拿大', '澳洲', '紐西蘭', '瑞士', '德國', '法國',
            'ECB', 'BOE', 'BOJ', 'Bank of England', 'Bank of Japan', 'Europe',
            'European', 'eurozone', 'euro', 'Japan', 'yen', 'UK', 'Britain',
            'sterling', 'Canada', 'Australia', 'Swiss', 'Germany', 'Brent',
        ],
        RegionTag.EM: [
            '台灣', '台股', '台幣', '台積電', '加權指數', '金管會', '中國', '大陸',
            '人民幣', '印度', '巴西', '墨西哥', '韓國', '韓元', '越南', '印尼',
            '南非', '土耳其', '新興市場', '哥倫比亞',
            'Taiwan', 'TAIEX', 'TSMC', 'China', 'Chinese', 'yuan', 'India',
            'Brazil', 'Mexico', 'Korea', 'emerging market', 'emerging markets',
        ],
        RegionTag.THEMATIC: [
            'AI', '人工智慧', '綠能', '氣候', '比特幣', '加密', 'Bitcoin',
            'crypto', 'ESG', 'climate',
        ],
    }

    def __init__(
        self,
        config: Optional[SignalConfig] = None,
        keywords: Optional[Dict[RegionTag, List[str]]] = None,
    ):
        self.config = config or SignalConfig()
        table = keywords or self.REGION_KEYWORDS
        self._matchers = [
            (region, KeywordMatcher(table[region]))
            for region in RegionTag
            if region in table
        ]

    def detect_region(self, text: str) -> RegionTag:
        for region, matcher in self._matchers:
            if matcher.matches(text):
                return region
        return RegionTag.THEMATIC

    def weight(self, signal: ScoredItem) -> ScoredItem:
        """Return a copy with region, weight and final_score filled in."""
        region = self.detect_region(signal.text)
        weight = self.config.region_weights[region]
        return signal.model_copy(update={
            'region': region,
            'weight': weight,
            'final_score': signal.base_score * weight,
        })

    def weight_all(self, signals: Sequence[ScoredItem]) -> List[ScoredItem]:
        """Weight every item, then stable-sort descending by final_score."""
        weighted = [self.weight(s) for s in signals]
        # sorted() is stable: equal scores keep input order
        return sorted(weighted, key=lambda s: -s.final_score)
