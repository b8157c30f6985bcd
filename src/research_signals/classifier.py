"""
Macro classifier and theme collapse.

Assigns each news item a MacroCategory by scanning keyword lists in
hierarchy order (Rates first, Other last). The first category with a hit
wins, which is also the tie-break for items that mention several themes:
"Fed降息帶動台股大漲" is Rates, not Equities.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from .keywords import KeywordMatcher
from .schema import MacroCategory, MACRO_HIERARCHY, NewsItem, ScoredItem

logger = logging.getLogger(__name__)


class MacroClassifier:
    """Keyword-based macro category classifier."""

    # Checked in this order; must follow MACRO_HIERARCHY
    MACRO_KEYWORDS: Dict[MacroCategory, List[str]] = {
        MacroCategory.RATES: [
            'Fed', '聯準會', '鮑爾', '降息', '升息', '利率', '貨幣政策', '央行',
            'FOMC', 'Federal Reserve', 'Powell', 'ECB', 'BOJ',
            'interest rate', 'interest rates', 'rate hike', 'rate hikes',
            'rate cut', 'rate cuts', 'central bank', 'monetary policy',
        ],
        MacroCategory.USD: [
            '美元指數', '美元走強', '美元走弱', '強勢美元', '弱勢美元',
            'DXY', '台幣', '匯率', '日圓', '人民幣',
            'dollar index', 'greenback', 'US dollar', 'exchange rate',
        ],
        MacroCategory.LIQUIDITY: [
            '縮表', 'QE', 'QT', '流動性', '量化寬鬆', '資金面',
            'liquidity', 'quantitative easing', 'balance sheet', 'repo',
        ],
        MacroCategory.ENERGY: [
            '原油', '油價', 'WTI', '能源', '天然氣', 'OPEC',
            'crude', 'oil price', 'oil prices', 'Brent', 'natural gas',
        ],
        MacroCategory.SAFE_HAVEN: [
            '黃金', '金價', '美債', '避險', '公債',
            'gold', 'Treasury', 'Treasuries', 'safe haven', 'safe-haven',
        ],
        MacroCategory.EQUITIES: [
            '股市', '台股', '美股', 'S&P', 'Nasdaq', '加權指數', '科技股', '台積電',
            'stocks', 'equities', 'Dow', 'TSMC', 'Wall Street',
        ],
        MacroCategory.CRYPTO: [
            '比特幣', 'Bitcoin', '加密', '以太坊', 'ETH', 'BTC', 'crypto',
        ],
    }

    def __init__(self, keywords: Optional[Dict[MacroCategory, List[str]]] = None):
        table = keywords or self.MACRO_KEYWORDS
        # Iterate in hierarchy order regardless of table order
        self._matchers: List[Tuple[MacroCategory, KeywordMatcher]] = [
            (cat, KeywordMatcher(table[cat]))
            for cat in MacroCategory
            if cat in table
        ]

    def classify(self, item: NewsItem) -> Tuple[MacroCategory, int]:
        """Return (category, base_score). Unmatched text is Other."""
        for category, matcher in self._matchers:
            keyword = matcher.first_match(item.text)
            if keyword is not None:
                logger.debug(f"{category.value} via '{keyword}': {item.text[:40]}")
                return category, MACRO_HIERARCHY[category]
        return MacroCategory.OTHER, MACRO_HIERARCHY[MacroCategory.OTHER]

    def score(self, item: NewsItem) -> ScoredItem:
        category, base_score = self.classify(item)
        return ScoredItem(item=item, category=category, base_score=base_score)

    def score_all(self, items: Sequence[NewsItem]) -> List[ScoredItem]:
        return [self.score(item) for item in items]


def collapse_themes(scored: Sequence[ScoredItem]) -> List[ScoredItem]:
    """
    Keep one item per category: the longest text, a proxy for most detailed.

    Categories are emitted in first-seen order; on equal length the earlier
    item wins.
    """
    best: Dict[MacroCategory, ScoredItem] = {}
    for signal in scored:
        current = best.get(signal.category)
        if current is None or len(signal.text) > len(current.text):
            best[signal.category] = signal

    collapsed = list(best.values())
    if len(collapsed) != len(scored):
        logger.info(f"Theme collapse: {len(scored)} -> {len(collapsed)} items")
    return collapsed
