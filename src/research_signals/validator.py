"""
Semantic validator - anti-mislabeling gate for primary signals.

The classifier is deliberately loose: the word "Fed" alone is enough to
label an item Rates. Before an item may headline a report it has to show
real evidence for its category (a policy rate, a yield move, an earnings
figure...). Items that fail are demoted to secondary, never discarded.

Two checks, in order:
1. Thematic downgrade: adoption/trend stories (AI, 綠能, 民調...) with no
   financial transmission path (revenue, capex, 獲利...) fail.
2. Category evidence: the text must contain one of the category's strict
   evidence terms. Other has no evidence list and always fails.
"""

import logging
from typing import Dict, List, Optional, Tuple

from .keywords import KeywordMatcher
from .schema import MacroCategory, ScoredItem

logger = logging.getLogger(__name__)


REASON_OK = 'OK'
REASON_THEMATIC = 'THEMATIC_NO_TRANSMISSION'
REASON_NO_EVIDENCE = 'NO_CATEGORY_EVIDENCE'


class SemanticValidator:
    """Checks that a category label is backed by in-text evidence."""

    EVIDENCE_KEYWORDS: Dict[MacroCategory, List[str]] = {
        MacroCategory.RATES: [
            '利率', '降息', '升息', '政策利率', '利率決策', '殖利率', '基點', '一碼', '兩碼',
            'policy rate', 'rate decision', 'rate hike', 'rate hikes', 'rate cut',
            'rate cuts', 'raises rates', 'cuts rates', 'holds rates',
            'interest rate', 'interest rates', 'yield curve', 'yields',
            'fed funds', 'dot plot', 'bp', 'bps', 'basis points',
        ],
        MacroCategory.USD: [
            '美元指數', 'DXY', '匯率', '升值', '貶值', '貶至', '升至', '美元走強',
            '美元走弱', '強勢美元', '弱勢美元',
            'dollar index', 'exchange rate', 'greenback', 'dollar strength',
            'dollar weakness',
        ],
        MacroCategory.LIQUIDITY: [
            '縮表', '量化寬鬆', '資產負債表', '逆回購', '準備金', '資金面',
            'QE', 'QT', 'balance sheet', 'quantitative easing',
            'quantitative tightening', 'repo', 'reserves',
        ],
        MacroCategory.ENERGY: [
            '原油', '油價', '天然氣', '減產', '增產', '桶', '布蘭特',
            'WTI', 'OPEC', 'crude', 'oil price', 'oil prices', 'Brent',
            'natural gas', 'barrel', 'barrels', 'output cut',
        ],
        MacroCategory.SAFE_HAVEN: [
            '黃金', '金價', '美債', '公債', '避險需求', '避險資產',
            'gold', 'Treasury', 'Treasuries', 'safe haven', 'safe-haven',
        ],
        MacroCategory.EQUITIES: [
            # Financial / operating metrics only
            'earnings', 'revenue', 'capex', 'order', 'orders', 'margin',
            'valuation', 'supply chain', 'production', 'inventory cycle',
            '財報', '營收', '資本支出', '訂單', '毛利', '估值', '供應鏈', '生產', '庫存',
            # Index-level market structure
            '加權指數', '成交量', '外資', 'index', 'indices',
        ],
        MacroCategory.CRYPTO: [
            '比特幣', '以太坊', '加密貨幣', '加密市場',
            'Bitcoin', 'BTC', 'Ethereum', 'ETH', 'cryptocurrency',
        ],
    }

    THEMATIC_KEYWORDS: List[str] = [
        'AI', '綠能', '氣候', '數位化', '科技趨勢', '採用率', '民調', '使用',
        'adoption', 'climate', 'green energy', 'digitalization', 'survey', 'poll',
    ]

    FINANCIAL_TRANSMISSION_KEYWORDS: List[str] = [
        'capex impact', 'revenue impact', 'order flow impact', 'margin impact',
        '資本支出', '營收影響', '訂單影響', '毛利影響', '盈餘', '獲利', '營收',
        'earnings', 'revenue', 'capex', 'profit',
    ]

    def __init__(
        self,
        evidence_keywords: Optional[Dict[MacroCategory, List[str]]] = None,
        thematic_keywords: Optional[List[str]] = None,
        transmission_keywords: Optional[List[str]] = None,
    ):
        table = evidence_keywords or self.EVIDENCE_KEYWORDS
        self._evidence = {cat: KeywordMatcher(kws) for cat, kws in table.items()}
        self._thematic = KeywordMatcher(thematic_keywords or self.THEMATIC_KEYWORDS)
        self._transmission = KeywordMatcher(
            transmission_keywords or self.FINANCIAL_TRANSMISSION_KEYWORDS
        )

    def is_thematic_only(self, text: str) -> bool:
        """Thematic story without a financial transmission path."""
        return self._thematic.matches(text) and not self._transmission.matches(text)

    def explain(self, signal: ScoredItem) -> Tuple[bool, str]:
        """Return (passed, reason code)."""
        text = signal.text
        if self.is_thematic_only(text):
            return False, REASON_THEMATIC

        matcher = self._evidence.get(signal.category)
        if matcher is None or not matcher.matches(text):
            return False, REASON_NO_EVIDENCE

        return True, REASON_OK

    def validate(self, signal: ScoredItem) -> bool:
        passed, reason = self.explain(signal)
        if not passed:
            logger.debug(f"Rejected {signal.category.value} ({reason}): {signal.text[:40]}")
        return passed

