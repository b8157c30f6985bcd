"""
Regime synthesizer - one sentence on what is driving the market.

The sentence always names a driver (category of the top primary signal)
and a market behavior (picked from fixed templates by scanning primary
text). Confidence is HIGH only when primary signals show evidence from
at least two distinct cross-asset classes; otherwise it degrades to
MEDIUM. Weak evidence never blocks the sentence.
"""

import re
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .config import SignalConfig
from .keywords import KeywordMatcher
from .schema import (
    EvidenceSummary,
    MacroCategory,
    RegimeConfidence,
    ScoredItem,
)

logger = logging.getLogger(__name__)


ALLOWED_EVIDENCE_CLASSES: Tuple[str, ...] = (
    'Rates', 'USD', 'YieldCurve', 'Volatility', 'Liquidity',
)

# Driver labels per language
DRIVER_LABELS: Dict[str, Dict[MacroCategory, str]] = {
    'zh': {
        MacroCategory.RATES: '利率政策',
        MacroCategory.USD: '美元走勢',
        MacroCategory.LIQUIDITY: '流動性',
        MacroCategory.ENERGY: '能源價格',
        MacroCategory.SAFE_HAVEN: '避險需求',
        MacroCategory.EQUITIES: '股市動能',
        MacroCategory.CRYPTO: '加密貨幣',
        MacroCategory.OTHER: '市場情緒',
    },
    'en': {
        MacroCategory.RATES: 'Policy rates',
        MacroCategory.USD: 'The US dollar',
        MacroCategory.LIQUIDITY: 'Liquidity',
        MacroCategory.ENERGY: 'Energy prices',
        MacroCategory.SAFE_HAVEN: 'Safe-haven demand',
        MacroCategory.EQUITIES: 'Equity momentum',
        MacroCategory.CRYPTO: 'Crypto',
        MacroCategory.OTHER: 'Market sentiment',
    },
}

BEHAVIOR_LABELS: Dict[str, Dict[str, str]] = {
    'zh': {
        'risk_off': '風險規避',
        'rally': '反彈走強',
        'volatility': '區間震盪',
        'sideways': '橫向整理',
    },
    'en': {
        'risk_off': 'risk-off positioning',
        'rally': 'a rebound rally',
        'volatility': 'range-bound volatility',
        'sideways': 'sideways consolidation',
    },
}

SENTENCE_TEMPLATES: Dict[str, str] = {
    'zh': '{driver}主導市場，呈現{behavior}格局',
    'en': '{driver} dominates the market, showing {behavior}',
}

WAIT_AND_SEE: Dict[str, str] = {
    'zh': '市場處於觀望狀態，等待關鍵數據與政策訊號',
    'en': 'Market in wait-and-see mode, awaiting key data and policy signals',
}


@dataclass(frozen=True)
class RegimeResult:
    """Regime sentence plus the evidence behind its confidence."""
    sentence: str
    confidence: RegimeConfidence
    evidence: EvidenceSummary


class RegimeSynthesizer:
    """Derive the regime sentence from primary signals."""

    # Checked in this order; first family with a hit wins
    BEHAVIOR_PATTERNS: List[Tuple[str, str]] = [
        ('risk_off', r'暴跌|重挫|風險|下跌|\bplunge|\btumble|\bsell-?off|\brisk-off|\bslump'),
        ('rally', r'大漲|上漲|反彈|走強|\brall(y|ies|ied)\b|\bsurge|\brebound'),
        ('volatility', r'震盪|波動|分化|回落|\bvolatil|\bchoppy\b|\bswings?\b'),
    ]

    EVIDENCE_MARKERS: Dict[str, List[str]] = {
        'YieldCurve': [
            '殖利率', '殖利率曲線', '倒掛', '10年期', '2年期',
            'yield curve', 'yields', '2s10s', '10-year', 'inversion',
        ],
        'Volatility': [
            'VIX', '波動', '恐慌指數', 'volatility', 'volatile',
        ],
    }

    def __init__(self, config: Optional[SignalConfig] = None):
        self.config = config or SignalConfig()
        self._behaviors = [
            (name, re.compile(pattern, re.IGNORECASE))
            for name, pattern in self.BEHAVIOR_PATTERNS
        ]
        self._markers = {
            cls: KeywordMatcher(kws) for cls, kws in self.EVIDENCE_MARKERS.items()
        }

    def synthesize(self, primary: Sequence[ScoredItem]) -> RegimeResult:
        """
        Build the regime sentence.

        Args:
            primary: Primary signals, highest final_score first

        Returns:
            RegimeResult; wait-and-see with MEDIUM confidence when empty
        """
        language = self.config.language

        if not primary:
            return RegimeResult(
                sentence=WAIT_AND_SEE[language],
                confidence=RegimeConfidence.MEDIUM,
                evidence=EvidenceSummary(),
            )

        driver = DRIVER_LABELS[language][primary[0].category]
        behavior = BEHAVIOR_LABELS[language][self.detect_behavior(primary)]
        sentence = SENTENCE_TEMPLATES[language].format(driver=driver, behavior=behavior)

        evidence = self.collect_evidence(primary)
        confidence = RegimeConfidence.HIGH if evidence.sufficient else RegimeConfidence.MEDIUM
        if not evidence.sufficient:
            logger.info(
                f"Regime confidence downgraded to MEDIUM: "
                f"{evidence.count} evidence class(es) {evidence.classes}"
            )

        return RegimeResult(sentence=sentence, confidence=confidence, evidence=evidence)

    def detect_behavior(self, primary: Sequence[ScoredItem]) -> str:
        combined = ' '.join(s.text for s in primary)
        for name, pattern in self._behaviors:
            if pattern.search(combined):
                return name
        return 'sideways'

    def collect_evidence(self, primary: Sequence[ScoredItem]) -> EvidenceSummary:
        """Distinct cross-asset evidence classes among primary signals."""
        found = set()
        for signal in primary:
            if signal.category.value in ALLOWED_EVIDENCE_CLASSES:
                found.add(signal.category.value)
            for cls, matcher in self._markers.items():
                if matcher.matches(signal.text):
                    found.add(cls)

        classes = [c for c in ALLOWED_EVIDENCE_CLASSES if c in found]
        return EvidenceSummary(
            count=len(classes),
            classes=classes,
            sufficient=len(classes) >= self.config.min_evidence_classes,
        )
