"""
Schema definitions for Research Signals.

Pydantic models for:
- NewsItem: Raw news item handed over by a collector
- ScoredItem: Classified + weighted item flowing through the pipeline
- SignalSet: Terminal output of one pipeline run
"""

import re
from datetime import datetime
from enum import Enum
from typing import List, Dict, Optional, Any

import pytz
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class MacroCategory(str, Enum):
    """Macro categories, declared in hierarchy order (highest first)."""
    RATES = "Rates"
    USD = "USD"
    LIQUIDITY = "Liquidity"
    ENERGY = "Energy"
    SAFE_HAVEN = "SafeHaven"
    EQUITIES = "Equities"
    CRYPTO = "Crypto"
    OTHER = "Other"


class RegionTag(str, Enum):
    """Region scope of a news item, declared in detection order."""
    US = "US"
    G10 = "G10"
    EM = "EM"
    THEMATIC = "THEMATIC"


class RegimeConfidence(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"


# Base priority per category; strictly descending, no ties
MACRO_HIERARCHY: Dict[MacroCategory, int] = {
    MacroCategory.RATES: 100,       # 利率政策
    MacroCategory.USD: 90,          # 美元/匯率
    MacroCategory.LIQUIDITY: 85,    # 流動性/QE/縮表
    MacroCategory.ENERGY: 80,       # 能源/原油
    MacroCategory.SAFE_HAVEN: 70,   # 黃金/美債
    MacroCategory.EQUITIES: 60,     # 股市結構
    MacroCategory.CRYPTO: 50,       # 加密貨幣
    MacroCategory.OTHER: 40,
}

# Region multipliers; US >= G10 >= EM >= THEMATIC, all in (0, 1]
REGION_WEIGHTS: Dict[RegionTag, float] = {
    RegionTag.US: 1.0,
    RegionTag.G10: 0.8,
    RegionTag.EM: 0.5,
    RegionTag.THEMATIC: 0.3,
}

# Leading markers collectors prepend to headlines
_LEADING_MARKERS = re.compile(r'^[\s🚨📌ℹ️⭐•\-\*]+')
# Trailing " - Reuters" / " | CNBC" segment; stripped only for known sources
_SOURCE_SUFFIX = re.compile(r'\s+[-–—|]\s+([^-–—|]{1,40})$')

# Outlets whose name collectors append to headlines (lowercase)
KNOWN_SOURCES = {
    'reuters', 'cnbc', 'bloomberg', 'ap', 'associated press', 'afp', 'wsj',
    'the wall street journal', 'wall street journal', 'ft', 'financial times',
    'marketwatch', 'yahoo finance', 'barron\'s', 'investing.com', 'cnn',
    'bbc', 'nikkei', 'nikkei asia', 'the economist', 'fox business',
    '經濟日報', '工商時報', '鉅亨網', '中央社', '聯合新聞網', '自由時報',
    '財訊', '商業周刊', '中時新聞網', '路透', '彭博',
}


def strip_source_suffix(text: str) -> str:
    """Drop a trailing attribution if it names a known outlet."""
    match = _SOURCE_SUFFIX.search(text)
    if match and match.group(1).strip().lower() in KNOWN_SOURCES:
        return text[:match.start()]
    return text


def normalize_title(text: str) -> str:
    """Lowercased headline with markers, attribution and extra spaces removed."""
    title = _LEADING_MARKERS.sub('', text or '')
    title = strip_source_suffix(title)
    title = re.sub(r'\s+', ' ', title).strip()
    return title.lower()


class NewsItem(BaseModel):
    """Raw news item. Immutable once ingested."""

    model_config = ConfigDict(frozen=True)

    text: str
    source_url: Optional[str] = None
    published_at: Optional[datetime] = None
    source: Optional[str] = None

    # Optional dedup tie-break; higher wins
    priority: Optional[int] = None

    @field_validator('published_at', mode='before')
    @classmethod
    def parse_timestamp(cls, v):
        if isinstance(v, str):
            v = datetime.fromisoformat(v.replace('Z', '+00:00'))
        if isinstance(v, datetime) and v.tzinfo is None:
            v = pytz.UTC.localize(v)
        return v

    @property
    def title(self) -> str:
        return normalize_title(self.text)


class ScoredItem(BaseModel):
    """
    A NewsItem plus its classification and weighting.

    Created by the classifier; the weighter and selector derive new
    instances with model_copy() rather than mutating.
    """

    model_config = ConfigDict(frozen=True)

    item: NewsItem
    category: MacroCategory = MacroCategory.OTHER
    base_score: int = MACRO_HIERARCHY[MacroCategory.OTHER]

    # Filled by GlobalWeighter
    region: RegionTag = RegionTag.THEMATIC
    weight: float = REGION_WEIGHTS[RegionTag.THEMATIC]
    # Defaults to base_score * weight when not given
    final_score: float = 0.0

    # Filled by SignalSelector
    validated: Optional[bool] = None
    validation_reason: Optional[str] = None

    @model_validator(mode='before')
    @classmethod
    def default_final_score(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get('final_score') is None:
            base = data.get('base_score', MACRO_HIERARCHY[MacroCategory.OTHER])
            weight = data.get('weight', REGION_WEIGHTS[RegionTag.THEMATIC])
            data = {**data, 'final_score': float(base) * float(weight)}
        return data

    @property
    def text(self) -> str:
        return self.item.text

    def causal_label(self) -> str:
        """Render as '[Category] headline'."""
        return f"[{self.category.value}] {self.item.text}"


class EvidenceSummary(BaseModel):
    """Cross-asset evidence found among primary signals."""

    model_config = ConfigDict(frozen=True)

    count: int = 0
    classes: List[str] = Field(default_factory=list)
    sufficient: bool = False


class SignalStats(BaseModel):
    """Counts collected across one pipeline run."""

    model_config = ConfigDict(frozen=True)

    input: int = 0
    filtered: int = 0
    deduped: int = 0
    collapsed: int = 0
    validated: int = 0
    rejected: int = 0
    primary: int = 0
    secondary: int = 0
    secondary_floor: int = 0
    secondary_floor_met: bool = True


class SignalSet(BaseModel):
    """Terminal output of a pipeline run."""

    model_config = ConfigDict(frozen=True)

    primary: List[ScoredItem] = Field(default_factory=list)
    secondary: List[ScoredItem] = Field(default_factory=list)
    regime_sentence: str
    regime_confidence: RegimeConfidence = RegimeConfidence.MEDIUM
    evidence: EvidenceSummary = Field(default_factory=EvidenceSummary)
    stats: SignalStats = Field(default_factory=SignalStats)

    def primary_signals(self) -> List[str]:
        """Primary items as causal labels, in rank order."""
        return [s.causal_label() for s in self.primary]

    def secondary_context(self) -> List[str]:
        """One supporting-context line per secondary category."""
        counts: Dict[str, int] = {}
        for signal in self.secondary:
            cat = signal.category.value
            counts[cat] = counts.get(cat, 0) + 1
        return [f"{cat}: {count} 則補充訊號" for cat, count in counts.items()]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return self.model_dump(mode='json')
