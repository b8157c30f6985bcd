"""
Research Signals Module

Turns the raw news collected for a market digest into a small set of
research signals: the top macro drivers of the day, supporting context,
and one regime sentence describing how the market is behaving.

Components:
- relevance: Drops strategy/commentary items
- dedup: Removes exact and near-duplicate coverage
- classifier: Macro category keywords + theme collapse
- regions: Region weights (US > G10 > EM > Thematic)
- validator: Evidence gate for primary signals
- selector: Primary (top 3) / secondary split with floor check
- regime: Driver + behavior sentence with cross-asset confidence
- pipeline: Main orchestrator
- feed: JSON feed loader

Usage:
    from src.research_signals import generate_signal_set

    signal_set = generate_signal_set([
        "Fed維持利率不變",
        "美元指數升破96",
        "黃金突破5400美元",
    ])
    print(signal_set.regime_sentence, signal_set.regime_confidence)
"""

from .schema import (
    NewsItem,
    ScoredItem,
    SignalSet,
    SignalStats,
    EvidenceSummary,
    MacroCategory,
    RegionTag,
    RegimeConfidence,
    MACRO_HIERARCHY,
    REGION_WEIGHTS,
)
from .config import SignalConfig, ConfigError, load_config
from .relevance import CommentaryFilter
from .dedup import Deduplicator, dedupe
from .classifier import MacroClassifier, collapse_themes
from .regions import GlobalWeighter
from .validator import SemanticValidator
from .selector import SignalSelector, SelectionResult
from .regime import RegimeSynthesizer, RegimeResult, ALLOWED_EVIDENCE_CLASSES
from .pipeline import ResearchSignalPipeline, generate_signal_set
from .feed import FeedAdapter, FeedError

__all__ = [
    # Schema
    'NewsItem',
    'ScoredItem',
    'SignalSet',
    'SignalStats',
    'EvidenceSummary',
    'MacroCategory',
    'RegionTag',
    'RegimeConfidence',
    'MACRO_HIERARCHY',
    'REGION_WEIGHTS',

    # Config
    'SignalConfig',
    'ConfigError',
    'load_config',

    # Stages
    'CommentaryFilter',
    'Deduplicator',
    'dedupe',
    'MacroClassifier',
    'collapse_themes',
    'GlobalWeighter',
    'SemanticValidator',
    'SignalSelector',
    'SelectionResult',
    'RegimeSynthesizer',
    'RegimeResult',
    'ALLOWED_EVIDENCE_CLASSES',

    # Orchestration
    'ResearchSignalPipeline',
    'generate_signal_set',
    'FeedAdapter',
    'FeedError',
]
