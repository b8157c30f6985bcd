"""
Research Signal Pipeline - Main orchestrator.

Turns a fully materialized list of news items into a SignalSet:

0. Drop strategy/commentary items (optional)
1. Deduplicate
2. Classify into macro categories
3. Collapse same-category items
4. Apply region weights and rank
5. Validate + select primary/secondary
6. Synthesize the regime sentence

Every stage is a pure transform; the pipeline holds no state between runs,
so the same input always yields an equal SignalSet.
"""

import logging
from typing import List, Optional, Sequence, Union

from .classifier import MacroClassifier, collapse_themes
from .config import SignalConfig
from .dedup import Deduplicator
from .regime import RegimeSynthesizer
from .regions import GlobalWeighter
from .relevance import CommentaryFilter
from .schema import NewsItem, SignalSet, SignalStats
from .selector import SignalSelector
from .validator import SemanticValidator

logger = logging.getLogger(__name__)

NewsInput = Union[NewsItem, str]


class ResearchSignalPipeline:
    """
    Main pipeline for research signal selection.

    All components are optional and will use defaults built from `config`
    if not provided.
    """

    def __init__(
        self,
        config: Optional[SignalConfig] = None,
        commentary_filter: Optional[CommentaryFilter] = None,
        deduplicator: Optional[Deduplicator] = None,
        classifier: Optional[MacroClassifier] = None,
        weighter: Optional[GlobalWeighter] = None,
        validator: Optional[SemanticValidator] = None,
        selector: Optional[SignalSelector] = None,
        synthesizer: Optional[RegimeSynthesizer] = None,
    ):
        self.config = config or SignalConfig()
        self.commentary_filter = commentary_filter or CommentaryFilter()
        self.deduplicator = deduplicator or Deduplicator(self.config)
        self.classifier = classifier or MacroClassifier()
        self.weighter = weighter or GlobalWeighter(self.config)
        self.validator = validator or SemanticValidator()
        self.selector = selector or SignalSelector(self.config, self.validator)
        self.synthesizer = synthesizer or RegimeSynthesizer(self.config)

    def run(self, items: Sequence[NewsInput]) -> SignalSet:
        """
        Run the full pipeline over one reporting cycle's items.

        Args:
            items: NewsItem objects or plain headline strings

        Returns:
            SignalSet with primary/secondary signals, regime sentence and stats
        """
        news = self._coerce(items)
        logger.info(f"Research signal run: {len(news)} input items")

        if self.config.commentary_filter:
            filtered = self.commentary_filter.filter(news)
        else:
            filtered = list(news)

        deduped = self.deduplicator.dedupe(filtered)
        scored = self.classifier.score_all(deduped)
        collapsed = collapse_themes(scored)
        weighted = self.weighter.weight_all(collapsed)
        selection = self.selector.select_detailed(weighted)
        regime = self.synthesizer.synthesize(selection.primary)

        stats = SignalStats(
            input=len(news),
            filtered=len(filtered),
            deduped=len(deduped),
            collapsed=len(collapsed),
            validated=selection.validated_count,
            rejected=selection.rejected_count,
            primary=len(selection.primary),
            secondary=len(selection.secondary),
            secondary_floor=selection.secondary_floor,
            secondary_floor_met=selection.secondary_floor_met,
        )

        logger.info(
            f"Signals: input={stats.input} filtered={stats.filtered} "
            f"deduped={stats.deduped} collapsed={stats.collapsed} "
            f"primary={stats.primary} secondary={stats.secondary} "
            f"regime={regime.confidence.value}"
        )

        return SignalSet(
            primary=selection.primary,
            secondary=selection.secondary,
            regime_sentence=regime.sentence,
            regime_confidence=regime.confidence,
            evidence=regime.evidence,
            stats=stats,
        )

    @staticmethod
    def _coerce(items: Sequence[NewsInput]) -> List[NewsItem]:
        return [i if isinstance(i, NewsItem) else NewsItem(text=i) for i in items]


def generate_signal_set(
    items: Sequence[NewsInput],
    config: Optional[SignalConfig] = None,
) -> SignalSet:
    """
    Convenience function to run the pipeline once.

    Args:
        items: News items or headline strings
        config: Optional SignalConfig (defaults otherwise)

    Returns:
        SignalSet
    """
    return ResearchSignalPipeline(config=config).run(items)
