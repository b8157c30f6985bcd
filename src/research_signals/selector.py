"""
Signal selector - split weighted items into primary and secondary.

Primary: the first `primary_limit` items (by final_score) that pass
semantic validation. Everything else - items that failed validation and
validated overflow - becomes secondary context, in rank order.

Secondary floor: once primary holds `secondary_floor_trigger` or more
items, secondary should hold at least `secondary_floor`. A short
secondary is returned as-is and reported; no filler is invented.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from .config import SignalConfig
from .schema import ScoredItem
from .validator import SemanticValidator

logger = logging.getLogger(__name__)


class SelectionResult:
    """Result of primary/secondary selection."""

    def __init__(
        self,
        primary: List[ScoredItem],
        secondary: List[ScoredItem],
        validated_count: int,
        rejected_count: int,
        secondary_floor: int,
    ):
        self.primary = primary
        self.secondary = secondary
        self.validated_count = validated_count
        self.rejected_count = rejected_count
        self.secondary_floor = secondary_floor

    @property
    def secondary_floor_met(self) -> bool:
        return len(self.secondary) >= self.secondary_floor

    @property
    def secondary_shortfall(self) -> int:
        return max(0, self.secondary_floor - len(self.secondary))


class SignalSelector:
    """Selects primary signals for a report cycle."""

    def __init__(
        self,
        config: Optional[SignalConfig] = None,
        validator: Optional[SemanticValidator] = None,
    ):
        self.config = config or SignalConfig()
        self.validator = validator or SemanticValidator()

    def select(self, weighted: Sequence[ScoredItem]) -> Tuple[List[ScoredItem], List[ScoredItem]]:
        """Return (primary, secondary)."""
        result = self.select_detailed(weighted)
        return result.primary, result.secondary

    def select_detailed(self, weighted: Sequence[ScoredItem]) -> SelectionResult:
        """
        Select primary signals and report validation counts.

        Args:
            weighted: Weighted items in any order; ranked here by final_score

        Returns:
            SelectionResult with annotated primary and secondary lists
        """
        primary: List[ScoredItem] = []
        secondary: List[ScoredItem] = []
        validated = 0
        rejected = 0

        # sorted() is stable: equal scores keep caller order
        for signal in sorted(weighted, key=lambda s: -s.final_score):
            passed, reason = self.validator.explain(signal)
            annotated = signal.model_copy(update={
                'validated': passed,
                'validation_reason': reason,
            })

            if passed:
                validated += 1
            else:
                rejected += 1
                logger.debug(f"Demoted to secondary ({reason}): {signal.text[:40]}")

            if passed and len(primary) < self.config.primary_limit:
                primary.append(annotated)
            else:
                secondary.append(annotated)

        floor = self._required_secondary(len(primary))
        result = SelectionResult(
            primary=primary,
            secondary=secondary,
            validated_count=validated,
            rejected_count=rejected,
            secondary_floor=floor,
        )

        if not result.secondary_floor_met:
            logger.warning(
                f"Secondary floor not met: {len(secondary)}/{floor} items "
                f"(primary={len(primary)}); caller should backfill or accept"
            )

        return result

    def _required_secondary(self, primary_count: int) -> int:
        if primary_count >= self.config.secondary_floor_trigger:
            return self.config.secondary_floor
        return 0
