"""
Configuration for the research signal pipeline.

Defaults live on SignalConfig; a YAML file (see configs/default.yaml) may
override any of them.
"""

import inspect
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .schema import RegionTag, REGION_WEIGHTS

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Invalid pipeline configuration."""
    pass


SUPPORTED_LANGUAGES = ('zh', 'en')


class SignalConfig:
    """Configuration for signal selection."""

    def __init__(
        self,
        primary_limit: int = 3,  # PRIMARY_SIGNAL_LIMIT
        secondary_floor: int = 2,  # Required secondary count...
        secondary_floor_trigger: int = 2,  # ...once primary has this many
        overlap_threshold: int = 3,  # Shared words must exceed this
        min_word_length: int = 3,  # Only words this long count for overlap
        title_prefix_length: int = 20,  # 0 disables the prefix rule
        region_weights: Optional[Dict[Any, float]] = None,
        language: str = 'zh',
        commentary_filter: bool = True,
        min_evidence_classes: int = 2,
    ):
        self.primary_limit = primary_limit
        self.secondary_floor = secondary_floor
        self.secondary_floor_trigger = secondary_floor_trigger
        self.overlap_threshold = overlap_threshold
        self.min_word_length = min_word_length
        self.title_prefix_length = title_prefix_length
        self.region_weights = self._parse_region_weights(region_weights)
        self.language = language
        self.commentary_filter = commentary_filter
        self.min_evidence_classes = min_evidence_classes
        self.validate()

    @staticmethod
    def _parse_region_weights(weights: Optional[Dict[Any, float]]) -> Dict[RegionTag, float]:
        merged = dict(REGION_WEIGHTS)
        for key, value in (weights or {}).items():
            try:
                region = RegionTag(key.value if isinstance(key, RegionTag) else str(key).upper())
            except ValueError:
                raise ConfigError(f"Unknown region in region_weights: {key}")
            merged[region] = float(value)
        return merged

    def validate(self) -> None:
        if self.primary_limit < 1:
            raise ConfigError(f"primary_limit must be >= 1, got {self.primary_limit}")
        for name in ('secondary_floor', 'secondary_floor_trigger', 'overlap_threshold',
                     'min_word_length', 'title_prefix_length', 'min_evidence_classes'):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must be >= 0, got {getattr(self, name)}")
        if self.language not in SUPPORTED_LANGUAGES:
            raise ConfigError(f"language must be one of {SUPPORTED_LANGUAGES}, got {self.language!r}")

        ordered = [self.region_weights[r] for r in RegionTag]
        for weight in ordered:
            if not 0 < weight <= 1.0:
                raise ConfigError(f"region weights must be in (0, 1], got {weight}")
        if ordered != sorted(ordered, reverse=True):
            raise ConfigError("region weights must satisfy US >= G10 >= EM >= THEMATIC")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'SignalConfig':
        data = dict(data or {})
        # Allow the YAML file to nest everything under a 'signals' key
        if isinstance(data.get('signals'), dict):
            data = data['signals']
        known = set(inspect.signature(cls.__init__).parameters) - {'self'}
        unknown = sorted(set(data) - set(known))
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        return {
            'primary_limit': self.primary_limit,
            'secondary_floor': self.secondary_floor,
            'secondary_floor_trigger': self.secondary_floor_trigger,
            'overlap_threshold': self.overlap_threshold,
            'min_word_length': self.min_word_length,
            'title_prefix_length': self.title_prefix_length,
            'region_weights': {r.value: w for r, w in self.region_weights.items()},
            'language': self.language,
            'commentary_filter': self.commentary_filter,
            'min_evidence_classes': self.min_evidence_classes,
        }


def load_config(config_path: Optional[Union[str, Path]] = None) -> SignalConfig:
    """Load configuration from YAML file; defaults when no path is given."""
    if config_path is None:
        return SignalConfig()
    with open(config_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a mapping: {config_path}")
    logger.info(f"Loaded config from {config_path}")
    return SignalConfig.from_dict(data)
