"""
Feed adapter - load raw news items for a pipeline run from a JSON file.

Accepted layouts:
- a list of entries
- an object holding the list under "items", "events" or "news"

Each entry is either a headline string or a dict with text/title/headline,
url/source_url, published_at/timestamp, source and priority.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from .schema import NewsItem

logger = logging.getLogger(__name__)


class FeedError(Exception):
    """Feed file exists but cannot be read as a news feed."""
    pass


# First key present wins
FIELD_ALIASES: Dict[str, List[str]] = {
    'text': ['text', 'title', 'headline', 'news'],
    'source_url': ['source_url', 'url', 'link'],
    'published_at': ['published_at', 'timestamp', 'published', 'date'],
    'source': ['source'],
    'priority': ['priority'],
}


class FeedAdapter:
    """Loads NewsItem lists from JSON feed files."""

    def __init__(self, feed_path: Optional[Union[str, Path]] = None):
        self.feed_path = feed_path

    def load(self, path: Optional[Union[str, Path]] = None) -> List[NewsItem]:
        """
        Load feed items from file.

        Args:
            path: Path to feed file (overrides constructor path)

        Returns:
            List of NewsItem objects; empty if the file does not exist
        """
        path = path or self.feed_path
        if not path:
            raise FeedError("No feed path given")

        path = Path(path)
        if not path.exists():
            logger.warning(f"Feed file not found: {path}")
            return []

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise FeedError(f"Invalid JSON in {path}: {e}") from e

        items = self.parse(data)
        logger.info(f"Loaded {len(items)} items from {path}")
        return items

    def parse(self, data: Any) -> List[NewsItem]:
        """Parse already-decoded JSON into NewsItems, skipping bad entries."""
        if isinstance(data, dict):
            entries = None
            for key in ('items', 'events', 'news'):
                if isinstance(data.get(key), list):
                    entries = data[key]
                    break
            if entries is None:
                raise FeedError("Feed object has no items/events/news list")
        elif isinstance(data, list):
            entries = data
        else:
            raise FeedError(f"Unsupported feed layout: {type(data).__name__}")

        items = []
        for entry in entries:
            item = self._parse_entry(entry)
            if item is not None:
                items.append(item)
        return items

    def _parse_entry(self, entry: Any) -> Optional[NewsItem]:
        if isinstance(entry, str):
            if not entry.strip():
                return None
            return NewsItem(text=entry.strip())

        if not isinstance(entry, dict):
            logger.debug(f"Skipping feed entry of type {type(entry).__name__}")
            return None

        fields = {}
        for field, aliases in FIELD_ALIASES.items():
            for alias in aliases:
                if entry.get(alias) not in (None, ''):
                    fields[field] = entry[alias]
                    break

        if not isinstance(fields.get('text'), str) or not fields['text'].strip():
            logger.debug(f"Skipping feed entry without text: {entry}")
            return None

        try:
            return NewsItem(**fields)
        except (ValidationError, ValueError) as e:
            logger.debug(f"Could not parse feed entry: {e}")
            return None
