"""
Tests for the JSON feed adapter.
"""
import json
from datetime import timedelta

import pytest

from src.research_signals.feed import FeedAdapter, FeedError


@pytest.fixture
def write_feed(tmp_path):
    def _write(data, name="news.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data, ensure_ascii=False), encoding='utf-8')
        return path
    return _write


class TestFeedAdapter:

    def test_list_of_strings(self, write_feed):
        path = write_feed(["Fed維持利率不變", "  美元指數升破96  ", ""])
        items = FeedAdapter(path).load()

        assert [i.text for i in items] == ["Fed維持利率不變", "美元指數升破96"]

    def test_object_with_items_key(self, write_feed):
        path = write_feed({"items": [{"text": "黃金突破5400美元", "source": "cnyes"}]})
        items = FeedAdapter(path).load()

        assert len(items) == 1
        assert items[0].source == "cnyes"

    def test_events_key(self, write_feed):
        path = write_feed({"events": ["原油回落至65美元"]})
        assert len(FeedAdapter().load(path)) == 1

    def test_field_aliases(self, write_feed):
        path = write_feed([{
            "title": "Fed raises rates by 25bp - Reuters",
            "url": "https://www.reuters.com/markets/fed",
            "timestamp": "2026-01-29T08:00:00Z",
            "priority": 5,
        }])
        item = FeedAdapter(path).load()[0]

        assert item.text == "Fed raises rates by 25bp - Reuters"
        assert item.source_url == "https://www.reuters.com/markets/fed"
        assert item.priority == 5
        assert item.published_at.utcoffset() == timedelta(0)

    def test_naive_timestamp_is_utc(self, write_feed):
        path = write_feed([{"text": "Fed降息", "published_at": "2026-01-29T08:00:00"}])
        item = FeedAdapter(path).load()[0]

        assert item.published_at.tzinfo is not None
        assert item.published_at.utcoffset() == timedelta(0)

    def test_bad_entries_skipped(self, write_feed):
        path = write_feed([
            {"url": "https://example.com/no-text"},
            {"text": "Fed降息", "priority": "high"},
            {"text": "Fed升息", "published_at": "not a date"},
            42,
            "美元指數升破96",
        ])
        items = FeedAdapter(path).load()
        assert [i.text for i in items] == ["美元指數升破96"]

    def test_missing_file_is_empty(self, tmp_path):
        assert FeedAdapter(tmp_path / "missing.json").load() == []

    def test_no_path(self):
        with pytest.raises(FeedError):
            FeedAdapter().load()

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding='utf-8')

        with pytest.raises(FeedError):
            FeedAdapter(path).load()

    @pytest.mark.parametrize("data", [{"headlines": []}, "just a string", 3])
    def test_unsupported_layout(self, data):
        with pytest.raises(FeedError):
            FeedAdapter().parse(data)
