"""
Tests for macro classification, theme collapse and region weighting.
"""
import pytest

from src.research_signals.classifier import MacroClassifier, collapse_themes
from src.research_signals.config import SignalConfig
from src.research_signals.regions import GlobalWeighter
from src.research_signals.schema import (
    MacroCategory,
    MACRO_HIERARCHY,
    NewsItem,
    RegionTag,
    REGION_WEIGHTS,
    ScoredItem,
)


def classify(text):
    return MacroClassifier().classify(NewsItem(text=text))


class TestHierarchy:

    def test_strictly_descending(self):
        """Declaration order of MacroCategory is the priority order."""
        scores = [MACRO_HIERARCHY[c] for c in MacroCategory]
        assert scores == sorted(scores, reverse=True)
        assert len(set(scores)) == len(scores)
        assert scores[0] == 100
        assert scores[-1] == 40

    def test_region_weights_ordered(self):
        weights = [REGION_WEIGHTS[r] for r in RegionTag]
        assert weights == [1.0, 0.8, 0.5, 0.3]


class TestMacroClassifier:

    def test_headline_example(self, headline_example):
        """Each example headline lands in its expected category."""
        categories = [classify(t)[0] for t in headline_example]
        assert categories == [
            MacroCategory.RATES,
            MacroCategory.USD,
            MacroCategory.EQUITIES,
            MacroCategory.SAFE_HAVEN,
            MacroCategory.CRYPTO,
        ]

    @pytest.mark.parametrize("text", [
        "Fed降息帶動台股大漲",
        "S&P 500 rallies as Fed signals rate cut",
        "美股回升，聯準會暗示升息告一段落",
    ])
    def test_higher_priority_wins(self, text):
        """Rates beats Equities when both match."""
        category, score = classify(text)
        assert category == MacroCategory.RATES
        assert score == 100

    def test_unmatched_is_other(self):
        assert classify("中國經濟數據疲弱，製造業PMI連續6個月低於榮枯線") == (MacroCategory.OTHER, 40)
        assert classify("") == (MacroCategory.OTHER, 40)

    def test_case_insensitive(self):
        assert classify("fed minutes show split")[0] == MacroCategory.RATES
        assert classify("BITCOIN hits new high")[0] == MacroCategory.CRYPTO

    def test_latin_keywords_need_word_boundaries(self):
        """'ETH' must not match inside 'method', 'gold' not inside 'Goldman'."""
        assert classify("A new method for ranking")[0] == MacroCategory.OTHER
        assert classify("Goldman hires new partners")[0] == MacroCategory.OTHER

    def test_dollar_price_is_not_usd(self):
        """A price quoted in 美元 says nothing about the dollar itself."""
        assert classify("原油回落至65美元，需求疑慮再起")[0] == MacroCategory.ENERGY

    def test_score_builds_scored_item(self):
        scored = MacroClassifier().score(NewsItem(text="美元指數升破96"))
        assert scored.category == MacroCategory.USD
        assert scored.base_score == 90
        assert scored.region == RegionTag.THEMATIC

    def test_unweighted_item_has_positive_final_score(self):
        """final_score falls back to base_score * weight."""
        scored = MacroClassifier().score(NewsItem(text="美元指數升破96"))
        assert scored.final_score == pytest.approx(27.0)
        assert 0 < scored.final_score <= scored.base_score

        explicit = ScoredItem(item=NewsItem(text="x"), base_score=100, weight=1.0, final_score=55.0)
        assert explicit.final_score == 55.0


class TestCollapseThemes:

    def test_keeps_longest_per_category(self):
        classifier = MacroClassifier()
        scored = classifier.score_all([
            NewsItem(text="Fed降息"),
            NewsItem(text="原油回落"),
            NewsItem(text="Fed維持利率3.5%-3.75%不變，鮑爾重申數據依賴立場"),
        ])
        collapsed = collapse_themes(scored)

        assert [s.category for s in collapsed] == [MacroCategory.RATES, MacroCategory.ENERGY]
        assert collapsed[0].text.startswith("Fed維持利率")

    def test_equal_length_keeps_first(self):
        classifier = MacroClassifier()
        scored = classifier.score_all([NewsItem(text="Fed降息"), NewsItem(text="Fed升息")])
        assert [s.text for s in collapse_themes(scored)] == ["Fed降息"]

    def test_empty(self):
        assert collapse_themes([]) == []


class TestGlobalWeighter:

    @pytest.mark.parametrize("text,region", [
        ("Fed raises rates by 25bp", RegionTag.US),
        ("黃金突破5400美元", RegionTag.US),
        ("ECB holds rates, euro steady", RegionTag.G10),
        ("日銀維持負利率", RegionTag.G10),
        ("台股大跌1.2%", RegionTag.EM),
        ("AI adoption accelerates", RegionTag.THEMATIC),
        ("Something else entirely", RegionTag.THEMATIC),
        ("Tell us more", RegionTag.THEMATIC),
    ])
    def test_detect_region(self, text, region):
        assert GlobalWeighter().detect_region(text) == region

    def test_final_score(self):
        scored = MacroClassifier().score(NewsItem(text="台股大跌1.2%"))
        weighted = GlobalWeighter().weight(scored)

        assert weighted.region == RegionTag.EM
        assert weighted.weight == 0.5
        assert weighted.final_score == 30.0
        # Original is untouched: unweighted THEMATIC default
        assert scored.region == RegionTag.THEMATIC
        assert scored.final_score == pytest.approx(18.0)

    def test_final_score_bounded_by_base(self, morning_news, weigh):
        """0 < final_score <= base_score for every item."""
        for signal in weigh(morning_news):
            assert 0 < signal.final_score <= signal.base_score

    def test_sorted_descending(self, morning_news, weigh):
        scores = [s.final_score for s in weigh(morning_news)]
        assert scores == sorted(scores, reverse=True)

    def test_stable_on_ties(self):
        """Equal final scores keep input order."""
        signals = [
            ScoredItem(item=NewsItem(text="alpha note")),
            ScoredItem(item=NewsItem(text="beta note")),
            ScoredItem(item=NewsItem(text="Fed speech"), category=MacroCategory.RATES, base_score=100),
            ScoredItem(item=NewsItem(text="gamma note")),
        ]
        ranked = GlobalWeighter().weight_all(signals)
        assert [s.text for s in ranked] == ["Fed speech", "alpha note", "beta note", "gamma note"]

    def test_custom_region_weights(self):
        config = SignalConfig(region_weights={'EM': 0.7})
        scored = MacroClassifier().score(NewsItem(text="台股大跌1.2%"))
        assert GlobalWeighter(config).weight(scored).final_score == pytest.approx(42.0)
