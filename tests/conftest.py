"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add repo root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.research_signals.classifier import MacroClassifier
from src.research_signals.regions import GlobalWeighter
from src.research_signals.schema import NewsItem


@pytest.fixture
def headline_example():
    """One headline per category, lowest priority last."""
    return [
        "Fed維持利率不變",
        "美元指數升破96",
        "台股大跌1.2%",
        "黃金突破5400美元",
        "比特幣跌破58000",
    ]


@pytest.fixture
def morning_news():
    """A realistic morning batch of headlines."""
    return [
        'Fed維持利率3.5%-3.75%不變，鮑爾重申數據依賴立場',
        '美元指數升破96，台幣貶至31.35',
        '台股加權指數收32536點，大跌1.2%，成交量縮至2800億',
        '美股S&P 500跌0.8%，Nasdaq重挫1.5%，科技股領跌',
        '黃金續創新高，突破5400美元，避險需求升溫',
        '原油回落至65美元，需求疑慮再起',
        '比特幣跌破58000美元，加密市場轉弱',
        '台積電ADR跌0.8%，市場關注2奈米進度',
        '微軟暴跌10%，雲端業務不如預期',
        'Meta大漲10.4%，AI營收超預期',
        '金管會：台股不再是淺碟市場，外資持續加碼',
        '中國經濟數據疲弱，製造業PMI連續6個月低於榮枯線',
        '川普關稅威脅再起，全球貿易緊張升溫',
        'VIX恐慌指數升至16.88，市場謹慎',
        '美國10年期公債殖利率升至3.85%，債市承壓',
    ]


@pytest.fixture
def weigh():
    """Classify + weight headlines the way the pipeline does."""
    classifier = MacroClassifier()
    weighter = GlobalWeighter()

    def _weigh(texts):
        scored = [classifier.score(NewsItem(text=t)) for t in texts]
        return weighter.weight_all(scored)

    return _weigh
