"""
CLI Entry Point for Research Signal selection.

Usage:
    python -m src.research_signals --input data/runtime/news.json
    python -m src.research_signals --input news.json --output signals.json
    python -m src.research_signals --input news.json --config configs/default.yaml
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stderr),
    ]
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Select research signals from a news feed",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m src.research_signals --input news.json
    Print primary signals and the regime sentence

  python -m src.research_signals --input news.json --output signals.json
    Also write the full SignalSet as JSON

  python -m src.research_signals --input news.json --language en
    Regime sentence in English
        """
    )

    parser.add_argument(
        '--input', '-i',
        type=str,
        required=True,
        help='Path to JSON feed file'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        default=None,
        help='Write SignalSet JSON to this path'
    )

    parser.add_argument(
        '--config', '-c',
        type=str,
        default=None,
        help='YAML config file (default: built-in defaults)'
    )

    parser.add_argument(
        '--language', '-l',
        choices=['zh', 'en'],
        default=None,
        help='Regime sentence language (overrides config)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    return parser


def format_report(signal_set) -> str:
    """Plain-text summary of a SignalSet."""
    lines = [
        "📈 Market Regime",
        f"• {signal_set.regime_sentence} ({signal_set.regime_confidence.value})",
        "",
        "🔴 Primary Signals",
    ]
    primary = signal_set.primary_signals()
    if primary:
        lines.extend(f"{idx}. {signal}" for idx, signal in enumerate(primary, 1))
    else:
        lines.append("• N/A")

    context = signal_set.secondary_context()
    if context:
        lines.append("")
        lines.append("🔵 Secondary Context")
        lines.extend(f"• {line}" for line in context)

    stats = signal_set.stats
    lines.extend([
        "",
        "📊 Statistics",
        f"• Input: {stats.input} | Deduped: {stats.deduped} | Collapsed: {stats.collapsed}",
        f"• Primary: {stats.primary} | Secondary: {stats.secondary}"
        + ("" if stats.secondary_floor_met else f" (below floor of {stats.secondary_floor})"),
    ])
    return "\n".join(lines)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    # Import here to keep --help fast
    from .config import ConfigError, load_config
    from .feed import FeedAdapter, FeedError
    from .pipeline import ResearchSignalPipeline

    try:
        config = load_config(args.config)
        if args.language:
            config.language = args.language
            config.validate()
        items = FeedAdapter(args.input).load()
    except (ConfigError, FeedError, OSError) as e:
        logger.error(f"Could not start run: {e}")
        return 1

    signal_set = ResearchSignalPipeline(config=config).run(items)
    print(format_report(signal_set))

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(signal_set.to_dict(), f, ensure_ascii=False, indent=2)
        logger.info(f"SignalSet saved to {output_path}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
