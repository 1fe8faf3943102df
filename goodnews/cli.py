"""
Command-line interface for Good News.
"""
import sys
import json
import argparse
import logging
import asyncio
from dataclasses import replace

from goodnews.config import Config, Settings, config
from goodnews.core.countries import resolve
from goodnews.formatters.markdown import MarkdownFormatter
from goodnews.geo import detect_country
from goodnews.service import NewsService, ResultKind

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(description="Good News - find positive news for a country")
    parser.add_argument("--country", help="Two-letter country code (detected from your IP if omitted)")
    parser.add_argument("--days", type=int, default=7, help="How many days back to look (default: 7)")
    parser.add_argument("--format", choices=["text", "markdown", "json"], default="text", help="Output format")
    parser.add_argument("--config", help="Path to a YAML or JSON config file")
    parser.add_argument("--proxy", action="store_true", help="Always go through the backend proxy")
    parser.add_argument("--scorer", choices=["keyword", "lexicon"], help="Sentiment scorer to use")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_settings(args) -> Settings:
    settings = Settings.from_config(Config(args.config) if args.config else config)
    if args.proxy:
        settings = replace(settings, always_use_proxy=True)
    if args.scorer:
        settings = replace(settings, scorer=args.scorer)
    return settings


def render(result, fmt: str) -> str:
    articles = list(result.articles)
    if fmt == "json":
        return json.dumps({
            "country": result.request.country,
            "days": result.request.days,
            "outcome": result.kind.value,
            "articles": [article.to_dict() for article in articles],
        }, indent=2, ensure_ascii=False)

    formatter = MarkdownFormatter()
    if fmt == "markdown":
        return formatter.format_digest(articles, resolve(result.request.country), result.request.days)
    return formatter.format_text(articles)


async def async_main(argv=None) -> int:
    """
    Main entry point for the application.
    """
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    settings = build_settings(args)
    country = args.country or await detect_country()

    service = NewsService(settings)
    try:
        result = await service.fetch(country, args.days)
    finally:
        await service.close()

    if result.kind == ResultKind.FALLBACK:
        logger.warning("Live news unavailable, showing curated stories instead")

    if result.articles:
        print(f"Found {len(result.articles)} positive news articles.", file=sys.stderr)
    else:
        print("No positive news found. Try adjusting your filters or selecting a different time period.",
              file=sys.stderr)

    output = render(result, args.format)
    if output:
        print(output)
    return 0


def main(argv=None):
    """
    Entry point for the command-line script.
    """
    try:
        return asyncio.run(async_main(argv))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"An error occurred: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
