"""
Markdown and plain-text rendering of article lists.
"""
from datetime import datetime
from typing import List

from goodnews.core.article import Article
from goodnews.core.filters import parse_timestamp


def _format_date(published_at: str) -> str:
    parsed = parse_timestamp(published_at)
    return parsed.strftime('%B %d, %Y') if parsed else published_at


class MarkdownFormatter:
    """
    Formats articles for terminal or Markdown output.
    """
    def format_article_metadata(self, article: Article) -> str:
        parts = []
        if article.source:
            parts.append(f"**Source:** {article.source}")
        if article.country:
            parts.append(f"**Country:** {article.country}")
        parts.append(f"**Published:** {_format_date(article.published_at)}")
        if article.sentiment_label is not None:
            parts.append(f"**Sentiment:** {article.sentiment_label.value}")
        elif article.sentiment_score is not None:
            parts.append(f"**Score:** {article.sentiment_score:g}")
        return " | ".join(parts)

    def format_article(self, article: Article) -> str:
        title = article.title or "(untitled)"
        heading = f"### [{title}]({article.url})" if article.url else f"### {title}"
        lines = [heading, "", self.format_article_metadata(article)]
        if article.url_to_image:
            lines.extend(["", f"![{title}]({article.url_to_image})"])
        if article.description:
            lines.extend(["", article.description])
        return "\n".join(lines) + "\n"

    def format_digest(self, articles: List[Article], country: str, days: int) -> str:
        """
        Render a full Markdown digest.
        """
        header = [
            f"# Good News: {country}",
            "",
            f"*Last {days} day{'s' if days != 1 else ''}, generated {datetime.now().strftime('%Y-%m-%d %H:%M')}*",
            "",
        ]
        body = [self.format_article(article) for article in articles]
        return "\n".join(header) + "\n".join(body)

    def format_text(self, articles: List[Article]) -> str:
        """
        Compact plain-text listing, one block per article.
        """
        blocks = []
        for i, article in enumerate(articles, 1):
            meta = ", ".join(p for p in (article.source, _format_date(article.published_at)) if p)
            block = f"{i}. {article.title or '(untitled)'}"
            if meta:
                block += f"\n   {meta}"
            if article.url:
                block += f"\n   {article.url}"
            blocks.append(block)
        return "\n\n".join(blocks)
