"""
Fixed fallback dataset, used whenever live retrieval fails.
"""
from datetime import datetime
from typing import List, Optional

from goodnews.core.article import Article
from goodnews.core.countries import resolve
from goodnews.core.normalizer import isoformat, utc_now
from goodnews.core.sentiment import Scorer

FALLBACK_ITEMS = (
    {
        "title": "Scientists Develop Breakthrough Treatment for Rare Disease",
        "description": "Researchers at a leading university have successfully developed a new treatment that shows remarkable results in treating a rare genetic condition, offering hope to thousands of patients worldwide.",
        "url": "https://example.com/news1",
        "source": "Health Today",
        "urlToImage": "https://images.unsplash.com/photo-1559757148-5c350d0d3c56?w=800&h=400&fit=crop",
        "countryCode": "us",
    },
    {
        "title": "Local Community Raises Record Amount for Children's Hospital",
        "description": "A grassroots fundraising campaign has exceeded all expectations, raising over $2 million for the new children's wing at the local hospital, demonstrating incredible community spirit.",
        "url": "https://example.com/news2",
        "source": "Community News",
        "urlToImage": "https://images.unsplash.com/photo-1582213782179-e0d53f98f2ca?w=800&h=400&fit=crop",
        "countryCode": "ca",
    },
    {
        "title": "Renewable Energy Project Powers Entire City",
        "description": "A innovative solar and wind energy initiative has successfully provided 100% renewable power to a major metropolitan area, marking a significant milestone in sustainable energy.",
        "url": "https://example.com/news3",
        "source": "Green Energy Report",
        "urlToImage": "https://images.unsplash.com/photo-1466611653911-95081537e5b7?w=800&h=400&fit=crop",
        "countryCode": "de",
    },
    {
        "title": "International Cooperation Leads to Environmental Protection Success",
        "description": "Multiple countries have joined forces in an unprecedented conservation effort that has resulted in the protection of critical wildlife habitats and the recovery of endangered species.",
        "url": "https://example.com/news4",
        "source": "Environment Watch",
        "urlToImage": "https://images.unsplash.com/photo-1441974231531-c6227db76b6e?w=800&h=400&fit=crop",
        "countryCode": "se",
    },
    {
        "title": "Students Create App to Help Elderly Stay Connected",
        "description": "A group of high school students has developed a user-friendly mobile application that helps elderly residents stay connected with family and access community services more easily.",
        "url": "https://example.com/news5",
        "source": "Tech Innovation",
        "urlToImage": "https://images.unsplash.com/photo-1531482615713-2afd69097998?w=800&h=400&fit=crop",
        "countryCode": "bg",
    },
    {
        "title": "Bulgarian Researchers Achieve Breakthrough in Green Tech",
        "description": "Scientists in Sofia unveil an innovative method to recycle plastics efficiently, boosting Bulgaria's circular economy and cutting emissions.",
        "url": "https://example.com/news-bg-green-tech",
        "source": "Sofia Science Daily",
        "urlToImage": "https://images.unsplash.com/photo-1509395176047-4a66953fd231?w=800&h=400&fit=crop",
        "countryCode": "bg",
    },
)

FALLBACK_TITLES = tuple(item["title"] for item in FALLBACK_ITEMS)


def fallback_articles(scorer: Scorer, now: Optional[datetime] = None) -> List[Article]:
    """
    Build the fallback dataset, scored with the active scorer.

    The entries are curated to qualify, so no recency or positivity
    filtering is applied.
    """
    published_at = isoformat(now or utc_now())
    articles = []
    for item in FALLBACK_ITEMS:
        text = f"{item['title']} {item['description']}"
        articles.append(Article(
            title=item["title"],
            description=item["description"],
            url=item["url"],
            source=item["source"],
            published_at=published_at,
            country=resolve(item["countryCode"]),
            url_to_image=item["urlToImage"],
            **scorer.annotate(text),
        ))
    return articles
