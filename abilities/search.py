"""
News search ability — latest articles from NewsAPI plus a short model analysis.

Needs NEWS_API_KEY (free key from newsapi.org).
"""

from __future__ import annotations

import logging
from typing import Callable

import requests

from config import NEWS_API_KEY, NEWS_API_URL, SEARCH_PAGE_SIZE, OPENAI_MODEL
from models import SearchHit, SearchResult
from abilities.llm import Complete, chat_completion

log = logging.getLogger(__name__)


class SearchError(Exception):
    pass


def fetch_news(query: str, api_key: str = NEWS_API_KEY, url: str = NEWS_API_URL,
               page_size: int = SEARCH_PAGE_SIZE) -> list[SearchHit]:
    if not api_key:
        raise SearchError("NEWS_API_KEY is not configured")

    resp = requests.get(
        url,
        params={
            "q": query,
            "sortBy": "publishedAt",
            "pageSize": page_size,
            "language": "en",
        },
        headers={"X-Api-Key": api_key},
        timeout=10,
    )
    data = resp.json()
    if resp.status_code != 200 or data.get("status") != "ok":
        raise SearchError(data.get("message") or f"News API responded with status {resp.status_code}")

    hits = []
    for article in data.get("articles", []):
        source = article.get("source") or {}
        hits.append(SearchHit(
            title=article.get("title") or "",
            url=article.get("url") or "",
            source=source.get("name") or "",
            published_at=article.get("publishedAt") or "",
            description=article.get("description") or "",
        ))
    return hits


def search_latest_events(
    query: str,
    complete: Complete = chat_completion,
    fetch: Callable[[str], list[SearchHit]] = fetch_news,
    model: str = OPENAI_MODEL,
) -> SearchResult:
    """Search recent news for `query` and have the model sum up the findings."""
    hits = fetch(query)
    log.info(f"Search '{query}': {len(hits)} result(s)")
    if not hits:
        return SearchResult(content=f'No recent articles found for "{query}".')

    listing = "\n\n".join(
        f"{i}. {h.title} ({h.source}, {h.published_at})\n{h.description}"
        for i, h in enumerate(hits, 1)
    )
    analysis = complete([
        {
            "role": "system",
            "content": "You are a helpful assistant that analyzes recent news. "
                       "Summarize what the articles say, note any disagreements, and keep it brief.",
        },
        {"role": "user", "content": f'Latest articles for "{query}":\n\n{listing}'},
    ], model)
    return SearchResult(content=analysis, search_results=hits)
