"""
Summarizer ability — turn a URL into a short summary.

Three paths, all returning a SummaryResult:
  1. URL-only sites (see URL_ONLY_MARKERS): no fetch, the model guesses
     from the URL and the reply is labeled as such.
  2. Normal sites: extract text, truncate, summarize.
  3. Extraction failed: same URL-only guess, labeled differently.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from config import OPENAI_MODEL, SUMMARY_MAX_CHARS, URL_ONLY_MARKERS
from models import SummaryResult
from abilities.llm import Complete, chat_completion
from abilities.scraper import ExtractionError, extract_text

log = logging.getLogger(__name__)

URL_ONLY_NOTE = (
    "\n\n*(Note: This summary is based on the URL pattern and typical content "
    "structure of this news source. For the full article details, please visit "
    "the link directly.)*"
)
FALLBACK_NOTE = (
    "\n\n*(Note: This is a general summary as I couldn't access the specific "
    "content directly. For the full article, please visit the URL.)*"
)


def truncate(text: str, max_chars: int) -> str:
    if len(text) > max_chars:
        return text[:max_chars] + "..."
    return text


class Summarizer:
    def __init__(
        self,
        complete: Complete = chat_completion,
        extract: Callable[[str], str] = extract_text,
        model: str = OPENAI_MODEL,
        max_chars: int = SUMMARY_MAX_CHARS,
        url_only_markers: Optional[list[str]] = None,
    ):
        self.complete = complete
        self.extract = extract
        self.model = model
        self.max_chars = max_chars
        self.url_only_markers = URL_ONLY_MARKERS if url_only_markers is None else url_only_markers

    def is_url_only(self, url: str) -> bool:
        return any(marker in url for marker in self.url_only_markers)

    def summarize(self, url: str) -> SummaryResult:
        if self.is_url_only(url):
            log.info(f"Summarizing from URL only: {url}")
            return SummaryResult(content=self._guess_news_site(url) + URL_ONLY_NOTE, source_url=url)

        try:
            text = self.extract(url)
        except ExtractionError as e:
            log.info(f"Direct extraction failed ({e.kind}), using general summary: {e}")
            return SummaryResult(content=self._guess_page(url) + FALLBACK_NOTE, source_url=url)

        return SummaryResult(content=self._summarize_text(url, truncate(text, self.max_chars)),
                             source_url=url)

    # ── Prompts ─────────────────────────────────────────────────

    def _summarize_text(self, url: str, text: str) -> str:
        return self.complete([
            {
                "role": "system",
                "content": "You are a helpful assistant that summarizes web content concisely "
                           "and accurately. Focus on the main points and key information.",
            },
            {"role": "user", "content": f"Please summarize the following content from {url}:\n\n{text}"},
        ], self.model)

    def _guess_news_site(self, url: str) -> str:
        return self.complete([
            {
                "role": "system",
                "content": "You are a helpful assistant that can analyze and summarize news "
                           "articles based on their URLs. You specialize in Vietnamese language content.",
            },
            {
                "role": "user",
                "content": f"I'd like a summary of this news article: {url}. The article is from "
                           "VnExpress or another Vietnamese news site. Please provide a comprehensive "
                           "summary based on the URL, discussing what this article likely contains.",
            },
        ], self.model)

    def _guess_page(self, url: str) -> str:
        return self.complete([
            {"role": "system", "content": "You are a helpful assistant that can analyze web content based on URLs."},
            {
                "role": "user",
                "content": f"I need information about this URL: {url}. Please provide a summary of what "
                           "you think this page might contain based on the URL structure and your knowledge.",
            },
        ], self.model)
