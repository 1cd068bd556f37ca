"""
Web Scraper ability — fetch a URL and extract readable article text.

Uses requests + BeautifulSoup. The extraction is a heuristic: known
content containers first, then long paragraphs, then the whole page.
"""

import logging
import re

import requests
from bs4 import BeautifulSoup

from config import FETCH_TIMEOUT, FETCH_MAX_REDIRECTS

log = logging.getLogger(__name__)

HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/91.0.4472.124 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Referer": "https://www.google.com/",
}

NOISE_SELECTOR = "script, style, nav, footer, header, .ads, .banner, .comments"

# Checked in order; the first one with any text wins.
CONTENT_SELECTORS = [
    "article",
    "main",
    ".content",
    ".post",
    ".article-content",
    ".article-body",
    ".article",
    ".detail-content",   # common on Vietnamese news sites
    ".news-detail",
    ".detail__content",  # VnExpress
]

MIN_PARAGRAPH_CHARS = 30

_WHITESPACE = re.compile(r"\s+")


# ── Errors ──────────────────────────────────────────────────────

class ExtractionError(Exception):
    """Content could not be extracted. `kind` says why."""

    kind = "setup"

    def __init__(self, detail: str):
        super().__init__(f"Failed to extract content: {detail}")


class HTTPStatusError(ExtractionError):
    kind = "http_status"

    def __init__(self, status: int):
        self.status = status
        super().__init__(f"Server responded with status {status}")


class NoResponseError(ExtractionError):
    kind = "no_response"

    def __init__(self):
        super().__init__("No response received from the server")


class SetupError(ExtractionError):
    kind = "setup"


# ── Fetch + extract ─────────────────────────────────────────────

def fetch_html(url: str, timeout: int = FETCH_TIMEOUT,
               max_redirects: int = FETCH_MAX_REDIRECTS) -> bytes:
    """GET a page with browser-like headers, mapping failures to ExtractionError."""
    session = requests.Session()
    session.max_redirects = max_redirects
    try:
        resp = session.get(url, headers=HEADERS, timeout=timeout)
        resp.raise_for_status()
    except requests.HTTPError as e:
        raise HTTPStatusError(e.response.status_code) from e
    except (requests.ConnectionError, requests.Timeout,
            requests.TooManyRedirects, requests.exceptions.ChunkedEncodingError) as e:
        raise NoResponseError() from e
    except requests.RequestException as e:
        raise SetupError(str(e)) from e
    finally:
        session.close()
    return resp.content


def extract_from_html(html) -> str:
    """Pull readable text out of an HTML document."""
    soup = BeautifulSoup(html, "html.parser")

    for tag in soup.select(NOISE_SELECTOR):
        if not tag.decomposed:  # may sit inside an already removed tag
            tag.decompose()

    chunks = []
    for selector in CONTENT_SELECTORS:
        chunks = [t for t in (el.get_text(" ", strip=True) for el in soup.select(selector)) if t]
        if chunks:
            break

    if not chunks:
        chunks = [
            t for t in (p.get_text(" ", strip=True) for p in soup.find_all("p"))
            if len(t) > MIN_PARAGRAPH_CHARS
        ]

    text = "\n\n".join(chunks)
    if not text.strip():
        root = soup.body or soup
        text = root.get_text(" ", strip=True)

    return _WHITESPACE.sub(" ", text).strip()


def extract_text(url: str) -> str:
    """Fetch a URL and return its cleaned article text."""
    try:
        html = fetch_html(url)
    except ExtractionError as e:
        log.warning(f"Extraction failed for {url} ({e.kind}): {e}")
        raise
    try:
        return extract_from_html(html)
    except Exception as e:
        log.warning(f"Could not parse {url}: {e}")
        raise SetupError(f"Could not parse page: {e}") from e
