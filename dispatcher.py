"""
Dispatcher — classifies user input and routes it to the backend.

Every chat turn is one sequential request. Input is checked against the
slash commands in order; the first match wins:
  1. /summarize <url> (alias /sum)  → POST /summarize
  2. /search <query>                → POST /search
  3. anything else                  → POST /sendText

Failures never escape send(); they come back as assistant messages.
"""

from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from typing import Optional, Union

import requests

from config import BACKEND_URL, CLIENT_TIMEOUT
from models import Conversation, Message, SearchHit

log = logging.getLogger(__name__)

SUMMARIZE_RE = re.compile(r"^/sum(marize)?\s+(https?://.+)$", re.IGNORECASE | re.DOTALL)
SEARCH_RE = re.compile(r"^/search\s+(.+)$", re.IGNORECASE | re.DOTALL)


# ── Commands ────────────────────────────────────────────────────

@dataclass(frozen=True)
class ChatCommand:
    text: str


@dataclass(frozen=True)
class SummarizeCommand:
    url: str


@dataclass(frozen=True)
class SearchCommand:
    query: str


Command = Union[ChatCommand, SummarizeCommand, SearchCommand]


def classify(text: str) -> Command:
    text = text.strip()

    m = SUMMARIZE_RE.match(text)
    if m:
        return SummarizeCommand(url=m.group(2).strip())

    m = SEARCH_RE.match(text)
    if m:
        return SearchCommand(query=m.group(1).strip())

    return ChatCommand(text=text)


# ── Backend client ──────────────────────────────────────────────

class BackendError(Exception):
    """The backend answered with a non-2xx status."""

    def __init__(self, status: int, payload: dict):
        self.status = status
        self.payload = payload
        detail = payload.get("message") or payload.get("error") or "unknown error"
        super().__init__(f"Backend responded with status {status}: {detail}")


class Backend:
    def __init__(self, base_url: str = BACKEND_URL, timeout: int = CLIENT_TIMEOUT,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _post(self, path: str, body: dict) -> dict:
        resp = self.session.post(f"{self.base_url}{path}", json=body, timeout=self.timeout)
        try:
            data = resp.json()
        except ValueError:
            raise BackendError(resp.status_code, {"error": resp.text[:200] or "empty response body"})
        if not resp.ok:
            raise BackendError(resp.status_code, data if isinstance(data, dict) else {})
        if not isinstance(data, dict):
            raise BackendError(resp.status_code, {"error": "expected a JSON object"})
        return data

    def send_text(self, text: str, history: Optional[list[dict]] = None) -> dict:
        return self._post("/sendText", {"userInput": text, "history": history or []})

    def summarize(self, url: str) -> dict:
        return self._post("/summarize", {"url": url})

    def search(self, query: str) -> dict:
        return self._post("/search", {"query": query})


# ── Dispatcher ──────────────────────────────────────────────────

class ChatDispatcher:
    def __init__(self, backend: Optional[Backend] = None,
                 conversation: Optional[Conversation] = None):
        self.backend = backend or Backend()
        self.conversation = conversation if conversation is not None else Conversation()

    def send(self, text: str) -> Optional[Message]:
        """Handle one user turn. Returns the assistant reply, or None for empty input."""
        trimmed = text.strip()
        if not trimmed:
            return None

        history = self.conversation.as_history()
        self.conversation.append(Message(role="user", content=trimmed))

        command = classify(trimmed)
        log.debug(f"Routing {type(command).__name__}")
        if isinstance(command, SummarizeCommand):
            reply = self._summarize(command.url)
        elif isinstance(command, SearchCommand):
            reply = self._search(command.query)
        else:
            reply = self._chat(command.text, history)

        return self.conversation.append(reply)

    def _chat(self, text: str, history: list[dict]) -> Message:
        try:
            data = self.backend.send_text(text, history)
        except (requests.RequestException, BackendError) as e:
            log.error(f"Error sending message: {e}")
            return Message(role="assistant", content="An error occurred while sending your message.")
        return Message.from_dict(data)

    def _summarize(self, url: str) -> Message:
        try:
            data = self.backend.summarize(url)
        except (requests.RequestException, BackendError) as e:
            log.error(f"Error summarizing URL: {e}")
            return Message(
                role="assistant",
                content=f"Failed to summarize the URL: {url}. "
                        "Please check if the URL is valid and try again.",
            )
        return Message(role="assistant", content=f"**Summary of [{url}]({url})**\n\n{data.get('content') or ''}")

    def _search(self, query: str) -> Message:
        try:
            data = self.backend.search(query)
        except (requests.RequestException, BackendError) as e:
            log.error(f"Error searching: {e}")
            return Message(role="assistant", content=f'Failed to search for "{query}". Please try again later.')

        content = data.get("content") or ""
        results = data.get("searchResults")
        if not results:
            return Message(role="assistant", content=content)

        hits = [SearchHit.from_dict(r) for r in results]
        listing = "\n\n---\n\n".join(
            f"### [{h.title}]({h.url})\n"
            f"**Source:** {h.source} | **Published:** {h.published_at}\n\n{h.description}"
            for h in hits
        )
        return Message(
            role="assistant",
            content=f'**Search Results for "{query}"**\n\n{listing}\n\n**Analysis:**\n{content}',
        )
