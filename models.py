"""
Data models for chat messages, summaries and search results.

Nothing here is persisted; a Conversation lives as long as the client does.
"""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Iterator, Optional


@dataclass
class Message:
    role: str = "user"  # user or assistant
    content: str = ""

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> Message:
        return cls(role=data.get("role", "assistant"), content=data.get("content") or "")


@dataclass
class SummaryResult:
    content: str = ""
    source_url: str = ""
    role: str = "assistant"

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content, "sourceUrl": self.source_url}


@dataclass
class SearchHit:
    title: str = ""
    url: str = ""
    source: str = ""
    published_at: str = ""
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "url": self.url,
            "source": self.source,
            "publishedAt": self.published_at,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> SearchHit:
        return cls(
            title=data.get("title") or "",
            url=data.get("url") or "",
            source=data.get("source") or "",
            published_at=data.get("publishedAt") or "",
            description=data.get("description") or "",
        )


@dataclass
class SearchResult:
    content: str = ""
    search_results: Optional[list[SearchHit]] = None
    role: str = "assistant"

    def to_dict(self) -> dict:
        d = {"role": self.role, "content": self.content}
        if self.search_results is not None:
            d["searchResults"] = [h.to_dict() for h in self.search_results]
        return d


@dataclass
class Conversation:
    """Append-only, in-memory message log for one chat session."""

    messages: list[Message] = field(default_factory=list)

    def append(self, message: Message) -> Message:
        self.messages.append(message)
        return message

    def as_history(self) -> list[dict]:
        return [m.to_dict() for m in self.messages]

    def __iter__(self) -> Iterator[Message]:
        return iter(self.messages)

    def __len__(self) -> int:
        return len(self.messages)
