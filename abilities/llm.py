"""
Chat-completion ability — a thin wrapper over the OpenAI SDK.

Everything else in the app takes a `complete(messages, model)` callable,
so tests and alternative backends can stand in for this module.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from openai import OpenAI

from config import OPENAI_MODEL, SYSTEM_PROMPT
from models import Message

log = logging.getLogger(__name__)

Complete = Callable[[list[dict], str], str]

_client: Optional[OpenAI] = None


def get_client() -> OpenAI:
    """Build the client on first use (reads OPENAI_API_KEY)."""
    global _client
    if _client is None:
        _client = OpenAI()
    return _client


def chat_completion(messages: list[dict], model: str = OPENAI_MODEL) -> str:
    """Run one chat completion and return the assistant's text."""
    response = get_client().chat.completions.create(model=model, messages=messages)
    usage = response.usage
    if usage is not None:
        log.info(f"{model} p={usage.prompt_tokens} c={usage.completion_tokens}")
    return response.choices[0].message.content or ""


def chat_helper(
    message: Message,
    complete: Complete = chat_completion,
    model: str = OPENAI_MODEL,
    system_prompt: str = SYSTEM_PROMPT,
    history: Optional[list[dict]] = None,
) -> Message:
    """Answer one user message, optionally with prior turns as context."""
    messages = [
        {"role": "system", "content": system_prompt},
        *(history or []),
        message.to_dict(),
    ]
    return Message(role="assistant", content=complete(messages, model))
