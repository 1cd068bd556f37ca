"""
Chat client — the user-facing interface.

A terminal chat window: user bubbles on the right, assistant bubbles
(rendered as Markdown) on the left. Talks to the backend started with
`python server.py`.

Usage:
  python client.py
"""

import logging

from rich.align import Align
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel

from config import BACKEND_URL
from dispatcher import Backend, ChatDispatcher
from models import Conversation, Message

log = logging.getLogger("client")

BANNER = (
    "Interact with the AI in real-time. Type a message and press Enter.\n\n"
    "Special commands:\n"
    "  /summarize <url>  summarize content from a URL (alias /sum)\n"
    "  /search <query>   search for the latest information on a topic\n"
    "  /clear            start a new conversation\n"
    "  /quit             exit"
)

BUBBLE_WIDTH = 0.75


def render_message(console: Console, message: Message):
    width = max(20, int(console.width * BUBBLE_WIDTH))
    if message.role == "user":
        bubble = Panel(message.content, title="You", title_align="right",
                       border_style="grey50", width=width)
        console.print(Align.right(bubble))
    else:
        bubble = Panel(Markdown(message.content), title="Assistant", title_align="left",
                       border_style="cyan", width=width)
        console.print(Align.left(bubble))


def render_banner(console: Console):
    console.print(Panel(BANNER, title="Chat", border_style="magenta"))


def run(console: Console, dispatcher: ChatDispatcher):
    render_banner(console)
    while True:
        try:
            text = console.input("[bold]> [/]")
        except (EOFError, KeyboardInterrupt):
            console.print()
            return

        command = text.strip().lower()
        if command in ("/quit", "/exit"):
            return
        if command == "/clear":
            dispatcher.conversation = Conversation()
            console.clear()
            render_banner(console)
            continue
        if not text.strip():
            continue

        render_message(console, Message(role="user", content=text.strip()))
        with console.status("Thinking..."):
            reply = dispatcher.send(text)
        if reply:
            render_message(console, reply)


def main():
    logging.basicConfig(
        format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
        # Keep the chat window readable; errors still show up as assistant bubbles
        level=logging.WARNING,
    )
    log.debug(f"Backend: {BACKEND_URL}")
    run(Console(), ChatDispatcher(Backend(BACKEND_URL)))


if __name__ == "__main__":
    main()
