"""
Chat backend — Flask JSON API used by the chat client.

Provides:
  - POST /sendText   plain chat completion
  - POST /summarize  summary of a web page
  - POST /search     latest news plus a short analysis
  - GET  /health     liveness check

Usage:
  python server.py
"""

import logging

from flask import Flask, request, jsonify

from config import SERVER_HOST, SERVER_PORT, LOG_LEVEL
from models import Message
from abilities.llm import chat_completion, chat_helper
from abilities.summarizer import Summarizer
from abilities.search import search_latest_events

log = logging.getLogger("server")


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _text_field(data: dict, name: str) -> str:
    value = data.get(name)
    return value.strip() if isinstance(value, str) else ""


def create_app(complete=None, summarizer=None, search=None):
    complete = complete or chat_completion
    summarizer = summarizer or Summarizer(complete=complete)
    search = search or (lambda query: search_latest_events(query, complete=complete))

    app = Flask(__name__)

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"})

    @app.route("/sendText", methods=["POST"])
    def send_text():
        data = _json_body()
        text = _text_field(data, "userInput")
        if not text:
            return jsonify({"error": "userInput is required"}), 400
        turns = data.get("history")
        history = [
            {"role": m["role"], "content": m["content"]}
            for m in (turns if isinstance(turns, list) else [])
            if isinstance(m, dict) and m.get("role") in ("user", "assistant")
            and isinstance(m.get("content"), str)
        ]
        try:
            result = chat_helper(Message(role="user", content=text), complete=complete, history=history)
        except Exception:
            log.exception("Error processing request")
            return jsonify({"error": "Error processing request"}), 500
        return jsonify(result.to_dict())

    @app.route("/summarize", methods=["POST"])
    def summarize():
        url = _text_field(_json_body(), "url")
        if not url:
            return jsonify({"error": "URL is required"}), 400
        try:
            result = summarizer.summarize(url)
        except Exception as e:
            log.exception(f"Error summarizing {url}")
            return jsonify({
                "error": "Error summarizing URL",
                "message": f"Failed to summarize the provided URL: {e}",
            }), 500
        return jsonify(result.to_dict())

    @app.route("/search", methods=["POST"])
    def search_events():
        query = _text_field(_json_body(), "query")
        if not query:
            return jsonify({"error": "Search query is required"}), 400
        try:
            result = search(query)
        except Exception as e:
            log.exception(f"Error searching for '{query}'")
            return jsonify({"error": "Error searching for events", "message": str(e)}), 500
        return jsonify(result.to_dict())

    return app


def main():
    logging.basicConfig(
        format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    )
    # Suppress Flask request logs in the main console
    logging.getLogger("werkzeug").setLevel(logging.WARNING)

    app = create_app()
    log.info(f"Chat backend: http://{SERVER_HOST}:{SERVER_PORT}")
    app.run(host=SERVER_HOST, port=SERVER_PORT, use_reloader=False)


if __name__ == "__main__":
    main()
