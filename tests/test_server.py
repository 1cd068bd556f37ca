import pytest

from abilities.scraper import HTTPStatusError
from abilities.summarizer import FALLBACK_NOTE, Summarizer
from models import SearchHit, SearchResult
from server import create_app


def fake_complete(messages, model):
    return f"reply to: {messages[-1]['content']}"


@pytest.fixture
def client():
    def search(query):
        return SearchResult(
            content="analysis",
            search_results=[SearchHit(title="T", url="https://u", source="S",
                                      published_at="P", description="D")],
        )

    summarizer = Summarizer(complete=fake_complete, extract=lambda url: "page text", url_only_markers=[])
    app = create_app(complete=fake_complete, summarizer=summarizer, search=search)
    app.config["TESTING"] = True
    return app.test_client()


def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok"}


def test_send_text(client):
    resp = client.post("/sendText", json={"userInput": "hello"})
    assert resp.status_code == 200
    assert resp.get_json() == {"role": "assistant", "content": "reply to: hello"}


def test_send_text_passes_history():
    seen = []

    def complete(messages, model):
        seen.append(messages)
        return "ok"

    client = create_app(complete=complete).test_client()
    client.post("/sendText", json={
        "userInput": "again",
        "history": [{"role": "user", "content": "hi"}, {"role": "system", "content": "ignored"}],
    })

    roles = [m["role"] for m in seen[0]]
    assert roles == ["system", "user", "user"]
    assert seen[0][1]["content"] == "hi"


def test_send_text_requires_input(client):
    resp = client.post("/sendText", json={})
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_summarize(client):
    resp = client.post("/summarize", json={"url": "https://example.com"})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["role"] == "assistant"
    assert data["sourceUrl"] == "https://example.com"
    assert data["content"].endswith("page text")


def test_summarize_requires_url(client):
    resp = client.post("/summarize", json={})
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "URL is required"}


def test_summarize_fallback_on_404():
    def extract(url):
        raise HTTPStatusError(404)

    summarizer = Summarizer(complete=fake_complete, extract=extract, url_only_markers=[])
    client = create_app(complete=fake_complete, summarizer=summarizer).test_client()

    resp = client.post("/summarize", json={"url": "https://example.com/gone"})

    assert resp.status_code == 200
    assert resp.get_json()["content"].endswith(FALLBACK_NOTE)


def test_summarize_model_failure_is_500():
    def broken(messages, model):
        raise RuntimeError("model down")

    summarizer = Summarizer(complete=broken, extract=lambda url: "text", url_only_markers=[])
    client = create_app(complete=broken, summarizer=summarizer).test_client()

    resp = client.post("/summarize", json={"url": "https://example.com"})

    assert resp.status_code == 500
    data = resp.get_json()
    assert data["error"] == "Error summarizing URL"
    assert "model down" in data["message"]


def test_search(client):
    resp = client.post("/search", json={"query": "news"})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["content"] == "analysis"
    assert data["searchResults"][0]["publishedAt"] == "P"


def test_search_requires_query(client):
    resp = client.post("/search", json={"query": ""})
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Search query is required"}


def test_search_failure_is_500():
    def search(query):
        raise RuntimeError("NEWS_API_KEY is not configured")

    client = create_app(complete=fake_complete, search=search).test_client()
    resp = client.post("/search", json={"query": "x"})

    assert resp.status_code == 500
    assert resp.get_json() == {
        "error": "Error searching for events",
        "message": "NEWS_API_KEY is not configured",
    }


@pytest.mark.parametrize("path, body", [
    ("/summarize", {"url": 123}),
    ("/summarize", ["https://example.com"]),
    ("/search", ["q"]),
    ("/search", {"query": {"text": "q"}}),
    ("/sendText", {"userInput": None}),
    ("/sendText", "hello"),
])
def test_malformed_bodies_get_json_400(client, path, body):
    resp = client.post(path, json=body)
    assert resp.status_code == 400
    assert resp.is_json
    assert "error" in resp.get_json()


def test_malformed_history_is_ignored(client):
    resp = client.post("/sendText", json={"userInput": "hi", "history": "not a list"})
    assert resp.status_code == 200
    assert resp.get_json()["content"] == "reply to: hi"
