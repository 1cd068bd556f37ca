"""
Configuration — loads from .env, provides defaults.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# Model (OPENAI_API_KEY is read by the openai SDK itself)
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4")
SYSTEM_PROMPT = os.getenv("SYSTEM_PROMPT", "You are a helpful assistant.")

# Server
SERVER_HOST = os.getenv("SERVER_HOST", "127.0.0.1")
SERVER_PORT = int(os.getenv("SERVER_PORT", "8000"))

# Client
BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:8000")
CLIENT_TIMEOUT = int(os.getenv("CLIENT_TIMEOUT", "120"))  # seconds

# Page fetching
FETCH_TIMEOUT = int(os.getenv("FETCH_TIMEOUT", "10"))  # seconds
FETCH_MAX_REDIRECTS = int(os.getenv("FETCH_MAX_REDIRECTS", "5"))
SUMMARY_MAX_CHARS = int(os.getenv("SUMMARY_MAX_CHARS", "15000"))

# Sites summarized from the URL alone, without fetching
URL_ONLY_MARKERS = [
    m.strip()
    for m in os.getenv("URL_ONLY_MARKERS", "vnexpress.net,.vn/").split(",")
    if m.strip()
]

# News search
NEWS_API_KEY = os.getenv("NEWS_API_KEY", "")
NEWS_API_URL = os.getenv("NEWS_API_URL", "https://newsapi.org/v2/everything")
SEARCH_PAGE_SIZE = int(os.getenv("SEARCH_PAGE_SIZE", "5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
