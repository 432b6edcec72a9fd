"""
Constants and configuration used by the fetcher and the renderer.
"""

from __future__ import annotations

from os import environ
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from dotenv import load_dotenv

load_dotenv()

Payload = dict[str, Any]
Document = dict[str, Any]
LanguageStats = dict[str, int]

ENCODING: str = "utf-8"
USERNAME: str = environ.get("GITHUB_USERNAME", "jblz")
ACCESS_TOKEN: str | None = environ.get("GITHUB_TOKEN") or None

USER_AGENT: str = f"{USERNAME}.github.io-data-fetcher"
GITHUB_URL: str = "https://github.com"

REQUEST_TIMEOUT: int = 10
PER_PAGE: int = 100
EVENTS_LIMIT: int = 30
PULL_REQUESTS_LIMIT: int = 100

TOP_REPOS_COUNT: int = 6
OSS_CONTRIBUTIONS_LIMIT: int = 50
RECENT_ACTIVITY_LIMIT: int = 10

DISPLAYED_LANGUAGES: int = 8
DISPLAYED_CONTRIBUTIONS: int = 5
DISPLAYED_EVENTS: int = 5
BODY_PREVIEW_LENGTH: int = 100

CACHE_TTL: float = 5 * 60
LOCAL_HOSTS: frozenset[str] = frozenset({"localhost", "127.0.0.1"})

FILE_PATH: Path = Path(__file__).resolve()
ROOT_DIR: Path = FILE_PATH.parents[1]

DATA_FILE: Path = Path(
    environ.get("CONTRIBS_DATA_FILE", ROOT_DIR / "_data" / "github-contributions.json")
)
PAGE_FILE: Path = Path(
    environ.get("CONTRIBS_PAGE_FILE", ROOT_DIR / "_site" / "github-contributions.html")
)

SOURCE: str = environ.get("CONTRIBS_SOURCE", "static")
SITE_HOST: str = urlparse(environ.get("SITE_URL", "http://localhost:4000")).hostname or ""
