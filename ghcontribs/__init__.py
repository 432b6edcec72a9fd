"""
Fetch a user's GitHub contributions and render them as HTML widgets.
"""

from __future__ import annotations

from .cache import ResourceCache
from .client import FetchError, fetch_all, make_client
from .loader import ContributionsLoader, LoadError, LoadResult, is_local_host
from .process import process_data
from .render import render_contributions, render_page
from .sample import get_sample_data
from .store import StoreError, read_document, write_document

__all__: list[str] = [
    "ContributionsLoader",
    "FetchError",
    "LoadError",
    "LoadResult",
    "ResourceCache",
    "StoreError",
    "fetch_all",
    "get_sample_data",
    "is_local_host",
    "make_client",
    "process_data",
    "read_document",
    "render_contributions",
    "render_page",
    "write_document",
]
