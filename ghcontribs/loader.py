"""
Page-time loading of the contributions document.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .cache import ResourceCache
from .client import (
    fetch_events,
    fetch_merged_pull_requests,
    fetch_repositories,
    fetch_user_info,
    make_client,
)
from .consts import ACCESS_TOKEN, LOCAL_HOSTS
from .process import process_data
from .sample import get_sample_data
from .store import read_document

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from github import Github

    from .consts import Document

logger = logging.getLogger(__name__)

SOURCES: tuple[str, ...] = ("static", "live")


class LoadError(Exception):
    """
    Descriptive exception for documents that could not be loaded.
    """


@dataclass(frozen=True)
class LoadResult:
    """
    A loaded document and where it came from: `static`, `live` or `sample`.
    """

    data: Document
    origin: str


def is_local_host(hostname: str) -> bool:
    return hostname in LOCAL_HOSTS


class ContributionsLoader:
    """
    Loads the contributions document for a page, either from the JSON file
    written by the fetcher or straight from the API.

    Resources are cached for a few minutes by name (`document` for the file,
    `user`, `repos`, `events` and `pulls` for the API). When loading fails on
    a local host, sample data is returned instead of raising.
    """

    def __init__(
        self,
        username: str,
        source: str,
        data_file: Path,
        hostname: str,
        cache: ResourceCache | None = None,
        gh: Github | None = None,
    ) -> None:
        if source not in SOURCES:
            msg = f"Unknown data source {source!r}, expected one of {SOURCES}"
            raise ValueError(msg)

        self.username: str = username
        self.source: str = source
        self.data_file: Path = data_file
        self.hostname: str = hostname
        self.cache: ResourceCache = cache if cache is not None else ResourceCache()
        self._gh: Github | None = gh

    @property
    def is_local(self) -> bool:
        return is_local_host(self.hostname)

    @property
    def gh(self) -> Github:
        if self._gh is None:
            self._gh = make_client(ACCESS_TOKEN)
        return self._gh

    def load(self) -> LoadResult:
        """
        Load the document from the configured source.

        Return:
            LoadResult: Document and its origin.

        Raises:
            LoadError: If loading fails outside a local host.

        """

        try:
            if self.source == "live":
                data: Document = self._load_live()
            else:
                data = self._load_static()
        except Exception as e:
            logger.error("Error loading GitHub data: %s", e)

            if self.is_local:
                logger.info("Falling back to sample data on %s", self.hostname)
                return LoadResult(get_sample_data(), "sample")

            raise LoadError(str(e)) from e

        logger.info("GitHub contributions data loaded successfully")
        return LoadResult(data, self.source)

    def _load_static(self) -> Document:
        return self.cache.get_or_load("document", lambda: read_document(self.data_file))

    def _load_live(self) -> Document:
        fetchers: dict[str, Callable] = {
            "user": fetch_user_info,
            "repos": fetch_repositories,
            "events": fetch_events,
            "pulls": fetch_merged_pull_requests,
        }

        resources: dict[str, Any] = {name: self.cache.get(name) for name in fetchers}
        missing: list[str] = [name for name, value in resources.items() if value is None]

        if missing:
            gh: Github = self.gh
            with ThreadPoolExecutor(max_workers=len(missing)) as pool:
                futures = {
                    name: pool.submit(fetchers[name], gh, self.username) for name in missing
                }
                for name, future in futures.items():
                    resources[name] = future.result()
                    self.cache.set(name, resources[name])

        return process_data(
            resources["user"],
            resources["repos"],
            resources["events"],
            resources["pulls"],
            self.username,
        )
