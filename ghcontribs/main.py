"""
Entry points for fetching GitHub data and rendering the contributions page.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from .client import fetch_all, make_client
from .consts import (
    ACCESS_TOKEN,
    DATA_FILE,
    ENCODING,
    PAGE_FILE,
    SITE_HOST,
    SOURCE,
    USERNAME,
)
from .loader import ContributionsLoader
from .process import process_data
from .render import render_page
from .store import write_document

if TYPE_CHECKING:
    from pathlib import Path

    from .consts import Document

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_fetch(username: str, output_file: Path, token: str | None = None) -> Document:
    """
    Fetch a user's GitHub data, process it and save it as JSON.

    Args:
        username:    User to fetch data for.
        output_file: Destination of the contributions document.
        token:       Optional personal access token.

    Return:
        Document: The document that was written.

    """

    logger.info("Fetching data from GitHub API for %s", username)
    user_info, repositories, events, pull_requests = fetch_all(make_client(token), username)

    logger.info("Data fetched successfully:")
    logger.info("  - User: %s (@%s)", user_info.get("name"), user_info.get("login"))
    logger.info("  - Repositories: %d", len(repositories))
    logger.info("  - Events: %d", len(events))
    logger.info("  - Merged PRs: %d", len(pull_requests))

    document: Document = process_data(user_info, repositories, events, pull_requests, username)

    logger.info("Saving data to: %s", output_file)
    write_document(output_file, document)

    logger.info("Summary:")
    logger.info("  - Original repositories: %d", document["repositories"]["total_count"])
    logger.info("  - OSS contributions: %d", document["oss_contributions"]["total_count"])
    logger.info("  - Total stars earned: %d", document["stats"]["total_stars"])
    logger.info("  - Languages used: %d", document["stats"]["languages_used"])

    return document


def fetch() -> None:
    """
    Execute the offline fetcher, exiting with status 1 on any failure.
    """

    _configure_logging()

    try:
        run_fetch(USERNAME, DATA_FILE, ACCESS_TOKEN)
    except Exception as e:
        logger.error("Error fetching GitHub data: %s", e)
        sys.exit(1)

    logger.info("GitHub data collection completed successfully")


def render() -> None:
    """
    Render the contributions widget into the static page file.
    """

    _configure_logging()

    loader = ContributionsLoader(
        username=USERNAME,
        source=SOURCE,
        data_file=DATA_FILE,
        hostname=SITE_HOST,
    )
    html: str = render_page(loader)

    try:
        PAGE_FILE.parent.mkdir(parents=True, exist_ok=True)
        PAGE_FILE.write_text(html, encoding=ENCODING)
    except OSError as o:
        logger.error("Failed to write %s: %s", PAGE_FILE, o)
        sys.exit(1)

    logger.info("Rendered GitHub contributions to %s", PAGE_FILE)


if __name__ == "__main__":
    fetch()
