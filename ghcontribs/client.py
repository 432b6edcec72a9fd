"""
Functions for fetching a user's public data from the GitHub REST API.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from github import Github
from github.Auth import Token
from github.GithubException import GithubException
from requests.exceptions import RequestException

from .consts import (
    EVENTS_LIMIT,
    PER_PAGE,
    PULL_REQUESTS_LIMIT,
    REQUEST_TIMEOUT,
    USER_AGENT,
    Payload,
)

logger = logging.getLogger(__name__)

RawData = tuple[Payload, list[Payload], list[Payload], list[Payload]]


class FetchError(Exception):
    """
    Descriptive exception for failed GitHub requests.
    """


def make_client(token: str | None = None) -> Github:
    """
    Build a GitHub client, authenticated when a token is available.

    Args:
        token: Personal access token, or `None` for anonymous requests.

    Return:
        Github: Configured client.

    """

    if token is None:
        logger.warning("No GitHub token configured, rate limits will be lower.")

    return Github(
        auth=Token(token) if token else None,
        timeout=REQUEST_TIMEOUT,
        per_page=PER_PAGE,
        user_agent=USER_AGENT,
        retry=None,
    )


def get_json(gh: Github, path: str, params: dict[str, Any] | None = None) -> Any:
    """
    Issue a GET request against the API and return its decoded body.

    Args:
        gh:     Client to send the request with.
        path:   API path, relative to the API root.
        params: Query parameters.

    Return:
        Any: Decoded JSON body.

    Raises:
        FetchError: On HTTP errors, time-outs and connection failures.

    """

    logger.info("Fetching: %s", path)

    try:
        _, data = gh.requester.requestJsonAndCheck("GET", path, parameters=params)
    except GithubException as g:
        logger.error("HTTP error %s for %s: %s", g.status, path, g.data)
        msg = f"HTTP {g.status} for {path}: {g.data}"
        raise FetchError(msg) from g
    except RequestException as r:
        logger.error("Request error for %s: %s", path, r)
        msg = f"Request failed for {path}: {r!s}"
        raise FetchError(msg) from r

    logger.info("Success: %s", path)
    return data


def fetch_user_info(gh: Github, username: str) -> Payload:
    """
    Fetch a user's public profile.
    """

    return get_json(gh, f"/users/{username}")


def fetch_repositories(gh: Github, username: str) -> list[Payload]:
    """
    Fetch the repositories listed on a user's profile, most recently updated first.
    """

    return get_json(
        gh,
        f"/users/{username}/repos",
        {"sort": "updated", "per_page": PER_PAGE, "type": "all"},
    )


def fetch_events(gh: Github, username: str) -> list[Payload]:
    """
    Fetch a user's most recent public events.
    """

    return get_json(gh, f"/users/{username}/events/public", {"per_page": EVENTS_LIMIT})


def fetch_merged_pull_requests(gh: Github, username: str) -> list[Payload]:
    """
    Search for merged pull requests authored by a user.

    Args:
        gh:       Client to send the request with.
        username: Author to search for.

    Return:
        list[Payload]: Search result items, most recently updated first.

    """

    result: Payload = get_json(
        gh,
        "/search/issues",
        {
            "q": f"is:pr is:merged author:{username}",
            "sort": "updated",
            "order": "desc",
            "per_page": PULL_REQUESTS_LIMIT,
        },
    )

    return result.get("items") or []


def fetch_all(gh: Github, username: str) -> RawData:
    """
    Fetch profile, repositories, events and merged pull requests concurrently.

    Args:
        gh:       Client to send the requests with.
        username: User to fetch data for.

    Return:
        RawData: Tuple containing: user profile, repositories,
                                   events, merged pull requests.

    Raises:
        FetchError: If any of the requests fails.

    """

    with ThreadPoolExecutor(max_workers=4) as pool:
        user_f = pool.submit(fetch_user_info, gh, username)
        repos_f = pool.submit(fetch_repositories, gh, username)
        events_f = pool.submit(fetch_events, gh, username)
        pulls_f = pool.submit(fetch_merged_pull_requests, gh, username)

        return user_f.result(), repos_f.result(), events_f.result(), pulls_f.result()
