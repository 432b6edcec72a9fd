"""
Shared fixtures: canned API payloads and a stand-in for the GitHub client.
"""

from __future__ import annotations

from typing import Any

import pytest


class FakeRequester:
    """Answers `requestJsonAndCheck` from a path -> payload mapping."""

    def __init__(self, responses: dict[str, Any]) -> None:
        self.responses = responses
        self.calls: list[tuple[str, dict[str, Any] | None]] = []

    def requestJsonAndCheck(self, verb, url, parameters=None, headers=None, input=None):
        self.calls.append((url, parameters))
        response = self.responses[url]
        if isinstance(response, Exception):
            raise response
        return {}, response


class FakeGithub:
    def __init__(self, responses: dict[str, Any]) -> None:
        self.requester = FakeRequester(responses)


def make_repo(name, stars, forks, language="Python", fork=False):
    return {
        "name": name,
        "full_name": f"jblz/{name}",
        "description": f"{name} description",
        "html_url": f"https://github.com/jblz/{name}",
        "stargazers_count": stars,
        "forks_count": forks,
        "language": language,
        "topics": [],
        "fork": fork,
        "created_at": "2023-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
    }


def make_pr(title, owner, repo, merged_at="2024-03-05T10:00:00Z"):
    return {
        "title": title,
        "html_url": f"https://github.com/{owner}/{repo}/pull/1",
        "state": "closed",
        "created_at": "2024-03-01T10:00:00Z",
        "updated_at": "2024-03-05T10:00:00Z",
        "closed_at": merged_at,
        "repository_url": f"https://api.github.com/repos/{owner}/{repo}",
        "pull_request": {"merged_at": merged_at},
        "body": "Fixes a bug",
        "comments": 2,
    }


def make_event(event_type, repo, payload=None):
    return {
        "type": event_type,
        "repo": {"id": 1, "name": repo, "url": f"https://api.github.com/repos/{repo}"},
        "created_at": "2024-03-05T10:00:00Z",
        "payload": payload or {},
    }


@pytest.fixture
def user_info():
    return {
        "login": "jblz",
        "name": "Jeff Bowen",
        "bio": "Developer",
        "blog": "https://jeff.blog",
        "location": "Earth",
        "email": None,
        "avatar_url": "https://avatars.githubusercontent.com/u/1",
        "html_url": "https://github.com/jblz",
        "public_repos": 5,
        "public_gists": 1,
        "followers": 42,
        "following": 35,
        "created_at": "2010-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
        "site_admin": False,
    }


@pytest.fixture
def repositories():
    return [
        make_repo("small", 1, 0),
        make_repo("forked", 500, 100, fork=True),
        make_repo("big", 40, 10, language="Go"),
        make_repo("tie-a", 5, 5, language=None),
        make_repo("tie-b", 8, 2, language=""),
        make_repo("medium", 20, 0),
    ]


@pytest.fixture
def events():
    return [make_event("PushEvent", f"jblz/repo-{i}") for i in range(15)]


@pytest.fixture
def pull_requests():
    return [
        make_pr("Fix parser", "psf", "requests"),
        make_pr("Own change", "jblz", "small"),
        make_pr("Own change, other case", "JBLZ", "big"),
        make_pr("Add docs", "pallets", "flask"),
    ]


@pytest.fixture
def api_responses(user_info, repositories, events, pull_requests):
    return {
        "/users/jblz": user_info,
        "/users/jblz/repos": repositories,
        "/users/jblz/events/public": events,
        "/search/issues": {"total_count": len(pull_requests), "items": pull_requests},
    }


@pytest.fixture
def fake_gh(api_responses):
    return FakeGithub(api_responses)
