"""
Functions for shaping raw API payloads into the contributions document.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .consts import (
    GITHUB_URL,
    OSS_CONTRIBUTIONS_LIMIT,
    RECENT_ACTIVITY_LIMIT,
    TOP_REPOS_COUNT,
)
from .utils import repo_slug, to_iso_z

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .consts import Document, LanguageStats, Payload


def shape_repository(repo: Payload) -> Payload:
    """
    Keep the repository fields the renderer needs and score its activity.

    Args:
        repo: Repository as returned by the repos endpoint.

    Return:
        Payload: Trimmed repository with an `activity_score` (stars + forks).

    """

    stars: int = repo.get("stargazers_count") or 0
    forks: int = repo.get("forks_count") or 0

    return {
        "name": repo.get("name"),
        "full_name": repo.get("full_name"),
        "description": repo.get("description"),
        "html_url": repo.get("html_url"),
        "stargazers_count": stars,
        "forks_count": forks,
        "language": repo.get("language"),
        "topics": repo.get("topics") or [],
        "created_at": repo.get("created_at"),
        "updated_at": repo.get("updated_at"),
        "activity_score": stars + forks,
    }


def original_repositories(repositories: Iterable[Payload]) -> list[Payload]:
    """
    Drop forks and order the rest by activity score, highest first.

    Ties keep the order in which the API listed them.
    """

    shaped = [shape_repository(repo) for repo in repositories if not repo.get("fork")]
    return sorted(shaped, key=lambda repo: repo["activity_score"], reverse=True)


def language_stats(repos: Iterable[Payload]) -> LanguageStats:
    """
    Count repositories per primary language.

    Args:
        repos: Non-fork repositories.

    Return:
        LanguageStats: Mapping of language to repository count,
                       in order of first appearance.

    """

    stats: LanguageStats = {}

    for repo in repos:
        language: str | None = repo.get("language")
        if language:
            stats[language] = stats.get(language, 0) + 1

    return stats


def is_own_repository(repository_url: str, username: str) -> bool:
    """
    Check whether a repository URL belongs to the given user.

    Logins are case-insensitive on GitHub, so the owner is compared as such.
    """

    owner: str = repo_slug(repository_url).split("/")[0]
    return owner.lower() == username.lower()


def shape_contribution(pr: Payload) -> Payload:
    """
    Turn a pull request search result into an OSS contribution.

    Args:
        pr: Item from the issue search endpoint.

    Return:
        Payload: Contribution with its target repository's name and web URL.

    """

    repository_url: str = pr.get("repository_url", "")

    return {
        "title": pr.get("title"),
        "html_url": pr.get("html_url"),
        "state": pr.get("state"),
        "created_at": pr.get("created_at"),
        "updated_at": pr.get("updated_at"),
        "closed_at": pr.get("closed_at"),
        "merged_at": (pr.get("pull_request") or {}).get("merged_at"),
        "repository": {
            "name": repo_slug(repository_url),
            "url": repository_url.replace("api.github.com/repos", "github.com"),
        },
        "body": pr.get("body"),
        "comments": pr.get("comments"),
    }


def shape_event(event: Payload) -> Payload:
    repo_name: str = (event.get("repo") or {}).get("name", "")

    return {
        "type": event.get("type"),
        "repo": {"name": repo_name, "url": f"{GITHUB_URL}/{repo_name}"},
        "created_at": event.get("created_at"),
        "payload": event.get("payload"),
    }


def shape_user(user_info: Payload) -> Payload:
    return {
        key: user_info.get(key)
        for key in (
            "login",
            "name",
            "bio",
            "blog",
            "location",
            "email",
            "avatar_url",
            "html_url",
            "public_repos",
            "public_gists",
            "followers",
            "following",
            "created_at",
            "updated_at",
        )
    }


def process_data(
    user_info: Payload,
    repositories: list[Payload],
    events: list[Payload],
    pull_requests: list[Payload],
    username: str,
) -> Document:
    """
    Merge the four API results into one contributions document.

    Args:
        user_info:     User profile.
        repositories:  Repositories listed on the profile, forks included.
        events:        Public events, newest first.
        pull_requests: Merged pull requests authored by the user.
        username:      Tracked user, used to tell own repositories apart.

    Return:
        Document: Normalized document consumed by the renderer.

    """

    repos: list[Payload] = original_repositories(repositories)
    languages: LanguageStats = language_stats(repos)

    contributions: list[Payload] = [
        shape_contribution(pr)
        for pr in pull_requests
        if not is_own_repository(pr.get("repository_url", ""), username)
    ][:OSS_CONTRIBUTIONS_LIMIT]

    return {
        "generated_at": to_iso_z(),
        "user": shape_user(user_info),
        "repositories": {
            "total_count": len(repos),
            "top_repositories": repos[:TOP_REPOS_COUNT],
            "all_repositories": repos,
            "language_stats": languages,
        },
        "oss_contributions": {
            "total_count": len(contributions),
            "contributions": contributions,
        },
        "recent_activity": [shape_event(e) for e in events[:RECENT_ACTIVITY_LIMIT]],
        "stats": {
            "total_stars": sum(repo["stargazers_count"] for repo in repos),
            "total_forks": sum(repo["forks_count"] for repo in repos),
            "languages_used": len(languages),
            "oss_contributions_count": len(contributions),
        },
    }
