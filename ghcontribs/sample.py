"""
Sample contributions data shown while developing locally.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from dateutil.relativedelta import relativedelta

from .utils import to_iso_z

if TYPE_CHECKING:
    from .consts import Document, Payload

_SAMPLE_REPOS: list[tuple[str, str, int, int, str]] = [
    ("awesome-project", "An amazing open source project that does cool things", 128, 23, "JavaScript"),
    ("react-components", "Reusable React components library", 89, 15, "TypeScript"),
    ("python-utilities", "Collection of useful Python utility functions", 64, 12, "Python"),
    ("css-framework", "Lightweight CSS framework for modern web apps", 45, 8, "CSS"),
    ("node-api", "RESTful API built with Node.js and Express", 37, 6, "JavaScript"),
    ("go-microservice", "Microservice architecture example in Go", 28, 4, "Go"),
]


def get_sample_data(now: datetime | None = None) -> Document:
    """
    Build a fallback document mirroring the structure of the fetched one.

    Args:
        now: Reference time for the sample events. Defaults to now (UTC).

    Return:
        Document: Sample contributions document.

    """

    if now is None:
        now = datetime.now(tz=UTC)

    repos: list[Payload] = [
        {
            "name": name,
            "description": description,
            "html_url": f"https://github.com/jblz/{name}",
            "stargazers_count": stars,
            "forks_count": forks,
            "language": language,
        }
        for name, description, stars, forks, language in _SAMPLE_REPOS
    ]

    return {
        "generated_at": to_iso_z(now),
        "user": {
            "login": "jblz",
            "name": "Jeff Bowen",
            "public_repos": 25,
            "followers": 42,
            "following": 35,
            "bio": "Software Developer & Open Source Contributor",
            "location": "Earth",
            "blog": "https://jeff.blog",
        },
        "repositories": {
            "total_count": len(repos),
            "top_repositories": repos,
            "language_stats": {
                "JavaScript": 2,
                "TypeScript": 1,
                "Python": 1,
                "CSS": 1,
                "Go": 1,
            },
        },
        "oss_contributions": {"total_count": 10, "contributions": []},
        "recent_activity": [
            {
                "type": "PushEvent",
                "repo": {"name": "jblz/awesome-project"},
                "created_at": to_iso_z(now - relativedelta(days=2)),
            },
            {
                "type": "CreateEvent",
                "repo": {"name": "jblz/new-feature"},
                "payload": {"ref_type": "branch"},
                "created_at": to_iso_z(now - relativedelta(days=3)),
            },
            {
                "type": "IssuesEvent",
                "repo": {"name": "jblz/react-components"},
                "payload": {"action": "closed"},
                "created_at": to_iso_z(now - relativedelta(days=5)),
            },
        ],
        "stats": {
            "total_stars": 391,
            "total_forks": 68,
            "languages_used": 6,
            "oss_contributions_count": 10,
        },
    }
