"""
Functions for rendering the contributions document into HTML widgets.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

from lxml.html import tostring
from lxml.html.builder import E

from .consts import (
    BODY_PREVIEW_LENGTH,
    DISPLAYED_CONTRIBUTIONS,
    DISPLAYED_EVENTS,
    DISPLAYED_LANGUAGES,
)
from .loader import LoadError
from .utils import format_date

if TYPE_CHECKING:
    from lxml.html import HtmlElement

    from .consts import Document, Payload
    from .loader import ContributionsLoader, LoadResult

logger = logging.getLogger(__name__)

# characters lxml refuses in text and attribute values
INVALID_XML_CHARS: re.Pattern[str] = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")

DEV_NOTICE_TEXT: str = (
    "Using sample data for demonstration. "
    "Static GitHub data will be displayed when deployed to GitHub Pages."
)


def _text(value: Any) -> str:
    """
    Turn a document value into text lxml accepts, dropping control characters.
    """

    return "" if value is None else INVALID_XML_CHARS.sub("", str(value))


def _cls(name: str) -> dict[str, str]:
    return {"class": name}


def _to_html(el: HtmlElement | None) -> str:
    return "" if el is None else tostring(el, encoding="unicode")


def _div(name: str, *children: HtmlElement | str | None) -> HtmlElement:
    """
    Build a `<div class=name>`, skipping sections that rendered to nothing.
    """

    return E.div(_cls(name), *(child for child in children if child is not None))


def _stat(number: int | None, label: str) -> HtmlElement:
    return _div(
        "stat-item",
        E.span(_cls("stat-number"), str(number or 0)),
        E.span(_cls("stat-label"), label),
    )


def user_stats(user: Payload) -> HtmlElement:
    return _div(
        "github-stats",
        _stat(user.get("public_repos"), "Repositories"),
        _stat(user.get("followers"), "Followers"),
        _stat(user.get("following"), "Following"),
    )


def _repo_card(repo: Payload) -> HtmlElement:
    language: str | None = repo.get("language")

    return _div(
        "repo-card",
        E.h4(E.a(_text(repo.get("name")), href=_text(repo.get("html_url")), target="_blank")),
        E.p(_cls("repo-description"), _text(repo.get("description")) or "No description"),
        _div(
            "repo-stats",
            E.span(_cls("repo-stat"), E.span(_cls("star"), "⭐"), f" {repo.get('stargazers_count') or 0}"),
            E.span(_cls("repo-stat"), E.span(_cls("fork"), "🍴"), f" {repo.get('forks_count') or 0}"),
            E.span(_cls("repo-language"), _text(language)) if language else None,
        ),
    )


def top_repositories(repositories: Payload) -> HtmlElement:
    repos: list[Payload] = repositories.get("top_repositories") or []

    return _div(
        "top-repositories",
        E.h3("Top Repositories"),
        _div("repos-grid", *(_repo_card(repo) for repo in repos)),
    )


def language_stats(repositories: Payload) -> HtmlElement | None:
    """
    Build percentage bars for the most used languages.

    Args:
        repositories: The `repositories` section of the document.

    Return:
        HtmlElement | None: Language bars, or `None` if no language is known.

    """

    languages: dict[str, int] = repositories.get("language_stats") or {}
    top: list[tuple[str, int]] = sorted(
        languages.items(), key=lambda item: item[1], reverse=True
    )[:DISPLAYED_LANGUAGES]

    if not top:
        return None

    total: int = sum(count for _, count in top)

    return _div(
        "language-stats",
        E.h3("Programming Languages"),
        _div(
            "language-bars",
            *(
                _div(
                    "language-bar",
                    _div(
                        "language-info",
                        E.span(_cls("language-name"), _text(language)),
                        E.span(_cls("language-count"), f"{count} repos"),
                    ),
                    _div(
                        "language-progress",
                        E.div(_cls("language-fill"), style=f"width: {count / total * 100:.1f}%"),
                    ),
                )
                for language, count in top
            ),
        ),
    )


def _preview(body: str) -> str:
    if len(body) > BODY_PREVIEW_LENGTH:
        return f"{body[:BODY_PREVIEW_LENGTH]}..."
    return body


def _contribution(contribution: Payload) -> HtmlElement:
    body: str | None = contribution.get("body")
    date: str = format_date(contribution.get("merged_at") or contribution.get("closed_at"))

    return _div(
        "contribution-item",
        _div(
            "contribution-title",
            E.a(
                _text(contribution.get("title")),
                href=_text(contribution.get("html_url")),
                target="_blank",
                rel="noopener",
            ),
        ),
        _div(
            "contribution-meta",
            E.span(_cls("contribution-repo"), _text((contribution.get("repository") or {}).get("name"))),
            E.span(_cls("contribution-date"), date),
        ),
        _div("contribution-body", _preview(_text(body))) if body else None,
    )


def oss_contributions(oss: Payload) -> HtmlElement | None:
    contributions: list[Payload] = oss.get("contributions") or []
    if not contributions:
        return None

    return _div(
        "oss-contributions",
        E.h3(f"Recent OSS Contributions ({oss.get('total_count', 0)} total)"),
        _div(
            "contributions-list",
            *(_contribution(c) for c in contributions[:DISPLAYED_CONTRIBUTIONS]),
        ),
    )


def describe_event(event: Payload) -> str:
    """
    Describe an activity event in a short sentence.

    Args:
        event: Entry from the `recent_activity` section.

    Return:
        str: Human-readable action, e.g. `Pushed to owner/repo`.

    """

    event_type: str = event.get("type") or ""
    repo: str = (event.get("repo") or {}).get("name", "")
    payload: Payload = event.get("payload") or {}

    match event_type:
        case "PushEvent":
            return f"Pushed to {repo}"
        case "CreateEvent":
            return f"Created {payload.get('ref_type') or 'branch'} in {repo}"
        case "IssuesEvent":
            return f"{payload.get('action') or 'updated'} issue in {repo}"
        case "PullRequestEvent":
            return f"{payload.get('action') or 'updated'} pull request in {repo}"
        case "WatchEvent":
            return f"Starred {repo}"
        case _:
            return f"{event_type} in {repo}"


def recent_activity(events: list[Payload]) -> HtmlElement:
    return _div(
        "recent-activity",
        E.h3("Recent Activity"),
        _div(
            "activity-list",
            *(
                _div(
                    "activity-item",
                    E.span(_cls("activity-action"), _text(describe_event(event))),
                    E.span(_cls("activity-date"), format_date(event.get("created_at"))),
                )
                for event in events[:DISPLAYED_EVENTS]
            ),
        ),
    )


def _notice(result: LoadResult, local: bool) -> HtmlElement | None:
    if result.origin == "sample":
        if not local:
            return None
        return _div("dev-notice", E.h3("🚧 Development Mode"), E.p(DEV_NOTICE_TEXT))

    updated: str = format_date(result.data.get("generated_at"))
    return _div(
        "static-data-notice",
        E.p(E.em(f"GitHub contributions data last updated: {updated}")),
    )


def contributions(result: LoadResult, local: bool) -> HtmlElement:
    """
    Build the complete contributions widget.

    Args:
        result: Loaded document and its origin.
        local:  Whether the page is served from a development host.

    Return:
        HtmlElement: Widget root.

    """

    data: Document = result.data
    repositories: Payload = data.get("repositories") or {}
    stats: Payload = data.get("stats") or {}

    summary: str = (
        f"{stats.get('total_stars', 0)} stars earned • "
        f"{stats.get('oss_contributions_count', 0)} OSS contributions • "
        f"{stats.get('languages_used', 0)} languages used"
    )

    return _div(
        "github-contributions",
        _div(
            "contributions-header",
            E.h2("GitHub Contributions"),
            E.p("Showcasing open source contributions and personal projects"),
        ),
        _notice(result, local),
        user_stats(data.get("user") or {}),
        _div(
            "contributions-content",
            _div("left-column", top_repositories(repositories), language_stats(repositories)),
            _div(
                "right-column",
                oss_contributions(data.get("oss_contributions") or {}),
                recent_activity(data.get("recent_activity") or []),
            ),
        ),
        _div("github-summary", E.p(E.strong("Summary:"), f" {summary}")),
    )


def render_user_stats(user: Payload) -> str:
    return _to_html(user_stats(user))


def render_top_repositories(repositories: Payload) -> str:
    return _to_html(top_repositories(repositories))


def render_language_stats(repositories: Payload) -> str:
    return _to_html(language_stats(repositories))


def render_oss_contributions(oss: Payload) -> str:
    return _to_html(oss_contributions(oss))


def render_recent_activity(events: list[Payload]) -> str:
    return _to_html(recent_activity(events))


def render_loading() -> str:
    return _to_html(
        _div(
            "loading",
            _div("loading-spinner"),
            E.p("Loading GitHub contributions..."),
        )
    )


def render_error(error: Exception, local: bool) -> str:
    """
    Render the panel shown in place of the widget when loading or rendering failed.

    Args:
        error: Failure that prevented the widget from rendering.
        local: Whether the page is served from a development host.

    Return:
        str: Development notice on local hosts, error message otherwise.

    """

    if local:
        return _to_html(
            _div(
                "dev-notice",
                E.h3("🚧 Development Mode"),
                E.p("Using sample data for demonstration in development environment."),
                E.p("Static GitHub data will be displayed when deployed to GitHub Pages."),
            )
        )

    return _to_html(
        _div(
            "error",
            E.p(_text(f"Failed to load GitHub data: {error!s}")),
            E.p("Please try again later."),
        )
    )


def render_contributions(result: LoadResult, local: bool) -> str:
    return _to_html(contributions(result, local))


def render_page(loader: ContributionsLoader) -> str:
    """
    Load the document and render the widget, or the error panel on failure.

    Args:
        loader: Loader configured for the page.

    Return:
        str: HTML fragment for the contributions container.

    """

    try:
        result: LoadResult = loader.load()
    except LoadError as e:
        return render_error(e, loader.is_local)

    try:
        return render_contributions(result, loader.is_local)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        logger.error("Error rendering GitHub contributions: %s", e)
        return render_error(e, loader.is_local)
