"""
General utilities used by the fetcher and the renderer.
"""

from __future__ import annotations

from datetime import UTC, datetime

from dateutil.parser import isoparse


def from_iso_z(s: str) -> datetime:
    """
    Parse a GitHub API timestamp such as `created_at` or `merged_at`.

    Args:
        s: Timestamp taken from an API payload or the stored document.

    Return:
        datetime: The same instant, in UTC.

    """

    return isoparse(s).astimezone(UTC)


def to_iso_z(dt: datetime | None = None) -> str:
    """
    Stamp a document the way GitHub stamps its payloads, e.g. `generated_at`.

    Args:
        dt: Instant to stamp. Defaults to the moment of the call.

    Return:
        str: UTC timestamp ending in `Z`, like `2024-03-05T10:00:00Z`.

    """

    if dt is None:
        dt = datetime.now(tz=UTC)

    return dt.astimezone(UTC).isoformat().replace("+00:00", "Z")


def format_date(s: str | None) -> str:
    """
    Format an ISO8601 timestamp as a short human-readable date.

    Args:
        s: Timestamp as found in the contributions document.

    Return:
        str: Date like `Mar 4, 2025`, or an empty string if `s` is empty
             or unparseable.

    """

    if not s:
        return ""

    try:
        dt: datetime = from_iso_z(s)
    except ValueError:
        return ""

    return f"{dt:%b} {dt.day}, {dt.year}"


def repo_slug(url: str) -> str:
    """
    Extract the `owner/name` part of a repository URL.

    Args:
        url: API or web URL ending in `/owner/name`.

    Return:
        str: The last two path segments joined by a slash.

    """

    return "/".join(url.rstrip("/").split("/")[-2:])
