"""
Functions for persisting the contributions document.
"""

from __future__ import annotations

from json import JSONDecodeError, dump, load
from typing import TYPE_CHECKING

from .consts import ENCODING

if TYPE_CHECKING:
    from pathlib import Path

    from .consts import Document


class StoreError(Exception):
    """
    Descriptive exception for document reading and writing errors.
    """


def read_document(path: Path) -> Document:
    """
    Read a previously fetched contributions document.

    Args:
        path: JSON file written by `write_document`.

    Return:
        Document: Stored document.

    Raises:
        StoreError: If the file is missing, unreadable, not valid JSON,
                    or not a JSON object.

    """

    try:
        with path.open(encoding=ENCODING, mode="r") as f:
            data: Document = load(f)
    except (OSError, JSONDecodeError) as e:
        msg = f"Failed to load GitHub data from {path}: {e!s}"
        raise StoreError(msg) from e

    if not isinstance(data, dict):
        msg = f"Malformed GitHub data in {path}: expected an object, got {type(data).__name__}"
        raise StoreError(msg)

    return data


def write_document(path: Path, document: Document) -> None:
    """
    Write a contributions document, creating its directory if needed.

    Args:
        path:     Destination JSON file.
        document: Document to be written.

    """

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open(encoding=ENCODING, mode="w") as f:
            dump(document, f, indent=2, ensure_ascii=False)
    except OSError as o:
        msg = f"Failed to write GitHub data: {o!s}"
        raise StoreError(msg) from o
