"""Test utilities for the todofilter test suite.

Helpers for building pandoc-shaped inline runs and pandoc JSON documents.
"""

import re
import shutil
import tempfile
from pathlib import Path
from typing import Any

from todofilter.ast.nodes import Node, SoftBreak, Space, Text

PANDOC_API_VERSION = [1, 23, 1]


def words(text: str) -> list[Node]:
    """Split text into Text/Space/SoftBreak runs the way pandoc's reader does.

    >>> words("a (TODO b)")
    [Text(content='a'), Space(), Text(content='(TODO'), Space(), Text(content='b)')]

    """
    nodes: list[Node] = []
    for token in re.split(r"(\s+)", text):
        if not token:
            continue
        if token.isspace():
            nodes.append(SoftBreak() if "\n" in token else Space())
        else:
            nodes.append(Text(content=token))
    return nodes


def str_words(text: str) -> list[dict[str, Any]]:
    """Same as ``words`` but as pandoc JSON elements."""
    elements: list[dict[str, Any]] = []
    for token in re.split(r"(\s+)", text):
        if not token:
            continue
        if token.isspace():
            elements.append({"t": "SoftBreak"} if "\n" in token else {"t": "Space"})
        else:
            elements.append({"t": "Str", "c": token})
    return elements


def pandoc_document(*blocks: dict[str, Any], meta: dict[str, Any] | None = None) -> dict[str, Any]:
    """Wrap pandoc JSON blocks in a document object."""
    return {"pandoc-api-version": list(PANDOC_API_VERSION), "meta": meta or {}, "blocks": list(blocks)}


def para(text: str) -> dict[str, Any]:
    """Pandoc JSON paragraph from plain text."""
    return {"t": "Para", "c": str_words(text)}


def empty_attr() -> list[Any]:
    return ["", [], []]


def table_json(header: list[list[dict]], rows: list[list[list[dict]]], caption: list[dict] | None = None) -> dict:
    """Pandoc 1.21+ table with one header row, one body and an empty foot.

    ``header`` holds the block list of each header cell; each item of
    ``rows`` holds the block lists of one body row.
    """

    def row(cells: list[list[dict]]) -> list[Any]:
        return [empty_attr(), [[empty_attr(), {"t": "AlignDefault"}, 1, 1, list(blocks)] for blocks in cells]]

    col_specs = [[{"t": "AlignDefault"}, {"t": "ColWidthDefault"}] for _ in header]
    return {
        "t": "Table",
        "c": [
            empty_attr(),
            [None, list(caption or [])],
            col_specs,
            [empty_attr(), [row(header)]],
            [[empty_attr(), 0, [], [row(cells) for cells in rows]]],
            [empty_attr(), []],
        ],
    }


def citation_json(citation_id: str, prefix: str = "", suffix: str = "") -> dict[str, Any]:
    """One pandoc citation object."""
    return {
        "citationId": citation_id,
        "citationPrefix": str_words(prefix),
        "citationSuffix": str_words(suffix),
        "citationMode": {"t": "NormalCitation"},
        "citationNoteNum": 1,
        "citationHash": 0,
    }


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp(prefix="todofilter_test_"))


def cleanup_test_dir(path: Path) -> None:
    """Remove a temporary test directory."""
    shutil.rmtree(path, ignore_errors=True)
