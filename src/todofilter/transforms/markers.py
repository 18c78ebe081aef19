#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/todofilter/transforms/markers.py
"""Inline TODO marker detection and splitting.

An inline annotation starts at the text ``(TODO`` and ends at the matching
closing parenthesis. Pandoc splits prose into ``Str``/``Space`` runs, so an
annotation normally spans several sibling inlines:

    [Text("See"), Space(), Text("(TODO"), Space(), Text("fix"), Space(), Text("(edge)"),
     Space(), Text("case)."), ...]

``find_marker`` walks such a sequence with an explicit index and returns the
pieces: untouched text before the marker (``prefix``), the annotation itself
(``content``) and untouched text after it (``suffix``). Only ``Text`` nodes
take part in parenthesis counting; any other node inside an annotation is
carried over whole.

Examples
--------
    >>> match = find_marker([Text("a (TODO b (c) d) e")])
    >>> match.prefix, match.content, match.suffix
    (Text(content='a '), [Text(content='(TODO b (c) d)')], Text(content=' e'))

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from todofilter.ast.nodes import Node, Text
from todofilter.constants import DEFAULT_INLINE_MARKER

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkerMatch:
    """One inline annotation found in a sequence.

    Parameters
    ----------
    start_index : int
        Index of the ``Text`` node in which the marker starts
    prefix : Text or None
        Text before the marker in that node, None when empty
    content : list of Node
        The annotation from the opening ``(`` through its closing ``)``
    suffix : Text or None
        Text after the closing ``)`` in the terminating node, None when
        empty or when the marker is unterminated
    resume_index : int
        Index of the first node after the annotation that was not consumed
    terminated : bool
        False when the sequence ended before the parentheses balanced

    """

    start_index: int
    prefix: Text | None
    content: list[Node]
    suffix: Text | None
    resume_index: int
    terminated: bool = True


def split_text(node: Text, offset: int) -> tuple[Text, Text]:
    """Split a text node at a character offset into two new nodes."""
    offset = min(offset, len(node.content))
    return Text(content=node.content[:offset]), Text(content=node.content[offset:])


def _scan_annotation(inlines: list[Node], start_index: int, head: Text) -> tuple[list[Node], Text | None, int, bool]:
    """Consume nodes until the parenthesis opened by ``head`` is balanced.

    ``head`` stands in for ``inlines[start_index]`` and begins with the
    marker's ``(``.

    Returns
    -------
    tuple
        ``(content, suffix, resume_index, terminated)``

    """
    content: list[Node] = []
    depth = 0
    for index in range(start_index, len(inlines)):
        node = head if index == start_index else inlines[index]
        if isinstance(node, Text):
            for offset, char in enumerate(node.content):
                if char == "(":
                    depth += 1
                elif char == ")":
                    if depth <= 1:
                        matched, rest = split_text(node, offset + 1)
                        content.append(matched)
                        return content, rest if rest.content else None, index + 1, True
                    depth -= 1
        content.append(node)
    return content, None, len(inlines), False


def find_marker(inlines: list[Node], marker: str = DEFAULT_INLINE_MARKER) -> MarkerMatch | None:
    """Find the first inline annotation in a sequence.

    The marker is located by plain substring search in ``Text`` nodes, so
    ``"word(TODO"`` matches too.

    Parameters
    ----------
    inlines : list of Node
        Inline sequence to scan; not modified
    marker : str, default = "(TODO"
        Opening text of an annotation, starting with ``(``

    Returns
    -------
    MarkerMatch or None
        The first annotation, or None if no ``Text`` node contains the marker

    """
    for index, node in enumerate(inlines):
        if not isinstance(node, Text):
            continue
        position = node.content.find(marker)
        if position < 0:
            continue

        before, head = split_text(node, position)
        content, suffix, resume_index, terminated = _scan_annotation(inlines, index, head)
        return MarkerMatch(
            start_index=index,
            prefix=before if before.content else None,
            content=content,
            suffix=suffix,
            resume_index=resume_index,
            terminated=terminated,
        )
    return None


def detect_and_split(
    inlines: list[Node],
    render: Callable[[list[Node]], Node],
    marker: str = DEFAULT_INLINE_MARKER,
    on_match: Callable[[MarkerMatch], None] | None = None,
) -> list[Node]:
    """Replace every inline annotation in a sequence with a rendered node.

    Each annotation becomes ``[prefix?, render(content), suffix?]``; all
    other nodes are kept in their original order. Scanning continues after
    each annotation, starting with its suffix, so several annotations in one
    sequence are all replaced. Rendered nodes are never scanned again.

    An annotation whose parentheses never balance takes the rest of the
    sequence as its content and has no suffix.

    Parameters
    ----------
    inlines : list of Node
        Inline sequence; not modified
    render : callable
        Builds the replacement node from an annotation's content
    marker : str, default = "(TODO"
        Opening text of an annotation
    on_match : callable, optional
        Called with each ``MarkerMatch`` before it is rendered

    Returns
    -------
    list of Node
        New sequence; equal to ``inlines`` when there is no annotation

    """
    result: list[Node] = []
    remaining = list(inlines)
    while True:
        match = find_marker(remaining, marker)
        if match is None:
            result.extend(remaining)
            return result

        if on_match is not None:
            on_match(match)
        if not match.terminated:
            logger.warning("Unterminated %s marker; annotation runs to the end of its inline sequence", marker)

        result.extend(remaining[: match.start_index])
        if match.prefix is not None:
            result.append(match.prefix)
        result.append(render(match.content))

        remaining = remaining[match.resume_index :]
        if match.suffix is not None:
            remaining.insert(0, match.suffix)
