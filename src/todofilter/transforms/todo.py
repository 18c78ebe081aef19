#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/todofilter/transforms/todo.py
"""TODO annotation filter.

Rewrites a document so that TODO notes left in the prose stand out in the
rendered output:

- inline annotations, ``... (TODO check this (twice)) ...``, are wrapped by
  :func:`todofilter.transforms.render.render_inline`;
- paragraphs and plain blocks whose first word starts with ``TODO`` are
  wrapped whole by :func:`todofilter.transforms.render.render_block`.

Both rules apply independently: a TODO block containing inline annotations
gets the block wrapper and the inline wrappers.

Examples
--------
    >>> from todofilter.formats import select_format
    >>> transform = TodoFilterTransform(select_format("html"))
    >>> new_doc = transform.transform(doc)
    >>> transform.stats.inline_markers
    2

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import cast

from todofilter.ast.nodes import Document, Node, Paragraph, Plain, Text
from todofilter.ast.transforms import NodeTransformer
from todofilter.ast.utils import extract_text
from todofilter.constants import DEFAULT_BLOCK_PREFIX
from todofilter.exceptions import TodoFilterError, TransformError
from todofilter.formats import TargetFormat, select_format
from todofilter.options import TodoFilterOptions
from todofilter.transforms.markers import MarkerMatch, detect_and_split
from todofilter.transforms.render import render_block, render_inline

logger = logging.getLogger(__name__)

_PREVIEW_LENGTH = 60


@dataclass
class TodoStats:
    """Counts collected by one ``TodoFilterTransform``."""

    inline_markers: int = 0
    unterminated_markers: int = 0
    todo_blocks: int = 0


def is_todo_block(block: Node, prefix: str = DEFAULT_BLOCK_PREFIX) -> bool:
    """Check whether a block is a TODO block.

    A ``Paragraph`` or ``Plain`` is a TODO block when its first inline is a
    ``Text`` starting with ``prefix``.
    """
    if not isinstance(block, (Paragraph, Plain)) or not block.content:
        return False
    first = block.content[0]
    return isinstance(first, Text) and first.content.startswith(prefix)


class TodoFilterTransform(NodeTransformer):
    """Rewrite inline TODO annotations and TODO blocks for one output format.

    Inline sequences are rewritten bottom-up: nested containers (spans,
    emphasis, links, ...) first, then the sequence itself, so every
    annotation is wrapped exactly once per pass.

    Parameters
    ----------
    target : TargetFormat
        Output format, resolved once by the caller
    options : TodoFilterOptions, optional
        Marker literals and rendering options

    Attributes
    ----------
    stats : TodoStats
        Counts of what this instance has rewritten

    """

    def __init__(self, target: TargetFormat, options: TodoFilterOptions | None = None):
        """Initialize the transform for one output format."""
        self.target = target
        self.options = options or TodoFilterOptions()
        self.stats = TodoStats()

    def transform_inline_sequence(self, inlines: list[Node]) -> list[Node]:
        """Rewrite nested inlines, then replace annotations in this sequence."""
        rewritten = super().transform_inline_sequence(inlines)
        return detect_and_split(
            rewritten,
            self._render_inline,
            marker=self.options.inline_marker,
            on_match=self._record_match,
        )

    def visit_paragraph(self, node: Paragraph) -> Node:
        """Rewrite a paragraph, wrapping it when it is a TODO block."""
        return self._classify(node, super().visit_paragraph(node))

    def visit_plain(self, node: Plain) -> Node:
        """Rewrite a plain block, wrapping it when it is a TODO block."""
        return self._classify(node, super().visit_plain(node))

    def _classify(self, original: Node, rewritten: Node) -> Node:
        # Decided on the original first inline: rewriting may split it.
        if not is_todo_block(original, self.options.block_prefix):
            return rewritten
        self.stats.todo_blocks += 1
        logger.debug("TODO block: %s", extract_text(original)[:_PREVIEW_LENGTH])
        return render_block(self.target, rewritten, self.options)

    def _render_inline(self, content: list[Node]) -> Node:
        return render_inline(self.target, content, self.options)

    def _record_match(self, match: MarkerMatch) -> None:
        self.stats.inline_markers += 1
        if not match.terminated:
            self.stats.unterminated_markers += 1
        logger.debug("Inline TODO: %s", extract_text(match.content)[:_PREVIEW_LENGTH])


def detect_todo_markers(
    target: TargetFormat, inlines: list[Node], options: TodoFilterOptions | None = None
) -> list[Node]:
    """Rewrite the inline annotations of one inline sequence.

    Nested inline containers are rewritten too.

    Parameters
    ----------
    target : TargetFormat
        Output format
    inlines : list of Node
        Inline sequence; not modified
    options : TodoFilterOptions, optional
        Marker literals and rendering options

    Returns
    -------
    list of Node
        Replacement sequence

    """
    return TodoFilterTransform(target, options).transform_inline_sequence(inlines)


def classify_block(target: TargetFormat, block: Node, options: TodoFilterOptions | None = None) -> Node:
    """Rewrite one block and everything inside it.

    TODO blocks come back wrapped by ``render_block``; other blocks come
    back with their contents rewritten.
    """
    return cast(Node, TodoFilterTransform(target, options).transform(block))


def rewrite_document(target: TargetFormat, blocks: list[Node], options: TodoFilterOptions | None = None) -> list[Node]:
    """Rewrite a sequence of top-level blocks.

    Parameters
    ----------
    target : TargetFormat
        Output format
    blocks : list of Node
        Top-level blocks; not modified
    options : TodoFilterOptions, optional
        Marker literals and rendering options

    Returns
    -------
    list of Node
        New blocks

    """
    transform = TodoFilterTransform(target, options)
    return [cast(Node, transform.transform(block)) for block in blocks]


def apply_todo_filter(
    document: Document,
    target_format: TargetFormat | str,
    options: TodoFilterOptions | None = None,
) -> Document:
    """Run the TODO filter over a whole document.

    Parameters
    ----------
    document : Document
        Input document; not modified
    target_format : TargetFormat or str
        Output format, or its name as pandoc passes it
    options : TodoFilterOptions, optional
        Marker literals and rendering options

    Returns
    -------
    Document
        Rewritten document

    Raises
    ------
    TransformError
        If the rewrite fails unexpectedly

    """
    target = select_format(target_format) if isinstance(target_format, str) else target_format
    transform = TodoFilterTransform(target, options)
    try:
        result = transform.visit_document(document)
    except TodoFilterError:
        raise
    except Exception as e:
        logger.error("TODO filter failed: %s", e, exc_info=True)
        raise TransformError(f"TODO filter failed: {e}", transform_name="todo", original_error=e) from e

    logger.info(
        "TODO filter (%s): %d inline annotation(s), %d TODO block(s), %d unterminated",
        target.name,
        transform.stats.inline_markers,
        transform.stats.todo_blocks,
        transform.stats.unterminated_markers,
    )
    return result
