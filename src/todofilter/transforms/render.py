#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/todofilter/transforms/render.py
"""Format-specific rendering of TODO annotations.

Inline annotations:

- latex, beamer: ``Span.TODO[ \\todo{ , content..., } ]`` with the braces as
  raw TeX, so the annotation ends up in a ``todonotes`` margin note.
- everything else: ``Span[ Span.TODO[content...], Span.TODO-marker["*"] ]``,
  leaving styling of the highlighted text and its marker to CSS.

TODO blocks:

- html: ``Div.TODO[block]``
- latex, beamer: ``Div.TODO[ \\todo[inline]{ , block, } ]``
- everything else: the block unchanged

"""

from __future__ import annotations

from todofilter.ast.nodes import Attr, Div, Node, RawBlock, RawInline, Span, Text
from todofilter.formats import FormatKind, TargetFormat
from todofilter.options import TodoFilterOptions

_DEFAULT_OPTIONS = TodoFilterOptions()


def render_inline(target: TargetFormat, content: list[Node], options: TodoFilterOptions | None = None) -> Node:
    """Build the inline node that replaces an annotation.

    Parameters
    ----------
    target : TargetFormat
        Output format
    content : list of Node
        The annotation's inlines, from ``(`` through ``)``
    options : TodoFilterOptions, optional
        Class names and raw snippets; defaults apply when omitted

    Returns
    -------
    Node
        A ``Span`` wrapping ``content``

    """
    options = options or _DEFAULT_OPTIONS
    if target.is_tex:
        return Span(
            attr=Attr(classes=[options.todo_class]),
            content=[
                RawInline(format=target.name, content=options.latex_inline_open),
                *content,
                RawInline(format=target.name, content=options.latex_inline_close),
            ],
        )

    return Span(
        attr=Attr(),
        content=[
            Span(attr=Attr(classes=[options.todo_class]), content=list(content)),
            Span(attr=Attr(classes=[options.marker_class]), content=[Text(content=options.marker_symbol)]),
        ],
    )


def render_block(target: TargetFormat, block: Node, options: TodoFilterOptions | None = None) -> Node:
    """Wrap a whole TODO block for the output format.

    Parameters
    ----------
    target : TargetFormat
        Output format
    block : Node
        The (already rewritten) block
    options : TodoFilterOptions, optional
        Class names and raw snippets; defaults apply when omitted

    Returns
    -------
    Node
        A ``Div`` for html and TeX output, otherwise ``block`` itself

    """
    options = options or _DEFAULT_OPTIONS
    if target.kind is FormatKind.HTML:
        return Div(attr=Attr(classes=[options.todo_class]), children=[block])

    if target.is_tex:
        return Div(
            attr=Attr(classes=[options.todo_class]),
            children=[
                RawBlock(format=target.name, content=options.latex_block_open),
                block,
                RawBlock(format=target.name, content=options.latex_block_close),
            ],
        )

    return block
