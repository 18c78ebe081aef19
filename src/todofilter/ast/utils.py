#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/todofilter/ast/utils.py
"""Utility functions for working with AST nodes.

Functions
---------
extract_text : Extract plain text from a node or list of nodes

Examples
--------
    >>> from todofilter.ast import Emphasis, Paragraph, Space, Text
    >>> para = Paragraph(content=[Text("Hello"), Space(), Emphasis(content=[Text("world")])])
    >>> extract_text(para)
    'Hello world'

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

from todofilter.ast.nodes import SoftBreak, Space, Text, get_node_children

if TYPE_CHECKING:
    from todofilter.ast.nodes import Node


def extract_text(node_or_nodes: Union[Node, list[Node]], joiner: str = "") -> str:
    """Extract plain text from a node or list of nodes.

    ``Space`` and ``SoftBreak`` nodes contribute a single space, so the
    default joiner reproduces the source text of a pandoc inline sequence.
    Raw markup and opaque nodes contribute nothing.

    Parameters
    ----------
    node_or_nodes : Node or list of Node
        A single node or list of nodes to extract text from
    joiner : str, default = ""
        String placed between the text of sibling nodes

    Returns
    -------
    str
        Concatenated text content

    """
    if isinstance(node_or_nodes, list):
        return joiner.join(extract_text(node, joiner) for node in node_or_nodes)

    node = node_or_nodes
    if isinstance(node, Text):
        return node.content
    if isinstance(node, (Space, SoftBreak)):
        return " "

    return joiner.join(extract_text(child, joiner) for child in get_node_children(node))

