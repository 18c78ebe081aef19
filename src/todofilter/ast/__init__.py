#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/todofilter/ast/__init__.py
"""Document tree model for pandoc filters.

The module consists of several components:

- nodes: AST node classes mirroring pandoc's block and inline elements
- visitors: Visitor pattern base class for AST traversal
- transforms: ``NodeTransformer``, the base for tree rewrites
- serialization: pandoc JSON encoding and decoding
- utils: text extraction helper

Examples
--------
    >>> from todofilter.ast import Document, Paragraph, Text, ast_to_json
    >>> doc = Document(children=[Paragraph(content=[Text("Hello")])])
    >>> ast_to_json(doc)  # doctest: +SKIP

"""

from __future__ import annotations

from todofilter.ast.nodes import (
    Attr,
    BlockQuote,
    Caption,
    Citation,
    Cite,
    DefinitionDescription,
    DefinitionList,
    DefinitionTerm,
    Div,
    Document,
    Emphasis,
    Figure,
    Heading,
    Image,
    LineBlock,
    Link,
    List,
    Node,
    Note,
    OpaqueBlock,
    OpaqueInline,
    Paragraph,
    Plain,
    Quoted,
    RawBlock,
    RawInline,
    SmallCaps,
    SoftBreak,
    Space,
    Span,
    Strikethrough,
    Strong,
    Subscript,
    Superscript,
    Table,
    TableBody,
    TableCell,
    TableFoot,
    TableHead,
    TableRow,
    Text,
    Underline,
    get_node_children,
    replace_node_children,
)
from todofilter.ast.serialization import ast_to_dict, ast_to_json, dict_to_ast, json_to_ast
from todofilter.ast.transforms import NodeTransformer
from todofilter.ast.utils import extract_text
from todofilter.ast.visitors import NodeVisitor

__all__ = [
    # Nodes
    "Attr",
    "BlockQuote",
    "Caption",
    "Citation",
    "Cite",
    "DefinitionDescription",
    "DefinitionList",
    "DefinitionTerm",
    "Div",
    "Document",
    "Emphasis",
    "Figure",
    "Heading",
    "Image",
    "LineBlock",
    "Link",
    "List",
    "Node",
    "Note",
    "OpaqueBlock",
    "OpaqueInline",
    "Paragraph",
    "Plain",
    "Quoted",
    "RawBlock",
    "RawInline",
    "SmallCaps",
    "SoftBreak",
    "Space",
    "Span",
    "Strikethrough",
    "Strong",
    "Subscript",
    "Superscript",
    "Table",
    "TableBody",
    "TableCell",
    "TableFoot",
    "TableHead",
    "TableRow",
    "Text",
    "Underline",
    "get_node_children",
    "replace_node_children",
    # Visitors and transforms
    "NodeVisitor",
    "NodeTransformer",
    # Serialization
    "ast_to_dict",
    "ast_to_json",
    "dict_to_ast",
    "json_to_ast",
    # Utilities
    "extract_text",
]
