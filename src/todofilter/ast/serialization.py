#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/todofilter/ast/serialization.py
"""Pandoc JSON serialization and deserialization for AST nodes.

This module converts between pandoc's JSON document representation
(``pandoc -t json``) and the node classes of :mod:`todofilter.ast.nodes`.

The JSON format preserves:
- Every element, including ones without a dedicated node class, which are
  carried as opaque nodes and written back unchanged
- Document metadata and the pandoc API version
- Round-trip compatibility (JSON -> AST -> JSON produces identical JSON)

Examples
--------
    >>> doc = json_to_ast('{"pandoc-api-version": [1, 23, 1], "meta": {}, '
    ...                   '"blocks": [{"t": "Para", "c": [{"t": "Str", "c": "Hi"}]}]}')
    >>> doc.children[0].content[0].content
    'Hi'
    >>> ast_to_json(doc)
    '{"pandoc-api-version": [1, 23, 1], "meta": {}, "blocks": [{"t": "Para", "c": [{"t": "Str", "c": "Hi"}]}]}'

"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

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
)
from todofilter.constants import DEFAULT_JSON_ENSURE_ASCII, PANDOC_API_VERSION_KEY
from todofilter.exceptions import ParsingError

logger = logging.getLogger(__name__)

# Pandoc tags of inline containers whose "c" is just a list of inlines
_STYLED_INLINE_TAGS: dict[str, type[Node]] = {
    "Emph": Emphasis,
    "Strong": Strong,
    "Underline": Underline,
    "Strikeout": Strikethrough,
    "Superscript": Superscript,
    "Subscript": Subscript,
    "SmallCaps": SmallCaps,
}
_STYLED_INLINE_CLASSES: dict[type[Node], str] = {cls: tag for tag, cls in _STYLED_INLINE_TAGS.items()}


# ============================================================================
# Serialization
# ============================================================================


def _serialize_attr(attr: Attr) -> list[Any]:
    return [attr.identifier, list(attr.classes), [[key, value] for key, value in attr.attributes]]


def _serialize_inlines(nodes: list[Node]) -> list[dict[str, Any]]:
    return [ast_to_dict(node) for node in nodes]


def _serialize_blocks(nodes: list[Node]) -> list[dict[str, Any]]:
    return [ast_to_dict(node) for node in nodes]


def _serialize_citation(citation: Citation) -> dict[str, Any]:
    return {
        "citationId": citation.citation_id,
        "citationPrefix": _serialize_inlines(citation.prefix),
        "citationSuffix": _serialize_inlines(citation.suffix),
        "citationMode": citation.mode,
        "citationNoteNum": citation.note_num,
        "citationHash": citation.hash,
    }


def _serialize_caption(caption: Caption) -> list[Any]:
    short = _serialize_inlines(caption.short) if caption.short is not None else None
    return [short, _serialize_blocks(caption.children)]


def _serialize_rows(rows: list[TableRow]) -> list[Any]:
    return [
        [
            _serialize_attr(row.attr),
            [
                [
                    _serialize_attr(cell.attr),
                    cell.alignment,
                    cell.row_span,
                    cell.col_span,
                    _serialize_blocks(cell.children),
                ]
                for cell in row.cells
            ],
        ]
        for row in rows
    ]


def _serialize_table(node: Table) -> dict[str, Any]:
    bodies = [
        [_serialize_attr(body.attr), body.row_head_columns, _serialize_rows(body.head_rows), _serialize_rows(body.rows)]
        for body in node.bodies
    ]
    return {
        "t": "Table",
        "c": [
            _serialize_attr(node.attr),
            _serialize_caption(node.caption),
            node.col_specs,
            [_serialize_attr(node.head.attr), _serialize_rows(node.head.rows)],
            bodies,
            [_serialize_attr(node.foot.attr), _serialize_rows(node.foot.rows)],
        ],
    }


def ast_to_dict(node: Node) -> dict[str, Any]:
    """Convert an AST node to its pandoc JSON element.

    Parameters
    ----------
    node : Node
        Node to serialize

    Returns
    -------
    dict
        Pandoc JSON element; for a ``Document`` the top-level document object

    Raises
    ------
    TypeError
        If the node type is unknown

    """
    if isinstance(node, Document):
        return {
            PANDOC_API_VERSION_KEY: list(node.api_version),
            "meta": node.meta,
            "blocks": _serialize_blocks(node.children),
        }

    # Inlines
    if isinstance(node, Text):
        return {"t": "Str", "c": node.content}
    if isinstance(node, Space):
        return {"t": "Space"}
    if isinstance(node, SoftBreak):
        return {"t": "SoftBreak"}
    if isinstance(node, Span):
        return {"t": "Span", "c": [_serialize_attr(node.attr), _serialize_inlines(node.content)]}
    if isinstance(node, RawInline):
        return {"t": "RawInline", "c": [node.format, node.content]}
    if type(node) in _STYLED_INLINE_CLASSES:
        tag = _STYLED_INLINE_CLASSES[type(node)]
        return {"t": tag, "c": _serialize_inlines(node.content)}  # type: ignore[attr-defined]
    if isinstance(node, Quoted):
        return {"t": "Quoted", "c": [{"t": node.quote_type}, _serialize_inlines(node.content)]}
    if isinstance(node, Cite):
        return {
            "t": "Cite",
            "c": [[_serialize_citation(citation) for citation in node.citations], _serialize_inlines(node.content)],
        }
    if isinstance(node, (Link, Image)):
        return {
            "t": "Link" if isinstance(node, Link) else "Image",
            "c": [_serialize_attr(node.attr), _serialize_inlines(node.content), [node.url, node.title]],
        }
    if isinstance(node, Note):
        return {"t": "Note", "c": _serialize_blocks(node.children)}

    # Blocks
    if isinstance(node, Paragraph):
        return {"t": "Para", "c": _serialize_inlines(node.content)}
    if isinstance(node, Plain):
        return {"t": "Plain", "c": _serialize_inlines(node.content)}
    if isinstance(node, Heading):
        return {"t": "Header", "c": [node.level, _serialize_attr(node.attr), _serialize_inlines(node.content)]}
    if isinstance(node, Div):
        return {"t": "Div", "c": [_serialize_attr(node.attr), _serialize_blocks(node.children)]}
    if isinstance(node, BlockQuote):
        return {"t": "BlockQuote", "c": _serialize_blocks(node.children)}
    if isinstance(node, List):
        items = [_serialize_blocks(item) for item in node.items]
        if node.ordered:
            return {"t": "OrderedList", "c": [node.list_attributes, items]}
        return {"t": "BulletList", "c": items}
    if isinstance(node, LineBlock):
        return {"t": "LineBlock", "c": [_serialize_inlines(line) for line in node.lines]}
    if isinstance(node, DefinitionList):
        return {
            "t": "DefinitionList",
            "c": [
                [_serialize_inlines(term.content), [_serialize_blocks(desc.children) for desc in descriptions]]
                for term, descriptions in node.items
            ],
        }
    if isinstance(node, Table):
        return _serialize_table(node)
    if isinstance(node, Figure):
        return {
            "t": "Figure",
            "c": [_serialize_attr(node.attr), _serialize_caption(node.caption), _serialize_blocks(node.children)],
        }
    if isinstance(node, RawBlock):
        return {"t": "RawBlock", "c": [node.format, node.content]}

    if isinstance(node, (OpaqueBlock, OpaqueInline)):
        return node.element

    if isinstance(node, (DefinitionTerm, DefinitionDescription, Caption, TableRow, TableCell)):
        raise TypeError(f"{type(node).__name__} is only serialized as part of its parent element")

    raise TypeError(f"Unknown node type: {type(node).__name__}")


def ast_to_json(node: Node, indent: int | None = None, ensure_ascii: bool = DEFAULT_JSON_ENSURE_ASCII) -> str:
    """Serialize an AST node to a pandoc JSON string.

    Parameters
    ----------
    node : Node
        Node to serialize, normally a ``Document``
    indent : int or None, default = None
        JSON indentation; None gives compact output, which is what pandoc
        itself writes
    ensure_ascii : bool, default = False
        Whether to escape non-ASCII characters

    Returns
    -------
    str
        JSON text

    """
    return json.dumps(ast_to_dict(node), indent=indent, ensure_ascii=ensure_ascii)


# ============================================================================
# Deserialization
# ============================================================================


def _element_tag(data: Any) -> str:
    if not isinstance(data, dict) or not isinstance(data.get("t"), str):
        raise ParsingError(
            f"Expected a pandoc element object with a 't' tag, got: {data!r:.80}", parsing_stage="element"
        )
    return data["t"]


def _deserialize_attr(data: Any) -> Attr:
    if not isinstance(data, list) or len(data) != 3:
        raise ParsingError(f"Malformed attribute triple: {data!r:.80}", parsing_stage="attr")
    identifier, classes, attributes = data
    return Attr(
        identifier=identifier,
        classes=list(classes),
        attributes=[(key, value) for key, value in attributes],
    )


def _deserialize_list(data: Any, what: str) -> list[Any]:
    if not isinstance(data, list):
        raise ParsingError(f"Expected a list of {what}, got: {data!r:.80}", parsing_stage=what)
    return data


def deserialize_inlines(data: Any) -> list[Node]:
    """Decode a JSON list of pandoc inline elements."""
    return [dict_to_inline(item) for item in _deserialize_list(data, "inlines")]


def deserialize_blocks(data: Any) -> list[Node]:
    """Decode a JSON list of pandoc block elements."""
    return [dict_to_block(item) for item in _deserialize_list(data, "blocks")]


def _deserialize_span(content: Any) -> Span:
    attr, inlines = content
    return Span(attr=_deserialize_attr(attr), content=deserialize_inlines(inlines))


def _deserialize_link(content: Any) -> Link:
    attr, inlines, (url, title) = content
    return Link(url=url, content=deserialize_inlines(inlines), title=title, attr=_deserialize_attr(attr))


def _deserialize_header(content: Any) -> Heading:
    level, attr, inlines = content
    return Heading(level=level, content=deserialize_inlines(inlines), attr=_deserialize_attr(attr))


def _deserialize_div(content: Any) -> Div:
    attr, blocks = content
    return Div(attr=_deserialize_attr(attr), children=deserialize_blocks(blocks))


def _deserialize_bullet_list(content: Any) -> List:
    return List(items=[deserialize_blocks(item) for item in _deserialize_list(content, "list items")])


def _deserialize_ordered_list(content: Any) -> List:
    list_attributes, items = content
    return List(
        items=[deserialize_blocks(item) for item in _deserialize_list(items, "list items")],
        ordered=True,
        list_attributes=list_attributes,
    )


def _deserialize_image(content: Any) -> Image:
    attr, inlines, (url, title) = content
    return Image(url=url, content=deserialize_inlines(inlines), title=title, attr=_deserialize_attr(attr))


def _deserialize_quoted(content: Any) -> Quoted:
    quote_type, inlines = content
    return Quoted(quote_type=_element_tag(quote_type), content=deserialize_inlines(inlines))


def _deserialize_citation(data: Any) -> Citation:
    return Citation(
        citation_id=data["citationId"],
        prefix=deserialize_inlines(data["citationPrefix"]),
        suffix=deserialize_inlines(data["citationSuffix"]),
        mode=data["citationMode"],
        note_num=data["citationNoteNum"],
        hash=data["citationHash"],
    )


def _deserialize_cite(content: Any) -> Cite:
    citations, inlines = content
    return Cite(
        citations=[_deserialize_citation(item) for item in _deserialize_list(citations, "citations")],
        content=deserialize_inlines(inlines),
    )


_INLINE_DESERIALIZERS: dict[str, Callable[[Any], Node]] = {
    "Str": lambda content: Text(content=content),
    "Span": _deserialize_span,
    "RawInline": lambda content: RawInline(format=content[0], content=content[1]),
    "Quoted": _deserialize_quoted,
    "Cite": _deserialize_cite,
    "Link": _deserialize_link,
    "Image": _deserialize_image,
    "Note": lambda content: Note(children=deserialize_blocks(content)),
}


def _deserialize_line_block(content: Any) -> LineBlock:
    return LineBlock(lines=[deserialize_inlines(line) for line in _deserialize_list(content, "lines")])


def _deserialize_definition_list(content: Any) -> DefinitionList:
    items = []
    for term, definitions in _deserialize_list(content, "definition list items"):
        descriptions = [
            DefinitionDescription(children=deserialize_blocks(blocks))
            for blocks in _deserialize_list(definitions, "definitions")
        ]
        items.append((DefinitionTerm(content=deserialize_inlines(term)), descriptions))
    return DefinitionList(items=items)


def _deserialize_caption(data: Any) -> Caption:
    short, blocks = data
    return Caption(short=deserialize_inlines(short) if short is not None else None, children=deserialize_blocks(blocks))


def _deserialize_rows(data: Any) -> list[TableRow]:
    rows = []
    for attr, cells in _deserialize_list(data, "table rows"):
        row_cells = []
        for cell_attr, alignment, row_span, col_span, blocks in _deserialize_list(cells, "table cells"):
            row_cells.append(
                TableCell(
                    children=deserialize_blocks(blocks),
                    attr=_deserialize_attr(cell_attr),
                    alignment=alignment,
                    row_span=row_span,
                    col_span=col_span,
                )
            )
        rows.append(TableRow(cells=row_cells, attr=_deserialize_attr(attr)))
    return rows


def _deserialize_table(content: Any) -> Table:
    attr, caption, col_specs, (head_attr, head_rows), bodies, (foot_attr, foot_rows) = content
    return Table(
        caption=_deserialize_caption(caption),
        col_specs=col_specs,
        head=TableHead(rows=_deserialize_rows(head_rows), attr=_deserialize_attr(head_attr)),
        bodies=[
            TableBody(
                rows=_deserialize_rows(body_rows),
                head_rows=_deserialize_rows(body_head_rows),
                row_head_columns=row_head_columns,
                attr=_deserialize_attr(body_attr),
            )
            for body_attr, row_head_columns, body_head_rows, body_rows in _deserialize_list(bodies, "table bodies")
        ],
        foot=TableFoot(rows=_deserialize_rows(foot_rows), attr=_deserialize_attr(foot_attr)),
        attr=_deserialize_attr(attr),
    )


def _deserialize_figure(content: Any) -> Figure:
    attr, caption, blocks = content
    return Figure(
        caption=_deserialize_caption(caption),
        children=deserialize_blocks(blocks),
        attr=_deserialize_attr(attr),
    )


def _is_legacy_table(data: dict[str, Any]) -> bool:
    # Before API 1.21 a table was [caption, aligns, widths, headers, rows]
    content = data.get("c")
    return isinstance(content, list) and len(content) == 5

_BLOCK_DESERIALIZERS: dict[str, Callable[[Any], Node]] = {
    "Para": lambda content: Paragraph(content=deserialize_inlines(content)),
    "Plain": lambda content: Plain(content=deserialize_inlines(content)),
    "Header": _deserialize_header,
    "Div": _deserialize_div,
    "BlockQuote": lambda content: BlockQuote(children=deserialize_blocks(content)),
    "BulletList": _deserialize_bullet_list,
    "OrderedList": _deserialize_ordered_list,
    "LineBlock": _deserialize_line_block,
    "DefinitionList": _deserialize_definition_list,
    "Table": _deserialize_table,
    "Figure": _deserialize_figure,
    "RawBlock": lambda content: RawBlock(format=content[0], content=content[1]),
}


def _decode(data: dict[str, Any], tag: str, decoder: Callable[[Any], Node]) -> Node:
    try:
        return decoder(data.get("c"))
    except ParsingError:
        raise
    except (TypeError, ValueError, IndexError, KeyError) as e:
        raise ParsingError(f"Malformed pandoc '{tag}' element: {e}", parsing_stage=tag, original_error=e) from e


def dict_to_inline(data: Any) -> Node:
    """Decode a pandoc inline element.

    Elements without a dedicated node class become ``OpaqueInline``.

    Raises
    ------
    ParsingError
        If the element is not a tagged object or its content is malformed

    """
    tag = _element_tag(data)
    if tag == "Space":
        return Space()
    if tag == "SoftBreak":
        return SoftBreak()
    if tag in _STYLED_INLINE_TAGS:
        node_class = _STYLED_INLINE_TAGS[tag]
        return _decode(
            data, tag, lambda content: node_class(content=deserialize_inlines(content))  # type: ignore[call-arg]
        )
    if tag in _INLINE_DESERIALIZERS:
        return _decode(data, tag, _INLINE_DESERIALIZERS[tag])
    return OpaqueInline(element=data)


def dict_to_block(data: Any) -> Node:
    """Decode a pandoc block element.

    Elements without a dedicated node class become ``OpaqueBlock``, and so
    do tables in the layout used before pandoc API 1.21.

    Raises
    ------
    ParsingError
        If the element is not a tagged object or its content is malformed

    """
    tag = _element_tag(data)
    if tag == "Table" and _is_legacy_table(data):
        return OpaqueBlock(element=data)
    if tag in _BLOCK_DESERIALIZERS:
        return _decode(data, tag, _BLOCK_DESERIALIZERS[tag])
    return OpaqueBlock(element=data)


def dict_to_ast(data: Any) -> Document:
    """Decode a pandoc JSON document object.

    Parameters
    ----------
    data : dict
        Decoded JSON with ``pandoc-api-version``, ``meta`` and ``blocks``

    Returns
    -------
    Document
        Document tree

    Raises
    ------
    ParsingError
        If the payload is not a pandoc document object. The pre-1.18 array
        form (``[{"unMeta": ...}, [...]]``) is rejected.

    """
    if isinstance(data, list):
        raise ParsingError(
            "Legacy pandoc JSON (array form) is not supported; use pandoc 1.18 or newer",
            parsing_stage="document",
        )
    if not isinstance(data, dict):
        raise ParsingError(f"Expected a pandoc document object, got {type(data).__name__}", parsing_stage="document")

    api_version = data.get(PANDOC_API_VERSION_KEY)
    if not isinstance(api_version, list) or not all(isinstance(part, int) for part in api_version):
        raise ParsingError(f"Missing or invalid '{PANDOC_API_VERSION_KEY}'", parsing_stage="document")

    meta = data.get("meta", {})
    if not isinstance(meta, dict):
        raise ParsingError("Document 'meta' must be an object", parsing_stage="document")

    if "blocks" not in data:
        raise ParsingError("Document has no 'blocks'", parsing_stage="document")

    logger.debug("Decoding pandoc document, API version %s", ".".join(str(part) for part in api_version))
    return Document(children=deserialize_blocks(data["blocks"]), meta=meta, api_version=api_version)


def json_to_ast(json_str: str | bytes) -> Document:
    """Deserialize a pandoc JSON string to a document tree.

    Parameters
    ----------
    json_str : str or bytes
        JSON text as written by ``pandoc -t json``

    Returns
    -------
    Document
        Document tree

    Raises
    ------
    ParsingError
        If the text is not valid JSON or not a pandoc document

    """
    try:
        data = json.loads(json_str)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParsingError(f"Invalid JSON: {e}", parsing_stage="json", original_error=e) from e
    return dict_to_ast(data)
