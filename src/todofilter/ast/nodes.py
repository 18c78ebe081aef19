#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/todofilter/ast/nodes.py
"""AST node classes mirroring the pandoc document model.

This module defines the subset of pandoc's block and inline elements that the
filters in this package look inside. Each node supports the visitor pattern
via ``accept``.

Node Hierarchy
--------------
Block-level nodes:
    - Document, Paragraph, Plain, Heading, Div, BlockQuote, List, LineBlock
    - DefinitionList, DefinitionTerm, DefinitionDescription
    - Table, TableRow, TableCell, Figure, Caption
    - RawBlock, OpaqueBlock

Inline nodes:
    - Text, Space, SoftBreak, Span, RawInline
    - Emphasis, Strong, Underline, Strikethrough, Superscript, Subscript, SmallCaps
    - Quoted, Cite, Link, Image, Note, OpaqueInline

Every pandoc element without a dedicated class (code, math, line breaks,
code blocks, rules, ...) is carried as an ``OpaqueBlock`` or ``OpaqueInline``
holding its raw JSON element. These are the leaves that hold no inline or
block sequences. Opaque nodes are never looked into and are written back out
unchanged.

Nodes are never modified in place by the transforms in this package; every
rewrite builds new nodes, so an input tree stays valid after a transform.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any

from todofilter.constants import DEFAULT_PANDOC_API_VERSION


@dataclass
class Attr:
    """Attribute bundle attached to spans, divs, headings and links.

    Parameters
    ----------
    identifier : str, default = ""
        Element identifier (empty when absent)
    classes : list of str, default = empty list
        Class names in output order. Duplicates are dropped on construction,
        keeping the first occurrence.
    attributes : list of (str, str), default = empty list
        Key/value pairs in document order. Keys may repeat.

    """

    identifier: str = ""
    classes: list[str] = field(default_factory=list)
    attributes: list[tuple[str, str]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.classes = list(dict.fromkeys(self.classes))
        self.attributes = [(key, value) for key, value in self.attributes]


class Node(ABC):
    """Base class for all AST nodes."""

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


# ============================================================================
# Block-level Nodes
# ============================================================================


@dataclass
class Document(Node):
    """Root node of a pandoc document.

    Parameters
    ----------
    children : list of Node, default = empty list
        Top-level blocks
    meta : dict, default = empty dict
        Pandoc metadata map, kept in its raw JSON form
    api_version : list of int
        The ``pandoc-api-version`` the document was read with

    """

    children: list[Node] = field(default_factory=list)
    meta: dict[str, Any] = field(default_factory=dict)
    api_version: list[int] = field(default_factory=lambda: list(DEFAULT_PANDOC_API_VERSION))

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this document."""
        return visitor.visit_document(self)


@dataclass
class Paragraph(Node):
    """Paragraph node containing inline content (pandoc ``Para``).

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline nodes representing paragraph content

    """

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this paragraph."""
        return visitor.visit_paragraph(self)


@dataclass
class Plain(Node):
    """Inline content not wrapped in a paragraph (pandoc ``Plain``).

    Pandoc emits ``Plain`` for the contents of tight list items and similar
    places where no paragraph spacing applies.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline nodes

    """

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this plain block."""
        return visitor.visit_plain(self)


@dataclass
class Heading(Node):
    """Heading node (pandoc ``Header``).

    Parameters
    ----------
    level : int
        Heading level; pandoc puts no upper bound on it
    content : list of Node, default = empty list
        Inline nodes forming the heading text
    attr : Attr, default = empty Attr
        Heading attributes

    """

    level: int
    content: list[Node] = field(default_factory=list)
    attr: Attr = field(default_factory=Attr)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this heading."""
        return visitor.visit_heading(self)


@dataclass
class Div(Node):
    """Generic block container with attributes.

    Parameters
    ----------
    attr : Attr, default = empty Attr
        Container attributes
    children : list of Node, default = empty list
        Contained blocks

    """

    attr: Attr = field(default_factory=Attr)
    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this div."""
        return visitor.visit_div(self)


@dataclass
class BlockQuote(Node):
    """Block quote containing other blocks."""

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this block quote."""
        return visitor.visit_block_quote(self)


@dataclass
class List(Node):
    """Bullet or ordered list (pandoc ``BulletList`` / ``OrderedList``).

    Parameters
    ----------
    items : list of list of Node, default = empty list
        One block sequence per list item
    ordered : bool, default = False
        Whether this is an ordered list
    list_attributes : list or None, default = None
        Raw pandoc ``ListAttributes`` (start, style, delimiter) of an ordered
        list, kept as decoded from JSON

    """

    items: list[list[Node]] = field(default_factory=list)
    ordered: bool = False
    list_attributes: Any = None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this list."""
        return visitor.visit_list(self)


@dataclass
class LineBlock(Node):
    """Line block (pandoc ``LineBlock``); one inline sequence per line."""

    lines: list[list[Node]] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this line block."""
        return visitor.visit_line_block(self)


@dataclass
class DefinitionTerm(Node):
    """Term of a definition list entry.

    Parameters
    ----------
    content : list of Node, default = empty list
        Inline nodes forming the term

    """

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this definition term."""
        return visitor.visit_definition_term(self)


@dataclass
class DefinitionDescription(Node):
    """One definition of a term, a sequence of blocks."""

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this definition description."""
        return visitor.visit_definition_description(self)


@dataclass
class DefinitionList(Node):
    """Definition list.

    Parameters
    ----------
    items : list of (DefinitionTerm, list of DefinitionDescription)
        Each term with its definitions, in document order

    """

    items: list[tuple[DefinitionTerm, list[DefinitionDescription]]] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this definition list."""
        return visitor.visit_definition_list(self)


@dataclass
class Caption(Node):
    """Caption of a table or figure.

    Parameters
    ----------
    short : list of Node or None, default = None
        Optional short caption inlines
    children : list of Node, default = empty list
        Caption blocks

    """

    short: list[Node] | None = None
    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this caption."""
        return visitor.visit_caption(self)


@dataclass
class TableCell(Node):
    """Table cell.

    Parameters
    ----------
    children : list of Node, default = empty list
        Cell blocks
    attr : Attr, default = empty Attr
        Cell attributes
    alignment : dict
        Raw pandoc ``Alignment`` element
    row_span : int, default = 1
        Number of rows the cell spans
    col_span : int, default = 1
        Number of columns the cell spans

    """

    children: list[Node] = field(default_factory=list)
    attr: Attr = field(default_factory=Attr)
    alignment: Any = field(default_factory=lambda: {"t": "AlignDefault"})
    row_span: int = 1
    col_span: int = 1

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table cell."""
        return visitor.visit_table_cell(self)


@dataclass
class TableRow(Node):
    """Table row."""

    cells: list[TableCell] = field(default_factory=list)
    attr: Attr = field(default_factory=Attr)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table row."""
        return visitor.visit_table_row(self)


@dataclass
class TableHead:
    """Header rows of a table (pandoc ``TableHead``)."""

    rows: list[TableRow] = field(default_factory=list)
    attr: Attr = field(default_factory=Attr)


@dataclass
class TableBody:
    """One body of a table (pandoc ``TableBody``).

    Parameters
    ----------
    rows : list of TableRow, default = empty list
        Body rows
    head_rows : list of TableRow, default = empty list
        Intermediate header rows of this body
    row_head_columns : int, default = 0
        Number of leading columns that are row headers
    attr : Attr, default = empty Attr
        Body attributes

    """

    rows: list[TableRow] = field(default_factory=list)
    head_rows: list[TableRow] = field(default_factory=list)
    row_head_columns: int = 0
    attr: Attr = field(default_factory=Attr)


@dataclass
class TableFoot:
    """Footer rows of a table (pandoc ``TableFoot``)."""

    rows: list[TableRow] = field(default_factory=list)
    attr: Attr = field(default_factory=Attr)


@dataclass
class Table(Node):
    """Table in the pandoc 1.21+ model.

    Parameters
    ----------
    caption : Caption, default = empty Caption
        Table caption
    col_specs : list, default = empty list
        Raw pandoc column specifications (alignment, width)
    head : TableHead, default = empty TableHead
        Header rows
    bodies : list of TableBody, default = empty list
        Table bodies
    foot : TableFoot, default = empty TableFoot
        Footer rows
    attr : Attr, default = empty Attr
        Table attributes

    """

    caption: Caption = field(default_factory=Caption)
    col_specs: list[Any] = field(default_factory=list)
    head: TableHead = field(default_factory=TableHead)
    bodies: list[TableBody] = field(default_factory=list)
    foot: TableFoot = field(default_factory=TableFoot)
    attr: Attr = field(default_factory=Attr)

    @property
    def all_rows(self) -> list[TableRow]:
        """Every row in document order: head, each body's rows, then foot."""
        rows = list(self.head.rows)
        for body in self.bodies:
            rows.extend(body.head_rows)
            rows.extend(body.rows)
        rows.extend(self.foot.rows)
        return rows

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this table."""
        return visitor.visit_table(self)


@dataclass
class Figure(Node):
    """Figure with a caption (pandoc 1.23+ ``Figure``)."""

    caption: Caption = field(default_factory=Caption)
    children: list[Node] = field(default_factory=list)
    attr: Attr = field(default_factory=Attr)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this figure."""
        return visitor.visit_figure(self)


@dataclass
class RawBlock(Node):
    """Raw markup block passed to a specific output format.

    Parameters
    ----------
    format : str
        Target format name (e.g. ``"latex"``, ``"html"``)
    content : str
        Raw markup

    """

    format: str
    content: str

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this raw block."""
        return visitor.visit_raw_block(self)


@dataclass
class OpaqueBlock(Node):
    """Any pandoc block without a dedicated node class.

    Parameters
    ----------
    element : dict
        The raw pandoc JSON element (``{"t": ..., "c": ...}``)

    """

    element: dict[str, Any]

    @property
    def tag(self) -> str:
        """Pandoc element tag, e.g. ``"CodeBlock"``."""
        return str(self.element.get("t", ""))

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this opaque block."""
        return visitor.visit_opaque_block(self)


# ============================================================================
# Inline Nodes
# ============================================================================


@dataclass
class Text(Node):
    """Run of plain text (pandoc ``Str``).

    Parameters
    ----------
    content : str
        Text content

    """

    content: str

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this text."""
        return visitor.visit_text(self)


@dataclass
class Space(Node):
    """Inter-word space."""

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this space."""
        return visitor.visit_space(self)


@dataclass
class SoftBreak(Node):
    """Soft line break from the source text."""

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this soft break."""
        return visitor.visit_soft_break(self)


@dataclass
class Span(Node):
    """Generic inline container with attributes.

    Parameters
    ----------
    attr : Attr, default = empty Attr
        Span attributes
    content : list of Node, default = empty list
        Contained inlines

    """

    attr: Attr = field(default_factory=Attr)
    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this span."""
        return visitor.visit_span(self)


@dataclass
class RawInline(Node):
    """Raw inline markup passed to a specific output format.

    Parameters
    ----------
    format : str
        Target format name
    content : str
        Raw markup

    """

    format: str
    content: str

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this raw inline."""
        return visitor.visit_raw_inline(self)


@dataclass
class Emphasis(Node):
    """Emphasized inlines (pandoc ``Emph``)."""

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this emphasis."""
        return visitor.visit_emphasis(self)


@dataclass
class Strong(Node):
    """Strongly emphasized inlines."""

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this strong emphasis."""
        return visitor.visit_strong(self)


@dataclass
class Underline(Node):
    """Underlined inlines."""

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this underline."""
        return visitor.visit_underline(self)


@dataclass
class Strikethrough(Node):
    """Struck-out inlines (pandoc ``Strikeout``)."""

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this strikethrough."""
        return visitor.visit_strikethrough(self)


@dataclass
class Superscript(Node):
    """Superscripted inlines."""

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this superscript."""
        return visitor.visit_superscript(self)


@dataclass
class Subscript(Node):
    """Subscripted inlines."""

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this subscript."""
        return visitor.visit_subscript(self)


@dataclass
class SmallCaps(Node):
    """Small-caps inlines."""

    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing these small caps."""
        return visitor.visit_small_caps(self)


@dataclass
class Quoted(Node):
    """Quoted inlines.

    Parameters
    ----------
    quote_type : str, default = "DoubleQuote"
        ``"SingleQuote"`` or ``"DoubleQuote"``
    content : list of Node, default = empty list
        Quoted inlines

    """

    quote_type: str = "DoubleQuote"
    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this quotation."""
        return visitor.visit_quoted(self)


@dataclass
class Citation:
    """One citation of a ``Cite`` element.

    Parameters
    ----------
    citation_id : str
        Citation key
    prefix : list of Node, default = empty list
        Inlines before the reference
    suffix : list of Node, default = empty list
        Inlines after the reference, e.g. a locator
    mode : dict
        Raw pandoc ``CitationMode`` element
    note_num : int, default = 0
        Footnote number assigned by pandoc
    hash : int, default = 0
        Citation hash assigned by pandoc

    """

    citation_id: str
    prefix: list[Node] = field(default_factory=list)
    suffix: list[Node] = field(default_factory=list)
    mode: Any = field(default_factory=lambda: {"t": "NormalCitation"})
    note_num: int = 0
    hash: int = 0


@dataclass
class Cite(Node):
    """Citation group with its rendered text."""

    citations: list[Citation] = field(default_factory=list)
    content: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this citation group."""
        return visitor.visit_cite(self)


@dataclass
class Link(Node):
    """Hyperlink with inline content.

    Parameters
    ----------
    url : str
        Link target
    content : list of Node, default = empty list
        Link text
    title : str, default = ""
        Link title
    attr : Attr, default = empty Attr
        Link attributes

    """

    url: str
    content: list[Node] = field(default_factory=list)
    title: str = ""
    attr: Attr = field(default_factory=Attr)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this link."""
        return visitor.visit_link(self)


@dataclass
class Image(Node):
    """Image; its inline content is the alt text.

    Parameters
    ----------
    url : str
        Image source
    content : list of Node, default = empty list
        Alt text inlines
    title : str, default = ""
        Image title
    attr : Attr, default = empty Attr
        Image attributes

    """

    url: str
    content: list[Node] = field(default_factory=list)
    title: str = ""
    attr: Attr = field(default_factory=Attr)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this image."""
        return visitor.visit_image(self)


@dataclass
class Note(Node):
    """Footnote; an inline holding a sequence of blocks."""

    children: list[Node] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this note."""
        return visitor.visit_note(self)


@dataclass
class OpaqueInline(Node):
    """Any pandoc inline without a dedicated node class.

    Parameters
    ----------
    element : dict
        The raw pandoc JSON element

    """

    element: dict[str, Any]

    @property
    def tag(self) -> str:
        """Pandoc element tag, e.g. ``"Code"``."""
        return str(self.element.get("t", ""))

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this opaque inline."""
        return visitor.visit_opaque_inline(self)


# Nodes whose ``content`` field is a sequence of inlines
INLINE_CONTAINER_TYPES: tuple[type[Node], ...] = (
    Paragraph,
    Plain,
    Heading,
    Span,
    Emphasis,
    Strong,
    Underline,
    Strikethrough,
    Superscript,
    Subscript,
    SmallCaps,
    Quoted,
    Cite,
    Link,
    Image,
    DefinitionTerm,
)

# Nodes whose ``children`` field is a sequence of blocks
BLOCK_CONTAINER_TYPES: tuple[type[Node], ...] = (Document, Div, BlockQuote, Note, DefinitionDescription, TableCell)

# Nodes whose children are grouped, so a flat replacement list cannot be mapped back
_GROUPED_TYPES: tuple[type[Node], ...] = (List, LineBlock, DefinitionList, Table, Figure, Caption)


def get_node_children(node: Node) -> list[Node]:
    """Get all child nodes from a node.

    Grouped children are flattened in document order: list items and lines
    into one sequence, definition entries into term then definitions, tables
    into caption then rows, figures into caption then blocks. Citation
    prefixes and suffixes are not included.

    Parameters
    ----------
    node : Node
        The node to get children from

    Returns
    -------
    list of Node
        List of child nodes (empty list if node has no children)

    Examples
    --------
    >>> para = Paragraph(content=[Text("Hello"), Space(), Strong(content=[Text("world")])])
    >>> len(get_node_children(para))
    3

    """
    if isinstance(node, BLOCK_CONTAINER_TYPES):
        return list(node.children)  # type: ignore[attr-defined]

    if isinstance(node, INLINE_CONTAINER_TYPES):
        return list(node.content)  # type: ignore[attr-defined]

    if isinstance(node, List):
        return [block for item in node.items for block in item]

    if isinstance(node, LineBlock):
        return [inline for line in node.lines for inline in line]

    if isinstance(node, DefinitionList):
        return [child for term, descriptions in node.items for child in (term, *descriptions)]

    if isinstance(node, TableRow):
        return list(node.cells)

    if isinstance(node, Table):
        return [node.caption, *node.all_rows]

    if isinstance(node, Figure):
        return [node.caption, *node.children]

    if isinstance(node, Caption):
        return [*(node.short or []), *node.children]

    return []


def replace_node_children(node: Node, new_children: list[Node]) -> Node:
    """Create a copy of a node with replaced children.

    Parameters
    ----------
    node : Node
        The node to copy and modify
    new_children : list of Node
        New children to use in the copy

    Returns
    -------
    Node
        New node with replaced children; leaf nodes are returned as-is

    Raises
    ------
    NotImplementedError
        For nodes whose children are grouped (lists, line blocks, definition
        lists, tables, figures, captions), since the grouping cannot be
        recovered from a flat children list

    """
    if isinstance(node, BLOCK_CONTAINER_TYPES):
        return replace(node, children=new_children)  # type: ignore[type-var]

    if isinstance(node, INLINE_CONTAINER_TYPES):
        return replace(node, content=new_children)  # type: ignore[type-var]

    if isinstance(node, TableRow):
        return replace(node, cells=new_children)

    if isinstance(node, _GROUPED_TYPES):
        raise NotImplementedError(
            f"replace_node_children does not support {type(node).__name__}. "
            "Its children are grouped; rebuild the node's fields directly."
        )

    return node
