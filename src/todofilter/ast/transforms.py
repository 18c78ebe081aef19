#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/todofilter/ast/transforms.py
"""AST transformation base class.

``NodeTransformer`` rebuilds a tree node by node. Subclasses override the
``visit_*`` methods they care about, and may override
``transform_inline_sequence`` to rewrite whole runs of sibling inlines, which
is where cross-node text patterns have to be handled.

Examples
--------
Uppercase all text:

    >>> class UppercaseTransformer(NodeTransformer):
    ...     def visit_text(self, node):
    ...         return Text(content=node.content.upper())
    >>>
    >>> new_doc = UppercaseTransformer().transform(doc)

"""

from __future__ import annotations

import copy

from todofilter.ast.nodes import (
    BLOCK_CONTAINER_TYPES,
    INLINE_CONTAINER_TYPES,
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
from todofilter.ast.visitors import NodeVisitor


class NodeTransformer(NodeVisitor):
    """Base class for transforming AST nodes.

    Subclasses should implement visit_* methods that return modified nodes
    or None to remove nodes. The transformer creates a new AST with the
    transformations applied; the input tree is left untouched.

    """

    def transform(self, node: Node) -> Node | None:
        """Transform an AST node.

        Parameters
        ----------
        node : Node
            Node to transform

        Returns
        -------
        Node or None
            Transformed node or None to remove

        """
        return node.accept(self)

    def _transform_children(self, children: list[Node]) -> list[Node]:
        """Transform a list of child nodes, dropping removed ones."""
        result = []
        for child in children:
            transformed = self.transform(child)
            if transformed is not None:
                result.append(transformed)
        return result

    def transform_inline_sequence(self, inlines: list[Node]) -> list[Node]:
        """Transform an ordered run of sibling inline nodes.

        Called for the content of every inline container (paragraphs, plain
        blocks, headings, spans, emphasis, links, ...). The default
        transforms each inline on its own; override to rewrite patterns that
        span several siblings.

        Parameters
        ----------
        inlines : list of Node
            Inline sequence from the input tree

        Returns
        -------
        list of Node
            Replacement sequence, possibly of a different length

        """
        return self._transform_children(inlines)

    def _generic_transform(self, node: Node) -> Node:
        """Rebuild a container node with transformed children.

        Inline containers route their content through
        ``transform_inline_sequence``; block containers transform each child
        block. Other nodes are shallow-copied.

        """
        children = get_node_children(node)
        if isinstance(node, INLINE_CONTAINER_TYPES):
            return replace_node_children(node, self.transform_inline_sequence(children))
        if isinstance(node, BLOCK_CONTAINER_TYPES):
            return replace_node_children(node, self._transform_children(children))
        return copy.copy(node)

    def visit_document(self, node: Document) -> Document:
        """Transform a Document node."""
        return Document(
            children=self._transform_children(node.children),
            meta=copy.deepcopy(node.meta),
            api_version=list(node.api_version),
        )

    def visit_paragraph(self, node: Paragraph) -> Node:
        """Transform a Paragraph node."""
        return self._generic_transform(node)

    def visit_plain(self, node: Plain) -> Node:
        """Transform a Plain node."""
        return self._generic_transform(node)

    def visit_heading(self, node: Heading) -> Node:
        """Transform a Heading node."""
        return Heading(
            level=node.level,
            content=self.transform_inline_sequence(node.content),
            attr=copy.deepcopy(node.attr),
        )

    def visit_div(self, node: Div) -> Node:
        """Transform a Div node."""
        return Div(attr=copy.deepcopy(node.attr), children=self._transform_children(node.children))

    def visit_block_quote(self, node: BlockQuote) -> Node:
        """Transform a BlockQuote node."""
        return self._generic_transform(node)

    def visit_list(self, node: List) -> Node:
        """Transform a List node, item by item."""
        return List(
            items=[self._transform_children(item) for item in node.items],
            ordered=node.ordered,
            list_attributes=copy.deepcopy(node.list_attributes),
        )

    def visit_line_block(self, node: LineBlock) -> Node:
        """Transform a LineBlock node, line by line."""
        return LineBlock(lines=[self.transform_inline_sequence(line) for line in node.lines])

    def visit_definition_list(self, node: DefinitionList) -> Node:
        """Transform a DefinitionList node.

        An entry whose term is removed is dropped.
        """
        transformed_items: list[tuple[DefinitionTerm, list[DefinitionDescription]]] = []
        for term, descriptions in node.items:
            t_term = self.transform(term)
            if t_term is None or not isinstance(t_term, DefinitionTerm):
                continue
            t_descs = [
                d
                for d in (self.transform(desc) for desc in descriptions)
                if d is not None and isinstance(d, DefinitionDescription)
            ]
            transformed_items.append((t_term, t_descs))
        return DefinitionList(items=transformed_items)

    def visit_definition_term(self, node: DefinitionTerm) -> Node:
        """Transform a DefinitionTerm node."""
        return self._generic_transform(node)

    def visit_definition_description(self, node: DefinitionDescription) -> Node:
        """Transform a DefinitionDescription node."""
        return self._generic_transform(node)

    def _transform_rows(self, rows: list[TableRow]) -> list[TableRow]:
        transformed = self._transform_children(list(rows))
        return [row for row in transformed if isinstance(row, TableRow)]

    def visit_table(self, node: Table) -> Node:
        """Transform a Table node: caption, then head, bodies and foot rows."""
        caption = self.transform(node.caption)
        return Table(
            caption=caption if isinstance(caption, Caption) else Caption(),
            col_specs=copy.deepcopy(node.col_specs),
            head=TableHead(rows=self._transform_rows(node.head.rows), attr=copy.deepcopy(node.head.attr)),
            bodies=[
                TableBody(
                    rows=self._transform_rows(body.rows),
                    head_rows=self._transform_rows(body.head_rows),
                    row_head_columns=body.row_head_columns,
                    attr=copy.deepcopy(body.attr),
                )
                for body in node.bodies
            ],
            foot=TableFoot(rows=self._transform_rows(node.foot.rows), attr=copy.deepcopy(node.foot.attr)),
            attr=copy.deepcopy(node.attr),
        )

    def visit_table_row(self, node: TableRow) -> Node:
        """Transform a TableRow node."""
        transformed = self._transform_children(list(node.cells))
        cells = [cell for cell in transformed if isinstance(cell, TableCell)]
        return TableRow(cells=cells, attr=copy.deepcopy(node.attr))

    def visit_table_cell(self, node: TableCell) -> Node:
        """Transform a TableCell node."""
        return TableCell(
            children=self._transform_children(node.children),
            attr=copy.deepcopy(node.attr),
            alignment=copy.deepcopy(node.alignment),
            row_span=node.row_span,
            col_span=node.col_span,
        )

    def visit_figure(self, node: Figure) -> Node:
        """Transform a Figure node."""
        caption = self.transform(node.caption)
        return Figure(
            caption=caption if isinstance(caption, Caption) else Caption(),
            children=self._transform_children(node.children),
            attr=copy.deepcopy(node.attr),
        )

    def visit_caption(self, node: Caption) -> Node:
        """Transform a Caption node."""
        return Caption(
            short=self.transform_inline_sequence(node.short) if node.short is not None else None,
            children=self._transform_children(node.children),
        )

    def visit_raw_block(self, node: RawBlock) -> Node:
        """Transform a RawBlock node."""
        return RawBlock(format=node.format, content=node.content)

    def visit_opaque_block(self, node: OpaqueBlock) -> Node:
        """Copy an OpaqueBlock node; its element is never looked into."""
        return OpaqueBlock(element=copy.deepcopy(node.element))

    def visit_text(self, node: Text) -> Node:
        """Transform a Text node."""
        return Text(content=node.content)

    def visit_space(self, node: Space) -> Node:
        """Transform a Space node."""
        return Space()

    def visit_soft_break(self, node: SoftBreak) -> Node:
        """Transform a SoftBreak node."""
        return SoftBreak()

    def visit_span(self, node: Span) -> Node:
        """Transform a Span node."""
        return Span(attr=copy.deepcopy(node.attr), content=self.transform_inline_sequence(node.content))

    def visit_raw_inline(self, node: RawInline) -> Node:
        """Transform a RawInline node."""
        return RawInline(format=node.format, content=node.content)

    def visit_emphasis(self, node: Emphasis) -> Node:
        """Transform an Emphasis node."""
        return self._generic_transform(node)

    def visit_strong(self, node: Strong) -> Node:
        """Transform a Strong node."""
        return self._generic_transform(node)

    def visit_underline(self, node: Underline) -> Node:
        """Transform an Underline node."""
        return self._generic_transform(node)

    def visit_strikethrough(self, node: Strikethrough) -> Node:
        """Transform a Strikethrough node."""
        return self._generic_transform(node)

    def visit_superscript(self, node: Superscript) -> Node:
        """Transform a Superscript node."""
        return self._generic_transform(node)

    def visit_subscript(self, node: Subscript) -> Node:
        """Transform a Subscript node."""
        return self._generic_transform(node)

    def visit_small_caps(self, node: SmallCaps) -> Node:
        """Transform a SmallCaps node."""
        return self._generic_transform(node)

    def visit_quoted(self, node: Quoted) -> Node:
        """Transform a Quoted node."""
        return self._generic_transform(node)

    def _transform_citation(self, citation: Citation) -> Citation:
        return Citation(
            citation_id=citation.citation_id,
            prefix=self.transform_inline_sequence(citation.prefix),
            suffix=self.transform_inline_sequence(citation.suffix),
            mode=copy.deepcopy(citation.mode),
            note_num=citation.note_num,
            hash=citation.hash,
        )

    def visit_cite(self, node: Cite) -> Node:
        """Transform a Cite node, including each citation's prefix and suffix."""
        return Cite(
            citations=[self._transform_citation(citation) for citation in node.citations],
            content=self.transform_inline_sequence(node.content),
        )

    def visit_link(self, node: Link) -> Node:
        """Transform a Link node."""
        return Link(
            url=node.url,
            content=self.transform_inline_sequence(node.content),
            title=node.title,
            attr=copy.deepcopy(node.attr),
        )

    def visit_image(self, node: Image) -> Node:
        """Transform an Image node; its alt text is an inline sequence."""
        return Image(
            url=node.url,
            content=self.transform_inline_sequence(node.content),
            title=node.title,
            attr=copy.deepcopy(node.attr),
        )

    def visit_note(self, node: Note) -> Node:
        """Transform a Note node."""
        return self._generic_transform(node)

    def visit_opaque_inline(self, node: OpaqueInline) -> Node:
        """Copy an OpaqueInline node; its element is never looked into."""
        return OpaqueInline(element=copy.deepcopy(node.element))
