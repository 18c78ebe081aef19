#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for pandoc JSON serialization."""
import json

import pytest
from utils import citation_json, pandoc_document, para, str_words, table_json, words

from todofilter.ast import (
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
    Note,
    OpaqueBlock,
    OpaqueInline,
    Paragraph,
    Plain,
    Quoted,
    RawBlock,
    RawInline,
    SmallCaps,
    Span,
    Strikethrough,
    TableCell,
    Text,
    ast_to_dict,
    ast_to_json,
    dict_to_ast,
    json_to_ast,
)
from todofilter.ast.serialization import dict_to_block, dict_to_inline
from todofilter.exceptions import ParsingError


@pytest.mark.unit
class TestDecode:
    """Test decoding pandoc JSON elements."""

    def test_words(self) -> None:
        """Test Str, Space and SoftBreak."""
        doc = dict_to_ast(pandoc_document(para("a b\nc")))

        assert doc.children == [Paragraph(content=words("a b\nc"))]

    def test_span_and_attr(self) -> None:
        """Test decoding a span with identifier, classes and attributes."""
        node = dict_to_inline(
            {"t": "Span", "c": [["s1", ["a", "b"], [["data-x", "1"]]], [{"t": "Str", "c": "hi"}]]}
        )

        assert node == Span(
            attr=Attr(identifier="s1", classes=["a", "b"], attributes=[("data-x", "1")]),
            content=[Text(content="hi")],
        )

    @pytest.mark.parametrize(
        "tag,node_class",
        [("Emph", Emphasis), ("Strikeout", Strikethrough), ("SmallCaps", SmallCaps)],
    )
    def test_styled_inlines(self, tag, node_class) -> None:
        """Test inline containers that hold only inlines."""
        node = dict_to_inline({"t": tag, "c": str_words("x y")})

        assert node == node_class(content=words("x y"))

    def test_link(self) -> None:
        """Test decoding a link."""
        node = dict_to_inline(
            {"t": "Link", "c": [["", [], []], [{"t": "Str", "c": "site"}], ["https://example.com", "Title"]]}
        )

        assert node == Link(url="https://example.com", content=[Text(content="site")], title="Title")

    def test_note(self) -> None:
        """Test decoding a footnote with block content."""
        node = dict_to_inline({"t": "Note", "c": [para("TODO: cite")]})

        assert node == Note(children=[Paragraph(content=words("TODO: cite"))])

    def test_raw_inline(self) -> None:
        """Test decoding raw inline markup."""
        assert dict_to_inline({"t": "RawInline", "c": ["html", "<br>"]}) == RawInline(format="html", content="<br>")

    def test_unknown_inline_is_opaque(self) -> None:
        """Test that inlines without a node class are kept whole."""
        element = {"t": "Code", "c": [["", [], []], "f(TODO"]}
        node = dict_to_inline(element)

        assert isinstance(node, OpaqueInline)
        assert node.tag == "Code"
        assert node.element == element

    def test_blocks(self) -> None:
        """Test the block containers."""
        blocks = [
            {"t": "Header", "c": [2, ["h", [], []], [{"t": "Str", "c": "Title"}]]},
            {"t": "Plain", "c": [{"t": "Str", "c": "p"}]},
            {"t": "Div", "c": [["", ["box"], []], [para("in div")]]},
            {"t": "BlockQuote", "c": [para("quoted")]},
            {"t": "BulletList", "c": [[para("one")], [para("two")]]},
            {"t": "OrderedList", "c": [[3, {"t": "Decimal"}, {"t": "Period"}], [[para("three")]]]},
            {"t": "RawBlock", "c": ["latex", "\\newpage"]},
        ]
        doc = dict_to_ast(pandoc_document(*blocks))

        assert doc.children == [
            Heading(level=2, content=[Text(content="Title")], attr=Attr(identifier="h")),
            Plain(content=[Text(content="p")]),
            Div(attr=Attr(classes=["box"]), children=[Paragraph(content=words("in div"))]),
            BlockQuote(children=[Paragraph(content=[Text(content="quoted")])]),
            List(items=[[Paragraph(content=[Text(content="one")])], [Paragraph(content=[Text(content="two")])]]),
            List(
                items=[[Paragraph(content=[Text(content="three")])]],
                ordered=True,
                list_attributes=[3, {"t": "Decimal"}, {"t": "Period"}],
            ),
            RawBlock(format="latex", content="\\newpage"),
        ]

    def test_unknown_block_is_opaque(self) -> None:
        """Test that blocks without a node class are kept whole."""
        element = {"t": "CodeBlock", "c": [["", ["python"], []], "print('(TODO')"]}

        assert dict_to_block(element) == OpaqueBlock(element=element)

    def test_horizontal_rule_has_no_content(self) -> None:
        """Test an element with no 'c' field."""
        node = dict_to_block({"t": "HorizontalRule"})

        assert isinstance(node, OpaqueBlock)
        assert node.tag == "HorizontalRule"

    def test_deep_heading(self) -> None:
        """Test that headings below level 6 are accepted."""
        node = dict_to_block({"t": "Header", "c": [7, ["", [], []], [{"t": "Str", "c": "Deep"}]]})

        assert node == Heading(level=7, content=[Text(content="Deep")])

    def test_quoted_cite_image(self) -> None:
        """Test the inline containers with extra fields."""
        quoted = dict_to_inline({"t": "Quoted", "c": [{"t": "SingleQuote"}, str_words("a b")]})
        cite = dict_to_inline(
            {"t": "Cite", "c": [[citation_json("doe99", prefix="see", suffix="p. 3")], str_words("[see @doe99]")]}
        )
        image = dict_to_inline({"t": "Image", "c": [["img", [], []], str_words("alt text"), ["a.png", "fig:"]]})

        assert quoted == Quoted(quote_type="SingleQuote", content=words("a b"))
        assert cite == Cite(
            citations=[
                Citation(citation_id="doe99", prefix=words("see"), suffix=words("p. 3"), note_num=1, hash=0)
            ],
            content=words("[see @doe99]"),
        )
        assert image == Image(url="a.png", content=words("alt text"), title="fig:", attr=Attr(identifier="img"))

    def test_line_block_and_definition_list(self) -> None:
        """Test block containers with grouped children."""
        line_block = dict_to_block({"t": "LineBlock", "c": [str_words("one"), str_words("two lines")]})
        definitions = dict_to_block(
            {"t": "DefinitionList", "c": [[str_words("term"), [[para("first")], [para("second")]]]]}
        )

        assert line_block == LineBlock(lines=[words("one"), words("two lines")])
        assert definitions == DefinitionList(
            items=[
                (
                    DefinitionTerm(content=words("term")),
                    [
                        DefinitionDescription(children=[Paragraph(content=words("first"))]),
                        DefinitionDescription(children=[Paragraph(content=words("second"))]),
                    ],
                )
            ]
        )

    def test_table(self) -> None:
        """Test decoding a table with a caption, a header row and one body."""
        element = table_json([[para("h")]], [[[para("cell")]], [[para("more")]]], caption=[para("cap")])
        node = dict_to_block(element)

        assert node.caption == Caption(children=[Paragraph(content=words("cap"))])
        assert node.head.rows[0].cells == [TableCell(children=[Paragraph(content=words("h"))])]
        assert [row.cells[0].children for row in node.bodies[0].rows] == [
            [Paragraph(content=words("cell"))],
            [Paragraph(content=words("more"))],
        ]
        assert node.foot.rows == []
        assert len(node.all_rows) == 3

    def test_legacy_table_is_opaque(self) -> None:
        """Test that the five-field table layout of older pandoc is kept whole."""
        element = {
            "t": "Table",
            "c": [[], [{"t": "AlignDefault"}], [0.0], [[para("h")]], [[[para("(TODO x)")]]]],
        }

        assert dict_to_block(element) == OpaqueBlock(element=element)

    def test_figure(self) -> None:
        """Test decoding a figure with a short caption."""
        node = dict_to_block(
            {"t": "Figure", "c": [["f", [], []], [str_words("short"), [para("long")]], [para("body")]]}
        )

        assert node == Figure(
            caption=Caption(short=words("short"), children=[Paragraph(content=words("long"))]),
            children=[Paragraph(content=words("body"))],
            attr=Attr(identifier="f"),
        )

    def test_meta_and_version(self, sample_pandoc_json) -> None:
        """Test that meta and the API version are carried over."""
        doc = dict_to_ast(sample_pandoc_json)

        assert doc.meta == sample_pandoc_json["meta"]
        assert doc.api_version == [1, 23, 1]

    def test_json_bytes(self, sample_pandoc_json) -> None:
        """Test decoding UTF-8 bytes as read from stdin."""
        payload = json.dumps(sample_pandoc_json).encode("utf-8")

        assert json_to_ast(payload) == dict_to_ast(sample_pandoc_json)


@pytest.mark.unit
class TestDecodeErrors:
    """Test rejection of malformed payloads."""

    def test_invalid_json(self) -> None:
        """Test that invalid JSON is reported as a parsing error."""
        with pytest.raises(ParsingError) as exc_info:
            json_to_ast("{not json")

        assert exc_info.value.parsing_stage == "json"

    def test_legacy_array_form(self) -> None:
        """Test that the pre-1.18 array form is rejected."""
        with pytest.raises(ParsingError, match="Legacy"):
            dict_to_ast([{"unMeta": {}}, []])

    @pytest.mark.parametrize(
        "payload",
        [
            "just a string",
            {"meta": {}, "blocks": []},
            {"pandoc-api-version": "1.23", "meta": {}, "blocks": []},
            {"pandoc-api-version": [1, 23], "meta": [], "blocks": []},
            {"pandoc-api-version": [1, 23], "meta": {}},
        ],
    )
    def test_not_a_document(self, payload) -> None:
        """Test document-level shape checks."""
        with pytest.raises(ParsingError) as exc_info:
            dict_to_ast(payload)

        assert exc_info.value.parsing_stage == "document"

    def test_blocks_not_a_list(self) -> None:
        """Test that 'blocks' must be a list."""
        with pytest.raises(ParsingError):
            dict_to_ast({"pandoc-api-version": [1, 23], "meta": {}, "blocks": {}})

    def test_untagged_element(self) -> None:
        """Test that elements need a 't' tag."""
        with pytest.raises(ParsingError):
            dict_to_ast(pandoc_document({"c": []}))

    @pytest.mark.parametrize(
        "element",
        [
            {"t": "Header", "c": [1, ["", [], []]]},
            {"t": "Div", "c": "oops"},
            {"t": "Para", "c": None},
            {"t": "Table", "c": [["", [], []], [None, []], [], ["", [], []], [], ["", [], []]]},
            {"t": "DefinitionList", "c": [[[]]]},
            {"t": "LineBlock", "c": "line"},
        ],
    )
    def test_malformed_block_content(self, element) -> None:
        """Test that malformed element content is reported, not raised raw."""
        with pytest.raises(ParsingError):
            dict_to_block(element)

    def test_malformed_attr(self) -> None:
        """Test that attribute triples are checked."""
        with pytest.raises(ParsingError) as exc_info:
            dict_to_inline({"t": "Span", "c": [["only-id"], []]})

        assert exc_info.value.parsing_stage == "attr"


@pytest.mark.unit
class TestEncode:
    """Test encoding trees back to pandoc JSON."""

    def test_document_round_trip(self, sample_pandoc_json) -> None:
        """Test that decoding then encoding reproduces the input."""
        assert ast_to_dict(dict_to_ast(sample_pandoc_json)) == sample_pandoc_json

    def test_deep_heading_round_trip(self) -> None:
        """Test a level 7 heading, as pandoc's docx reader can produce."""
        document = pandoc_document({"t": "Header", "c": [7, ["deep", [], []], str_words("Heading 7")]})

        assert ast_to_dict(dict_to_ast(document)) == document

    def test_structured_containers_round_trip(self) -> None:
        """Test that quotes, citations, images, line blocks, definitions, tables and figures survive."""
        document = pandoc_document(
            {
                "t": "Para",
                "c": [
                    {"t": "Quoted", "c": [{"t": "DoubleQuote"}, str_words("q")]},
                    {"t": "Cite", "c": [[citation_json("k", suffix="p. 1")], str_words("[@k, p. 1]")]},
                    {"t": "Image", "c": [["", ["wide"], [["width", "50%"]]], str_words("alt"), ["i.png", ""]]},
                ],
            },
            {"t": "LineBlock", "c": [str_words("a"), []]},
            {"t": "DefinitionList", "c": [[str_words("t"), [[para("d")]]], [str_words("empty"), []]]},
            table_json([[para("h1")], []], [[[para("c1")], [{"t": "Plain", "c": str_words("c2")}]]]),
            {"t": "Figure", "c": [["", [], []], [None, [para("cap")]], [para("img")]]},
        )

        assert ast_to_dict(dict_to_ast(document)) == document

    def test_structure_parts_not_standalone(self) -> None:
        """Test that table cells cannot be encoded outside their table."""
        with pytest.raises(TypeError, match="part of its parent"):
            ast_to_dict(TableCell())

    def test_rendered_nodes(self) -> None:
        """Test encoding of the nodes the filter produces."""
        node = Div(
            attr=Attr(classes=["TODO"]),
            children=[
                RawBlock(format="latex", content="\\todo[inline]{"),
                Paragraph(content=[Span(content=[RawInline(format="latex", content="}")])]),
            ],
        )

        assert ast_to_dict(node) == {
            "t": "Div",
            "c": [
                ["", ["TODO"], []],
                [
                    {"t": "RawBlock", "c": ["latex", "\\todo[inline]{"]},
                    {"t": "Para", "c": [{"t": "Span", "c": [["", [], []], [{"t": "RawInline", "c": ["latex", "}"]}]]}]},
                ],
            ],
        }

    def test_json_keeps_unicode(self) -> None:
        """Test that non-ASCII text is written as is."""
        doc = Document(children=[Plain(content=[Text(content="naïve †")])])

        assert "naïve †" in ast_to_json(doc)
        assert "\\u" in ast_to_json(doc, ensure_ascii=True)

    def test_compact_by_default(self) -> None:
        """Test that output has no indentation unless asked."""
        doc = Document(children=[Plain(content=[Text(content="x")])])

        assert "\n" not in ast_to_json(doc)
        assert "\n" in ast_to_json(doc, indent=2)
