#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for format-specific rendering of TODO annotations."""
import pytest
from utils import words

from todofilter.ast import Attr, Div, Paragraph, RawBlock, RawInline, Span, Text
from todofilter.formats import select_format
from todofilter.options import TodoFilterOptions
from todofilter.transforms.render import render_block, render_inline


@pytest.mark.unit
class TestRenderInline:
    """Test rendering of inline annotations."""

    def test_html(self) -> None:
        """Test the highlighted span with a marker for html."""
        content = words("(TODO b)")
        node = render_inline(select_format("html"), content)

        assert node == Span(
            attr=Attr(),
            content=[
                Span(attr=Attr(classes=["TODO"]), content=words("(TODO b)")),
                Span(attr=Attr(classes=["TODO-marker"]), content=[Text(content="*")]),
            ],
        )

    @pytest.mark.parametrize("format_name", ["latex", "beamer"])
    def test_tex(self, format_name) -> None:
        """Test the raw todo command for TeX-based formats."""
        node = render_inline(select_format(format_name), words("(TODO b)"))

        assert node == Span(
            attr=Attr(classes=["TODO"]),
            content=[
                RawInline(format=format_name, content="\\todo{"),
                *words("(TODO b)"),
                RawInline(format=format_name, content="}"),
            ],
        )

    @pytest.mark.parametrize("format_name", ["docx", "markdown", "HTML", ""])
    def test_other_formats_use_html_shape(self, format_name) -> None:
        """Test that unrecognized formats get the span-with-marker shape."""
        node = render_inline(select_format(format_name), words("(TODO b)"))

        assert isinstance(node, Span)
        assert node.attr == Attr()
        assert [child.attr.classes for child in node.content] == [["TODO"], ["TODO-marker"]]

    def test_custom_options(self) -> None:
        """Test that class names and the marker symbol are configurable."""
        options = TodoFilterOptions(todo_class="note", marker_class="note-mark", marker_symbol="†")
        node = render_inline(select_format("html"), [Text(content="(TODO)")], options)

        assert node.content[0].attr.classes == ["note"]
        assert node.content[1] == Span(attr=Attr(classes=["note-mark"]), content=[Text(content="†")])

    def test_custom_tex_snippets(self) -> None:
        """Test configurable raw TeX around the annotation."""
        options = TodoFilterOptions(latex_inline_open="\\todo[color=red]{")
        node = render_inline(select_format("latex"), [Text(content="(TODO)")], options)

        assert node.content[0] == RawInline(format="latex", content="\\todo[color=red]{")

    def test_content_list_not_shared(self) -> None:
        """Test that the html renderer does not reuse the caller's list."""
        content = [Text(content="(TODO)")]
        node = render_inline(select_format("html"), content)

        assert node.content[0].content is not content


@pytest.mark.unit
class TestRenderBlock:
    """Test rendering of TODO blocks."""

    def test_html(self) -> None:
        """Test that html wraps the block in a TODO div."""
        block = Paragraph(content=words("TODO: write this"))
        node = render_block(select_format("html"), block)

        assert node == Div(attr=Attr(classes=["TODO"]), children=[block])

    @pytest.mark.parametrize("format_name", ["latex", "beamer"])
    def test_tex(self, format_name) -> None:
        """Test the inline todo environment for TeX-based formats."""
        block = Paragraph(content=words("TODO: write this"))
        node = render_block(select_format(format_name), block)

        assert node == Div(
            attr=Attr(classes=["TODO"]),
            children=[
                RawBlock(format=format_name, content="\\todo[inline]{"),
                block,
                RawBlock(format=format_name, content="}"),
            ],
        )

    @pytest.mark.parametrize("format_name", ["docx", "markdown", "Latex"])
    def test_other_formats_unchanged(self, format_name) -> None:
        """Test that other formats return the block itself."""
        block = Paragraph(content=words("TODO: write this"))

        assert render_block(select_format(format_name), block) is block
