"""Property-based tests for inline marker detection.

This test module uses Hypothesis to generate prose around TODO annotations
and checks the splitter against properties that must hold for any input.

Test Coverage:
- Sequences without the marker come back unchanged
- Text around a single annotation is preserved exactly
- Balanced inner parentheses never end an annotation early
- The transform never modifies its input
"""

import copy
import re

import pytest
from hypothesis import given
from hypothesis import strategies as st
from utils import words

from todofilter.ast import Attr, Span, Text, extract_text
from todofilter.formats import select_format
from todofilter.transforms.markers import detect_and_split, find_marker
from todofilter.transforms.todo import detect_todo_markers

_PROSE_ALPHABET = list("abcTODO019 .,;:!?-\n")

prose = st.text(alphabet=_PROSE_ALPHABET, max_size=40)
prose_with_parens = st.text(alphabet=_PROSE_ALPHABET + ["(", ")"], max_size=40)


def _normalize(text: str) -> str:
    return re.sub(r"\s+", " ", text)


def _sentinel(content):
    return Span(attr=Attr(classes=["sentinel"]), content=content)


@st.composite
def balanced(draw, depth=0):
    """Text whose parentheses are balanced."""
    parts = draw(st.lists(prose, min_size=1, max_size=3))
    if depth < 3 and draw(st.booleans()):
        parts.insert(1, "(" + draw(balanced(depth + 1)) + ")")
    return "".join(parts)


@pytest.mark.unit
@pytest.mark.fuzzing
class TestMarkerFuzzing:
    """Property-based tests for the splitter."""

    @given(prose_with_parens)
    def test_no_marker_is_no_op(self, text) -> None:
        """Test that sequences without the marker are returned unchanged."""
        if "(TODO" in text:
            text = text.replace("(TODO", "(todo")
        inlines = words(text)

        assert detect_and_split(inlines, _sentinel) == inlines
        assert detect_todo_markers(select_format("html"), inlines) == inlines

    @given(prose, prose, prose)
    def test_text_around_annotation_preserved(self, before, body, after) -> None:
        """Test that prefix and suffix text equals the input minus the annotation."""
        annotation = "(TODO" + body + ")"
        result = detect_and_split(words(before + annotation + after), _sentinel)

        rendered = [node for node in result if isinstance(node, Span)]
        others = [node for node in result if not isinstance(node, Span)]
        assert len(rendered) == 1
        assert extract_text(rendered[0].content) == _normalize(annotation)
        assert extract_text(others) == _normalize(before) + _normalize(after)

    @given(balanced(), prose)
    def test_balanced_parentheses_stay_inside(self, body, after) -> None:
        """Test that the annotation ends at the parenthesis matching its opener."""
        annotation = "(TODO " + body + ")"
        match = find_marker([Text(content=annotation + after)])

        assert match is not None
        assert match.terminated
        assert match.content == [Text(content=annotation)]
        assert (match.suffix.content if match.suffix else "") == after

    @given(prose, balanced())
    def test_unbalanced_runs_to_end(self, before, body) -> None:
        """Test that a marker that never closes consumes the rest of the sequence."""
        inlines = words(before + "(TODO (" + body)
        match = find_marker(inlines)

        assert match is not None
        assert not match.terminated
        assert match.suffix is None
        assert match.resume_index == len(inlines)

    @given(prose, balanced(), prose)
    def test_input_never_modified(self, before, body, after) -> None:
        """Test that the transform leaves its input untouched."""
        inlines = words(before + "(TODO " + body + ")" + after)
        snapshot = copy.deepcopy(inlines)
        detect_todo_markers(select_format("latex"), inlines)

        assert inlines == snapshot
