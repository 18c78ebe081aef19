#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/todofilter/transforms/__init__.py
"""Document transforms.

- markers: inline ``(TODO ...)`` detection and splitting
- render: format-specific wrappers for annotations and TODO blocks
- todo: the TODO filter transform and its entry points
"""

from todofilter.transforms.markers import MarkerMatch, detect_and_split, find_marker, split_text
from todofilter.transforms.render import render_block, render_inline
from todofilter.transforms.todo import (
    TodoFilterTransform,
    TodoStats,
    apply_todo_filter,
    classify_block,
    detect_todo_markers,
    is_todo_block,
    rewrite_document,
)

__all__ = [
    "MarkerMatch",
    "TodoFilterTransform",
    "TodoStats",
    "apply_todo_filter",
    "classify_block",
    "detect_and_split",
    "detect_todo_markers",
    "find_marker",
    "is_todo_block",
    "render_block",
    "render_inline",
    "rewrite_document",
    "split_text",
]
