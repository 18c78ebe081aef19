"""todofilter - A pandoc filter that surfaces TODO annotations in rendered documents.

Authors leave notes in the prose, either inline::

    The lexer is greedy (TODO check this against the grammar (section 1.2)).

or as a whole paragraph starting with ``TODO``. The filter rewrites both into
markup that the target format can style: highlighted spans with a marker for
HTML, ``\\todo{...}`` notes for LaTeX and Beamer.

Key Features
------------
- Balanced-parenthesis matching across pandoc's word-split inline runs
- Format-specific rendering selected once from pandoc's format argument
- Pure tree rewrite; the input document is never modified
- Marker literals, class names and TeX snippets configurable via TOML/YAML/JSON

Basic usage
-----------
As a filter::

    $ pandoc --filter todofilter -o out.html in.md

From Python:

    >>> from todofilter import apply_todo_filter, json_to_ast, ast_to_json
    >>> doc = json_to_ast(pandoc_json)
    >>> print(ast_to_json(apply_todo_filter(doc, "html")))

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "todofilter requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from todofilter.ast import Document, ast_to_json, json_to_ast  # noqa: E402
from todofilter.exceptions import (  # noqa: E402
    ConfigError,
    ParsingError,
    RenderingError,
    TodoFilterError,
    TransformError,
    ValidationError,
)
from todofilter.formats import FormatKind, TargetFormat, select_format  # noqa: E402
from todofilter.options import TodoFilterOptions  # noqa: E402
from todofilter.transforms.todo import (  # noqa: E402
    TodoFilterTransform,
    apply_todo_filter,
    classify_block,
    detect_todo_markers,
    rewrite_document,
)

__all__ = [
    "__version__",
    # Tree and codec
    "Document",
    "ast_to_json",
    "json_to_ast",
    # Formats and options
    "FormatKind",
    "TargetFormat",
    "select_format",
    "TodoFilterOptions",
    # Filter
    "TodoFilterTransform",
    "apply_todo_filter",
    "classify_block",
    "detect_todo_markers",
    "rewrite_document",
    # Exceptions
    "ConfigError",
    "ParsingError",
    "RenderingError",
    "TodoFilterError",
    "TransformError",
    "ValidationError",
]
