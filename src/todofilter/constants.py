#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the todofilter library.

Constants are organized by category:
1. Marker Literals - The text patterns the filter looks for
2. Rendering Defaults - Class names and raw markup emitted around TODOs
3. Pandoc JSON - Interchange format settings
4. Configuration Discovery - Config file names and environment variables
"""

from __future__ import annotations

# =============================================================================
# Marker Literals
# =============================================================================

# Inline annotation opener; the closing parenthesis is found by balancing.
DEFAULT_INLINE_MARKER = "(TODO"

# Prefix of the first text token that turns a whole paragraph into a TODO block.
DEFAULT_BLOCK_PREFIX = "TODO"

# =============================================================================
# Rendering Defaults
# =============================================================================

DEFAULT_TODO_CLASS = "TODO"
DEFAULT_MARKER_CLASS = "TODO-marker"
DEFAULT_MARKER_SYMBOL = "*"

DEFAULT_LATEX_INLINE_OPEN = "\\todo{"
DEFAULT_LATEX_INLINE_CLOSE = "}"
DEFAULT_LATEX_BLOCK_OPEN = "\\todo[inline]{"
DEFAULT_LATEX_BLOCK_CLOSE = "}"

# =============================================================================
# Pandoc JSON
# =============================================================================

# Written when a document built in Python carries no version of its own.
DEFAULT_PANDOC_API_VERSION: tuple[int, ...] = (1, 23, 1)
PANDOC_API_VERSION_KEY = "pandoc-api-version"

DEFAULT_JSON_ENSURE_ASCII = False

# =============================================================================
# Configuration Discovery
# =============================================================================

CONFIG_ENV_VAR = "TODOFILTER_CONFIG"
CONFIG_FILENAMES = [".todofilter.toml", ".todofilter.yaml", ".todofilter.yml", ".todofilter.json"]
PYPROJECT_TOOL_SECTION = "todofilter"
