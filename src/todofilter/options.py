#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/todofilter/options.py
"""Options for the TODO annotation filter.

The defaults reproduce the fixed literals the filter has always used; a
config file may override them (see :mod:`todofilter.config`).
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from todofilter.constants import (
    DEFAULT_BLOCK_PREFIX,
    DEFAULT_INLINE_MARKER,
    DEFAULT_LATEX_BLOCK_CLOSE,
    DEFAULT_LATEX_BLOCK_OPEN,
    DEFAULT_LATEX_INLINE_CLOSE,
    DEFAULT_LATEX_INLINE_OPEN,
    DEFAULT_MARKER_CLASS,
    DEFAULT_MARKER_SYMBOL,
    DEFAULT_TODO_CLASS,
)
from todofilter.exceptions import ValidationError


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class TodoFilterOptions(CloneFrozenMixin):
    """Configuration for TODO detection and rendering.

    Parameters
    ----------
    inline_marker : str, default = "(TODO"
        Text that opens an inline annotation. Must start with ``(``; the
        annotation runs to the matching ``)``.
    block_prefix : str, default = "TODO"
        Prefix of a block's first text token that marks the whole block
    todo_class : str, default = "TODO"
        Class put on the spans and divs wrapping annotations
    marker_class : str, default = "TODO-marker"
        Class of the span holding the marker symbol (non-TeX output)
    marker_symbol : str, default = "*"
        Visible symbol placed after an inline annotation (non-TeX output)
    latex_inline_open, latex_inline_close : str
        Raw TeX around an inline annotation
    latex_block_open, latex_block_close : str
        Raw TeX around a TODO block

    Examples
    --------
    >>> options = TodoFilterOptions(inline_marker="(FIXME", block_prefix="FIXME")

    """

    inline_marker: str = field(
        default=DEFAULT_INLINE_MARKER,
        metadata={"help": "Text opening an inline annotation; must start with '('", "importance": "core"},
    )
    block_prefix: str = field(
        default=DEFAULT_BLOCK_PREFIX,
        metadata={"help": "Prefix of the first word that marks a whole block", "importance": "core"},
    )
    todo_class: str = field(
        default=DEFAULT_TODO_CLASS,
        metadata={"help": "Class of the wrapping span/div", "importance": "advanced"},
    )
    marker_class: str = field(
        default=DEFAULT_MARKER_CLASS,
        metadata={"help": "Class of the marker symbol span", "importance": "advanced"},
    )
    marker_symbol: str = field(
        default=DEFAULT_MARKER_SYMBOL,
        metadata={"help": "Symbol shown after inline annotations", "importance": "advanced"},
    )
    latex_inline_open: str = field(
        default=DEFAULT_LATEX_INLINE_OPEN,
        metadata={"help": "Raw TeX before an inline annotation", "importance": "advanced"},
    )
    latex_inline_close: str = field(
        default=DEFAULT_LATEX_INLINE_CLOSE,
        metadata={"help": "Raw TeX after an inline annotation", "importance": "advanced"},
    )
    latex_block_open: str = field(
        default=DEFAULT_LATEX_BLOCK_OPEN,
        metadata={"help": "Raw TeX before a TODO block", "importance": "advanced"},
    )
    latex_block_close: str = field(
        default=DEFAULT_LATEX_BLOCK_CLOSE,
        metadata={"help": "Raw TeX after a TODO block", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate option values."""
        for option in fields(self):
            value = getattr(self, option.name)
            if not isinstance(value, str):
                raise ValidationError(
                    f"Option '{option.name}' must be a string, got {type(value).__name__}",
                    parameter_name=option.name,
                    parameter_value=value,
                )

        if not self.inline_marker.startswith("(") or len(self.inline_marker) < 2:
            raise ValidationError(
                "inline_marker must start with '(' followed by at least one character",
                parameter_name="inline_marker",
                parameter_value=self.inline_marker,
            )
        if not self.block_prefix:
            raise ValidationError(
                "block_prefix must not be empty", parameter_name="block_prefix", parameter_value=self.block_prefix
            )
        if not self.todo_class:
            raise ValidationError(
                "todo_class must not be empty", parameter_name="todo_class", parameter_value=self.todo_class
            )

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> TodoFilterOptions:
        """Build options from a config mapping.

        Keys may use dashes or underscores (``inline-marker`` or
        ``inline_marker``).

        Raises
        ------
        ValidationError
            On unknown keys or invalid values

        """
        known = {option.name for option in fields(cls)}
        normalized: dict[str, Any] = {}
        for key, value in values.items():
            name = str(key).replace("-", "_")
            if name not in known:
                raise ValidationError(
                    f"Unknown option '{key}'. Valid options: {', '.join(sorted(known))}",
                    parameter_name=str(key),
                    parameter_value=value,
                )
            normalized[name] = value
        return cls().create_updated(**normalized)
