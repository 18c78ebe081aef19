#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/todofilter/formats.py
"""Target output format selection.

Pandoc passes the name of the output format to every filter. The name is
resolved once into a ``TargetFormat`` and handed to the renderers, which
branch on ``TargetFormat.kind`` only.

Examples
--------
    >>> select_format("latex").kind
    <FormatKind.LATEX: 'latex'>
    >>> select_format("docx")
    TargetFormat(kind=<FormatKind.OTHER: 'other'>, name='docx')

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FormatKind(Enum):
    """Output formats with dedicated rendering, plus a catch-all."""

    HTML = "html"
    LATEX = "latex"
    BEAMER = "beamer"
    OTHER = "other"


_RECOGNIZED_FORMATS: dict[str, FormatKind] = {
    "html": FormatKind.HTML,
    "latex": FormatKind.LATEX,
    "beamer": FormatKind.BEAMER,
}


@dataclass(frozen=True)
class TargetFormat:
    """Resolved output format.

    Parameters
    ----------
    kind : FormatKind
        Rendering branch to take
    name : str
        The format name as given by the caller; used as the format of
        emitted raw markup

    """

    kind: FormatKind
    name: str

    @property
    def is_tex(self) -> bool:
        """True for LaTeX-based outputs (``latex`` and ``beamer``)."""
        return self.kind in (FormatKind.LATEX, FormatKind.BEAMER)


def select_format(raw: str) -> TargetFormat:
    """Resolve a format name.

    Matching is exact. Any name other than ``html``, ``latex`` or ``beamer``
    maps to ``FormatKind.OTHER`` and never raises.

    Parameters
    ----------
    raw : str
        Format name, e.g. the first argument pandoc passes to a filter

    Returns
    -------
    TargetFormat
        Resolved format

    """
    return TargetFormat(kind=_RECOGNIZED_FORMATS.get(raw, FormatKind.OTHER), name=raw)
