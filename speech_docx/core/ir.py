"""Intermediate representation for styled rich text.

WHY: The editor stores nested markup where the same text can be wrapped
in any mix of bold, underline, and neutral elements. Document exporters
need the opposite shape: a flat list of paragraphs, each a flat list of
runs with explicit style flags. The IR is that flat shape, shared by
every exporter.

HOW: Three dataclasses:
  Run          : a contiguous span of text sharing one style
  Paragraph    : an ordered list of runs
  StyleContext : the bold/underline flags inherited while walking markup

RULES:
- Run.text is never empty (the parser skips empty leaves)
- Joining Run.text across a paragraph reproduces its plain text exactly
- Style is additive metadata and never alters text
- StyleContext is immutable; descending returns a new context
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List


@dataclass(frozen=True)
class Run:
    """A contiguous span of text sharing one style."""

    text: str
    bold: bool = False
    underline: bool = False


@dataclass
class Paragraph:
    """An ordered sequence of runs forming one document paragraph."""

    runs: List[Run] = field(default_factory=list)

    @property
    def text(self) -> str:
        """Plain-text content of the paragraph (runs joined in order)."""
        return "".join(run.text for run in self.runs)


@dataclass(frozen=True)
class StyleContext:
    """Style flags accumulated from ancestor elements during traversal.

    WHY: A leaf's style is the inclusive-OR of every bold/underline
    ancestor up to its paragraph. Threading that state down the recursion
    avoids walking back up the tree from every leaf.

    RULES:
    - Flags only ever switch on while descending (monotonic)
    - Siblings each start from their parent's context
    """

    bold: bool = False
    underline: bool = False

    def with_bold(self) -> "StyleContext":
        return replace(self, bold=True)

    def with_underline(self) -> "StyleContext":
        return replace(self, underline=True)

    def run(self, text: str) -> Run:
        """Build a run carrying this context's flags."""
        return Run(text=text, bold=self.bold, underline=self.underline)


def document_text(paragraphs: List[Paragraph]) -> str:
    """Plain text of a parsed document, one line per paragraph."""
    return "\n".join(p.text for p in paragraphs)
