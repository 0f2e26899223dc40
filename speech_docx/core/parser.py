"""Markup tree → styled runs per paragraph.

WHY: Word documents store formatting per run, not as nested elements.
The editor, however, can produce any nesting of bold, underline, and
neutral wrappers ("<u><span><strong>x</strong></span></u>"). Every leaf
must end up as a run whose flags reflect all of its styling ancestors,
with paragraph text left untouched.

HOW: For each paragraph element, walk its subtree depth-first and thread
an explicit StyleContext down the recursion. Bold/underline elements
switch their flag on for the whole subtree; every other element passes
through unchanged. Text leaves become runs with the current context.

RULES:
- A leaf's flags are the inclusive-OR of its ancestors' up to the paragraph
- Flags never switch off inside a subtree (monotonic)
- Unknown element kinds are transparent, never an error
- Empty text leaves produce no run
- A paragraph without text yields exactly one " " run
- A document without paragraphs yields one such placeholder paragraph
"""

from __future__ import annotations

import logging
from typing import List

from speech_docx.config import EMPTY_RUN_TEXT
from speech_docx.core.ir import Paragraph, Run, StyleContext
from speech_docx.core.markup import MarkupNode, NodeKind, iter_paragraphs, parse_html

logger = logging.getLogger(__name__)


def _placeholder_paragraph() -> Paragraph:
    return Paragraph(runs=[Run(text=EMPTY_RUN_TEXT)])


class RichTextParser:
    """Converts a markup tree into Paragraph/Run IR for exporters.

    Stateless; one instance can be shared across exports.
    """

    def parse(self, tree: MarkupNode) -> List[Paragraph]:
        """Flatten a markup tree into styled paragraphs.

        Args:
            tree: Document (or any) node from the editor's content.

        Returns:
            One Paragraph per paragraph element in document order, never
            an empty list.
        """
        paragraphs = [self.parse_paragraph(node) for node in iter_paragraphs(tree)]
        if not paragraphs:
            logger.debug("Markup has no paragraph elements; emitting placeholder")
            return [_placeholder_paragraph()]
        return paragraphs

    def parse_paragraph(self, node: MarkupNode) -> Paragraph:
        """Flatten one paragraph element into runs."""
        runs: List[Run] = []
        for child in node.children:
            self._walk(child, StyleContext(), runs)
        if not runs:
            return _placeholder_paragraph()
        return Paragraph(runs=runs)

    def _walk(self, node: MarkupNode, context: StyleContext, runs: List[Run]) -> None:
        if node.kind == NodeKind.TEXT:
            if node.text:
                runs.append(context.run(node.text))
            return

        if node.kind == NodeKind.BOLD:
            context = context.with_bold()
        elif node.kind == NodeKind.UNDERLINE:
            context = context.with_underline()

        for child in node.children:
            self._walk(child, context, runs)


def parse_html_document(source: str) -> List[Paragraph]:
    """Parse editor HTML straight into Paragraph/Run IR."""
    return RichTextParser().parse(parse_html(source))
