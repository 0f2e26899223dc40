"""In-memory rich-text model: the editor the session writes into.

WHY: The dictation session publishes merged text into an editable
rich-text model, and export reads the edited markup back out. Tests, the
CLI, and the HTTP API all need that model without a browser, so it is
implemented here with the same surface a WYSIWYG editor offers.

HOW: Content is held as a MarkupNode document. set_content() accepts
either a tree or an HTML string. Both are normalized so loose inline
content (e.g. recognized text concatenated onto HTML) sits inside a
paragraph. Bold/underline toggles
set the marks applied to text typed through insert_text().

RULES:
- get_content() returns a copy; callers cannot mutate editor state
- is_empty() is True when the document holds no text at all
- clear() removes all content and leaves one empty paragraph
- Toggling a style never rewrites existing text
"""

from __future__ import annotations

import logging
from typing import Set, Union

from speech_docx.core.markup import (
    MarkupNode,
    NodeKind,
    clone,
    document,
    element,
    iter_text,
    last_paragraph,
    normalize,
    parse_html,
    plain_text,
    render_html,
    text_node,
)

logger = logging.getLogger(__name__)

STYLE_BOLD = "bold"
STYLE_UNDERLINE = "underline"
STYLES = (STYLE_BOLD, STYLE_UNDERLINE)


class RichTextEditor:
    """Editable rich-text document with bold/underline marks."""

    def __init__(self, content: Union[MarkupNode, str, None] = None) -> None:
        self._doc = document(element(NodeKind.PARAGRAPH))
        self._active: Set[str] = set()
        self.cursor_at_end = False
        if content:
            self.set_content(content)

    # -- content -----------------------------------------------------------

    def get_content(self) -> MarkupNode:
        return clone(self._doc)

    def set_content(self, content: Union[MarkupNode, str]) -> None:
        """Replace the whole document.

        Args:
            content: A markup tree, or HTML/plain text to parse.
        """
        if isinstance(content, MarkupNode):
            doc = clone(content)
            if doc.kind != NodeKind.DOCUMENT:
                doc = document(doc)
            normalize(doc)
        else:
            doc = parse_html(content)
        if not doc.children:
            doc.children.append(element(NodeKind.PARAGRAPH))
        self._doc = doc
        self.cursor_at_end = False

    def get_html(self) -> str:
        return render_html(self._doc)

    def get_text(self) -> str:
        return plain_text(self._doc)

    def is_empty(self) -> bool:
        return not any(iter_text(self._doc))

    def clear(self) -> None:
        self._doc = document(element(NodeKind.PARAGRAPH))
        self.cursor_at_end = False
        logger.debug("Editor cleared")

    def focus_end(self) -> None:
        self.cursor_at_end = True

    # -- styles ------------------------------------------------------------

    def toggle_bold(self) -> bool:
        return self._toggle(STYLE_BOLD)

    def toggle_underline(self) -> bool:
        return self._toggle(STYLE_UNDERLINE)

    def toggle(self, style: str) -> bool:
        """Toggle a style by name; raises ValueError for unknown styles."""
        if style not in STYLES:
            raise ValueError(
                "Unknown style '{}'. Available: {}".format(style, ", ".join(STYLES))
            )
        return self._toggle(style)

    def is_active(self, style: str) -> bool:
        return style in self._active

    def _toggle(self, style: str) -> bool:
        if style in self._active:
            self._active.discard(style)
        else:
            self._active.add(style)
        return style in self._active

    # -- typing ------------------------------------------------------------

    def insert_text(self, text: str) -> None:
        """Type text at the end of the document using the active marks.

        Text is appended to the last paragraph, wrapped in <u> and then
        <strong> as the active marks require.
        """
        if not text:
            return
        node = text_node(text)
        if STYLE_UNDERLINE in self._active:
            node = element(NodeKind.UNDERLINE, node)
        if STYLE_BOLD in self._active:
            node = element(NodeKind.BOLD, node)

        target = last_paragraph(self._doc)
        if target is None:
            target = self._doc.append(element(NodeKind.PARAGRAPH))
        target.append(node)
        self.cursor_at_end = True
