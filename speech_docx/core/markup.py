"""Markup tree model plus an HTML reader/writer for the editor's subset.

WHY: The rich-text editor exchanges content as HTML (`<p>`, `<strong>`,
`<u>`, ...) and the session builds new content by concatenating HTML
with recognized text. The parser and exporters need a typed tree instead
of strings, with node kinds that say what each element means for styling.

HOW: MarkupNode is a plain recursive dataclass tagged with a NodeKind.
parse_html() feeds the stdlib HTMLParser and builds the tree on a stack,
recovering from unbalanced tags instead of failing. normalize() wraps
inline content that ends up directly under the document (e.g.
"<p>old</p>new text") or inside a div/li/blockquote in an implicit
paragraph, the same way the editor schema does.
render_html() is the inverse. runs_to_markup() turns parsed paragraphs
back into a tree.

RULES:
- <p> → PARAGRAPH, <strong>/<b> → BOLD, <u> → UNDERLINE
- Any other element → PLAIN (tag kept for rendering), never an error
- Character references are decoded on read and text is escaped on write
- Whitespace-only inline text between blocks is dropped, not wrapped
- Stray end tags are ignored; unclosed tags close at end of input
- A <p> or block start tag implicitly closes an open <p>
- Headings and tables are not paragraphs; their text is not exported
"""

from __future__ import annotations

import copy
import enum
import html
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import Iterator, List, Optional

from speech_docx.core.ir import Paragraph


class NodeKind(str, enum.Enum):
    """Kinds of nodes in a markup tree.

    RULES:
    - DOCUMENT is only ever the root
    - TEXT nodes are leaves and carry text; all other kinds carry children
    """

    DOCUMENT = "document"
    PARAGRAPH = "paragraph"
    BOLD = "bold"
    UNDERLINE = "underline"
    PLAIN = "plain"
    TEXT = "text"


@dataclass
class MarkupNode:
    """One node of a rich-text markup tree."""

    kind: NodeKind
    text: str = ""
    tag: str = ""
    children: List["MarkupNode"] = field(default_factory=list)

    def append(self, child: "MarkupNode") -> "MarkupNode":
        self.children.append(child)
        return child


# Element names that carry styling or paragraph meaning.
_TAG_KINDS = {
    "p": NodeKind.PARAGRAPH,
    "strong": NodeKind.BOLD,
    "b": NodeKind.BOLD,
    "u": NodeKind.UNDERLINE,
}

_DEFAULT_TAGS = {
    NodeKind.PARAGRAPH: "p",
    NodeKind.BOLD: "strong",
    NodeKind.UNDERLINE: "u",
    NodeKind.PLAIN: "span",
}

_VOID_TAGS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})

# Block containers the editor never wraps in an implicit paragraph.
_BLOCK_TAGS = frozenset({
    "div", "ul", "ol", "li", "blockquote", "pre", "hr", "table",
    "h1", "h2", "h3", "h4", "h5", "h6",
})

# Block containers whose loose inline content becomes implicit paragraphs.
_WRAPPING_TAGS = frozenset({"div", "li", "blockquote"})


def text_node(text: str) -> MarkupNode:
    return MarkupNode(kind=NodeKind.TEXT, text=text)


def element(kind: NodeKind, *children: MarkupNode, tag: str = "") -> MarkupNode:
    """Build an element node; tag defaults to the canonical one for kind."""
    return MarkupNode(kind=kind, tag=tag or _DEFAULT_TAGS.get(kind, ""), children=list(children))


def document(*children: MarkupNode) -> MarkupNode:
    return MarkupNode(kind=NodeKind.DOCUMENT, children=list(children))


class _TreeBuilder(HTMLParser):
    """Builds a MarkupNode tree from HTML fed in one or more chunks."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.root = document()
        self._stack: List[MarkupNode] = [self.root]

    def handle_starttag(self, tag, attrs):
        if tag == "p" or tag in _BLOCK_TAGS:
            self._close_open_paragraph()
        node = MarkupNode(kind=_TAG_KINDS.get(tag, NodeKind.PLAIN), tag=tag)
        self._stack[-1].append(node)
        if tag not in _VOID_TAGS:
            self._stack.append(node)

    def handle_startendtag(self, tag, attrs):
        self._stack[-1].append(MarkupNode(kind=_TAG_KINDS.get(tag, NodeKind.PLAIN), tag=tag))

    def handle_endtag(self, tag):
        # Pop back to the matching open element; ignore stray end tags.
        for depth in range(len(self._stack) - 1, 0, -1):
            if self._stack[depth].tag == tag:
                del self._stack[depth:]
                return

    def handle_data(self, data):
        if data:
            self._stack[-1].append(text_node(data))

    def _close_open_paragraph(self) -> None:
        """Implicitly end an open <p>, without reaching past a block container."""
        for depth in range(len(self._stack) - 1, 0, -1):
            node = self._stack[depth]
            if node.kind == NodeKind.PARAGRAPH:
                del self._stack[depth:]
                return
            if node.tag in _BLOCK_TAGS:
                return


def _is_inline(node: MarkupNode) -> bool:
    if node.kind == NodeKind.TEXT:
        return True
    if node.kind in (NodeKind.BOLD, NodeKind.UNDERLINE):
        return True
    return node.kind == NodeKind.PLAIN and node.tag not in _BLOCK_TAGS


def _is_blank(nodes: List[MarkupNode]) -> bool:
    return all(n.kind == NodeKind.TEXT and not n.text.strip() for n in nodes)


def _wrap_loose_inline(container: MarkupNode) -> None:
    """Group a container's inline children into implicit paragraphs, in place."""
    wrapped: List[MarkupNode] = []
    pending: List[MarkupNode] = []

    def _flush() -> None:
        if pending and not _is_blank(pending):
            wrapped.append(element(NodeKind.PARAGRAPH, *pending))
        pending.clear()

    for child in container.children:
        if _is_inline(child):
            pending.append(child)
        else:
            _flush()
            wrapped.append(child)
    _flush()
    container.children = wrapped


def normalize(node: MarkupNode) -> MarkupNode:
    """Put loose inline content into paragraphs, the way the editor schema does.

    Applies to the document itself and to every div/li/blockquote reached
    through block containers. Paragraphs and inline elements are left
    untouched. Returns node, modified in place.
    """
    if node.kind == NodeKind.DOCUMENT or (
        node.kind == NodeKind.PLAIN and node.tag in _WRAPPING_TAGS
    ):
        _wrap_loose_inline(node)
    for child in node.children:
        if child.kind == NodeKind.PLAIN and child.tag in _BLOCK_TAGS:
            normalize(child)
    return node


def parse_html(source: Optional[str]) -> MarkupNode:
    """Parse editor HTML into a DOCUMENT-rooted markup tree.

    Args:
        source: HTML fragment as produced by the editor, possibly with
                plain recognized text concatenated after it. None is
                treated as empty.

    Returns:
        The document node. Empty input yields a document with no children.
    """
    builder = _TreeBuilder()
    builder.feed(source or "")
    builder.close()
    return normalize(builder.root)


def render_html(node: MarkupNode) -> str:
    """Serialize a markup tree back to HTML."""
    if node.kind == NodeKind.TEXT:
        return html.escape(node.text, quote=False)
    inner = "".join(render_html(child) for child in node.children)
    if node.kind == NodeKind.DOCUMENT:
        return inner
    tag = node.tag or _DEFAULT_TAGS.get(node.kind, "span")
    if tag in _VOID_TAGS:
        return "<{}>".format(tag)
    return "<{tag}>{inner}</{tag}>".format(tag=tag, inner=inner)


def iter_text(node: MarkupNode) -> Iterator[str]:
    """Yield the text of every TEXT leaf under node, in document order."""
    if node.kind == NodeKind.TEXT:
        yield node.text
        return
    for child in node.children:
        yield from iter_text(child)


def iter_paragraphs(node: MarkupNode) -> Iterator[MarkupNode]:
    """Yield PARAGRAPH elements anywhere under node, in document order."""
    for child in node.children:
        if child.kind == NodeKind.PARAGRAPH:
            yield child
        elif child.kind != NodeKind.TEXT:
            yield from iter_paragraphs(child)


def plain_text(node: MarkupNode) -> str:
    """Text content of a tree, paragraphs separated by newlines."""
    paragraphs = list(iter_paragraphs(node))
    if not paragraphs:
        return "".join(iter_text(node))
    return "\n".join("".join(iter_text(p)) for p in paragraphs)


def last_paragraph(root: MarkupNode) -> Optional[MarkupNode]:
    paragraphs = list(iter_paragraphs(root))
    return paragraphs[-1] if paragraphs else None


def clone(node: MarkupNode) -> MarkupNode:
    return copy.deepcopy(node)


def runs_to_markup(paragraphs: List[Paragraph]) -> MarkupNode:
    """Rebuild an equivalent markup tree from parsed paragraphs.

    WHY: Parsing must be stable: re-parsing a tree rebuilt from its own
    runs has to give back the same runs. This is also how styled text is
    inserted into the editor.

    HOW: Each run becomes a TEXT leaf, wrapped in <u> when underlined and
    then in <strong> when bold.
    """
    root = document()
    for para in paragraphs:
        p_node = root.append(element(NodeKind.PARAGRAPH))
        for run in para.runs:
            node = text_node(run.text)
            if run.underline:
                node = element(NodeKind.UNDERLINE, node)
            if run.bold:
                node = element(NodeKind.BOLD, node)
            p_node.append(node)
    return root
