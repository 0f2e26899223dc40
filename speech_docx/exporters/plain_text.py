"""Plain text exporter.

WHY: Some users only want the dictated words, to paste into a system
that does not accept Word files.

HOW: Joins each paragraph's run texts, one paragraph per line, and
encodes the result as UTF-8. Styling is dropped.

RULES:
- One line per paragraph, "\\n" separated, trailing newline
- Placeholder paragraphs (a single " " run) become blank lines
- Output extension ".txt", media type "text/plain; charset=utf-8"
"""

from __future__ import annotations

from typing import List

from speech_docx.core.ir import Paragraph, document_text
from speech_docx.exporters.base import BaseExporter


class PlainTextExporter(BaseExporter):

    @property
    def name(self) -> str:
        return "Plain Text"

    @property
    def extension(self) -> str:
        return ".txt"

    @property
    def media_type(self) -> str:
        return "text/plain; charset=utf-8"

    def render(self, paragraphs: List[Paragraph]) -> bytes:
        lines = document_text(paragraphs).split("\n")
        content = "\n".join(line.rstrip() for line in lines)
        return (content + "\n").encode("utf-8")
