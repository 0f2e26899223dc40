"""Exporter registry: pluggable output format hub.

WHY: The workspace, CLI, and API need a single lookup to find the right
exporter by name. A central dict makes it trivial to add new formats:
create the exporter class, import it here, add one line.

HOW: EXPORTERS maps string keys to exporter *classes* (not instances).
Callers instantiate as needed: ``exporter = EXPORTERS["docx"]()``.

RULES:
- Keys are snake_case identifiers (used in CLI flags and API paths)
- "docx" is the default export format
- Every exporter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from speech_docx.exporters.docx_document import DocxExporter
from speech_docx.exporters.plain_text import PlainTextExporter

if TYPE_CHECKING:
    from speech_docx.exporters.base import BaseExporter

DEFAULT_EXPORTER = "docx"

EXPORTERS: dict[str, type[BaseExporter]] = {
    "docx": DocxExporter,
    "plain_text": PlainTextExporter,
}
