"""Dictation workspace: the editor, session, and export path wired together.

WHY: The user works with one document at a time through a handful of
commands (start, stop, clear, bold, underline, export). The CLI and the
HTTP API both need exactly that surface, with the same checks, so it
lives in one place instead of being rebuilt by each entry point.

HOW: DictationWorkspace owns a RichTextEditor and a TranscriptSession
bound to it, plus the recognition adapter. Export checks the editor for
empty content, parses its markup with RichTextParser, and hands the
paragraphs to the selected exporter. Every command runs under one
re-entrant lock so events and commands are handled strictly one at a
time even when a server dispatches them from worker threads.

RULES:
- Export of an empty or placeholder editor raises EmptyContent before
  any parsing happens, and produces no artifact
- Export is allowed while listening and uses the last published content
- Unknown exporter keys raise KeyError; unknown styles raise ValueError
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from speech_docx.config import EMPTY_MARKUP_HTML
from speech_docx.core.editor import STYLE_BOLD, STYLE_UNDERLINE, RichTextEditor
from speech_docx.core.errors import EmptyContent
from speech_docx.core.ir import Paragraph
from speech_docx.core.parser import RichTextParser
from speech_docx.core.session import SessionState, TranscriptSession
from speech_docx.downloads import DirectoryDownloadSink
from speech_docx.exporters import DEFAULT_EXPORTER, EXPORTERS
from speech_docx.exporters.base import Clock, ExportArtifact
from speech_docx.recognition.base import BaseRecognitionAdapter, RecognitionConfig

logger = logging.getLogger(__name__)


@dataclass
class WorkspaceSnapshot:
    """Read-only view of the workspace for status displays."""

    html: str
    text: str
    is_empty: bool
    state: SessionState
    bold_active: bool
    underline_active: bool
    last_error: Optional[str]


class DictationWorkspace:
    """One editable document plus the dictation session feeding it."""

    def __init__(
        self,
        adapter: Optional[BaseRecognitionAdapter] = None,
        editor: Optional[RichTextEditor] = None,
        config: Optional[RecognitionConfig] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.editor = editor if editor is not None else RichTextEditor()
        self.session = TranscriptSession(editor=self.editor, adapter=adapter, config=config)
        self.parser = RichTextParser()
        self.clock = clock
        self.lock = threading.RLock()

    @property
    def adapter(self) -> Optional[BaseRecognitionAdapter]:
        return self.session.adapter

    # -- dictation ---------------------------------------------------------

    def start(self) -> None:
        with self.lock:
            self.session.start()

    def stop(self) -> None:
        with self.lock:
            self.session.stop()

    def clear(self) -> None:
        with self.lock:
            self.session.clear()

    # -- editing -----------------------------------------------------------

    def toggle_style(self, style: str) -> bool:
        with self.lock:
            return self.editor.toggle(style)

    def set_html(self, html: str) -> None:
        with self.lock:
            self.editor.set_content(html)

    def snapshot(self) -> WorkspaceSnapshot:
        with self.lock:
            error = self.session.last_error
            return WorkspaceSnapshot(
                html=self.editor.get_html(),
                text=self.editor.get_text(),
                is_empty=self.editor.is_empty(),
                state=self.session.state,
                bold_active=self.editor.is_active(STYLE_BOLD),
                underline_active=self.editor.is_active(STYLE_UNDERLINE),
                last_error=error.code if error else None,
            )

    # -- export ------------------------------------------------------------

    def paragraphs(self) -> List[Paragraph]:
        """Parse the editor content, refusing empty documents.

        Raises:
            EmptyContent: The editor is empty or holds only an empty paragraph.
        """
        with self.lock:
            if self.editor.is_empty() or self.editor.get_html() in EMPTY_MARKUP_HTML:
                raise EmptyContent()
            return self.parser.parse(self.editor.get_content())

    def export(self, key: str = DEFAULT_EXPORTER) -> ExportArtifact:
        """Export the current content with the exporter registered as key."""
        exporter_cls = EXPORTERS[key]
        paragraphs = self.paragraphs()
        artifact = exporter_cls().export(paragraphs, clock=self.clock)
        logger.info(
            "Exported %d paragraph(s) as %s (%d bytes)",
            len(paragraphs),
            artifact.filename,
            len(artifact.content),
        )
        return artifact

    def download(self, output_dir: Path, key: str = DEFAULT_EXPORTER) -> Path:
        """Export and save the artifact into output_dir."""
        return DirectoryDownloadSink(output_dir).deliver(self.export(key))
