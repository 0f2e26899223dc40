"""Abstract base exporter and output artifact container.

WHY: Every export format consumes the same Paragraph/Run IR but produces
different file content. This base class enforces a consistent interface
so the workspace, CLI, and API layers can work with any exporter
generically.

HOW: BaseExporter is an ABC with a ``name``, a file ``extension``, a
``media_type``, and an ``export()`` method. ExportArtifact bundles the
final filename with its bytes and MIME type.

RULES:
- Subclasses MUST implement ``name``, ``extension``, ``media_type`` and
  ``render()``
- Filenames are "speech_to_text_<YYYY-MM-DD><extension>"
- The date is taken from the clock passed to export(), in UTC, so output
  is deterministic under a fixed clock
- Exporters never check for empty content; that happens upstream
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Callable, List, Optional

from speech_docx.config import EXPORT_FILENAME_PREFIX
from speech_docx.core.ir import Paragraph

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ExportArtifact:
    """One exported file, ready to be downloaded.

    Attributes:
        filename: Final download name, e.g. ``"speech_to_text_2026-10-19.docx"``.
        content: The serialized file.
        media_type: MIME type for the content.
    """

    filename: str
    content: bytes
    media_type: str


def export_filename(export_date: date, extension: str) -> str:
    """Build the download filename for an export made on export_date."""
    return "{}_{}{}".format(EXPORT_FILENAME_PREFIX, export_date.isoformat(), extension)


def export_date(clock: Clock) -> date:
    """The UTC calendar date of the clock's current moment."""
    moment = clock()
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.date()


class BaseExporter(ABC):
    """Abstract base for all exporters.

    To add a new export format:
    1. Create a new file in exporters/
    2. Subclass BaseExporter
    3. Implement name, extension, media_type and render()
    4. Register in EXPORTERS dict in exporters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'Word Document'."""

    @property
    @abstractmethod
    def extension(self) -> str:
        """File extension including the dot, e.g. '.docx'."""

    @property
    @abstractmethod
    def media_type(self) -> str:
        """MIME type of the rendered content."""

    @abstractmethod
    def render(self, paragraphs: List[Paragraph]) -> bytes:
        """Serialize parsed paragraphs into file content."""

    def export(self, paragraphs: List[Paragraph], clock: Optional[Clock] = None) -> ExportArtifact:
        """Render paragraphs and name the artifact after the export date.

        Args:
            paragraphs: Parsed Paragraph/Run IR (never empty).
            clock: Returns the export moment; defaults to the current UTC time.

        Returns:
            The artifact with its dated filename.
        """
        content = self.render(paragraphs)
        filename = export_filename(export_date(clock or utc_now), self.extension)
        return ExportArtifact(filename=filename, content=content, media_type=self.media_type)
