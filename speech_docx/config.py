"""Configuration constants, recognition defaults, and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. The recognition locale, export naming, and server
binding are plain data kept out of the logic, so every entry point
reads them from one place.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level strings, sets, and bools. Values that operators may want
to change are read from environment variables with sensible defaults.

RULES:
- RECOGNITION_LOCALE defaults to "he-IL" (Hebrew, Israel)
- Recognition always runs continuous with interim results enabled
- Export filenames are "{EXPORT_FILENAME_PREFIX}_{YYYY-MM-DD}{extension}"
- All overridable defaults use the SPEECH_DOCX_ environment prefix
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Recognition defaults
# ---------------------------------------------------------------------------

RECOGNITION_LOCALE = os.getenv("SPEECH_DOCX_LOCALE", "he-IL")
RECOGNITION_CONTINUOUS = True
RECOGNITION_INTERIM_RESULTS = True

FINAL_SEPARATOR = " "
"""Appended after every finalized hypothesis in the session buffer."""

# ---------------------------------------------------------------------------
# Rich text / export
# ---------------------------------------------------------------------------

EMPTY_RUN_TEXT = " "
"""Text of the placeholder run emitted for paragraphs without content."""

EMPTY_MARKUP_HTML: frozenset[str] = frozenset({"", "<p></p>"})
"""Editor HTML values that count as "nothing to export"."""

EXPORT_FILENAME_PREFIX = "speech_to_text"

DEFAULT_OUTPUT_DIR = os.getenv("SPEECH_DOCX_OUTPUT_DIR", ".")

# ---------------------------------------------------------------------------
# Server / logging
# ---------------------------------------------------------------------------

API_HOST = os.getenv("SPEECH_DOCX_HOST", "127.0.0.1")
API_PORT = int(os.getenv("SPEECH_DOCX_PORT", "8000"))

LOG_LEVEL = os.getenv("SPEECH_DOCX_LOG_LEVEL", "INFO").upper()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for an entry point (CLI or API server).

    WHY: Library modules only create named loggers; deciding where records
    go and at which level is the job of whoever owns the process.

    RULES:
    - Called from entry points only, never on import
    - Unknown level names fall back to INFO
    """
    name = (level or LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
