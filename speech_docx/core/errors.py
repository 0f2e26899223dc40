"""Typed errors raised by the dictation session and the export path.

WHY: Callers (HTTP API, CLI, tests) need to tell apart "the editor is not
mounted", "this platform has no recognizer", "the recognizer failed
mid-session", and "there is nothing to export". Each maps to a different
user message and HTTP status.

HOW: A small hierarchy rooted at SpeechDocxError. RecognitionRuntimeError
carries the adapter's error code as a structured field.

RULES:
- Every error is terminal for the failing operation only
- Raising one never leaves the session outside Idle/Listening
- RecognitionRuntimeError is reported through callbacks, not raised from
  the adapter's error signal
"""

from __future__ import annotations


class SpeechDocxError(Exception):
    """Base class for all speech_docx errors."""


class EditorNotReady(SpeechDocxError):
    """Raised by TranscriptSession.start when no rich-text model is attached.

    RULES:
    - Checked before any session state is touched
    """

    def __init__(self, message: str = "The rich-text editor is not ready yet.") -> None:
        super().__init__(message)


class UnsupportedPlatform(SpeechDocxError):
    """Raised by TranscriptSession.start when no recognition adapter exists.

    WHY: Speech recognition is platform supplied. A host without it can
    still edit and export text, so this must not be fatal.
    """

    def __init__(self, message: str = "Speech recognition is not supported on this platform.") -> None:
        super().__init__(message)


class RecognitionRuntimeError(SpeechDocxError):
    """A recognition adapter failed while a session was running.

    WHY: Adapters report failures as short codes ("network", "no-speech",
    "not-allowed", ...). The code is what callers show or branch on.

    HOW: Built by TranscriptSession.on_error and handed to the on_error
    callback; also stored as the session's last_error.

    RULES:
    - code is always a non-empty string
    - message is optional human-readable detail
    """

    def __init__(self, code: str, message: str = "") -> None:
        self.code = code or "unknown"
        self.message = message
        detail = "Speech recognition error: {}".format(self.code)
        if message:
            detail = "{} ({})".format(detail, message)
        super().__init__(detail)


class EmptyContent(SpeechDocxError):
    """Raised when export is requested for an empty or placeholder document.

    RULES:
    - Checked against the editor before parsing, not against parser output
    - No artifact is produced when this is raised
    """

    def __init__(self, message: str = "There is no text to export.") -> None:
        super().__init__(message)
