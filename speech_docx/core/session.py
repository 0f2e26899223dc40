"""Dictation session: merges recognition hypotheses into the editor.

WHY: A streaming recognizer keeps revising the segment being spoken
(interim results) and only occasionally commits text (final results).
Publishing each raw update would lose earlier segments or duplicate
them; the editor must instead always show everything committed so far
plus exactly one live guess, on top of whatever the user had before
pressing start.

HOW: SessionBuffers is the explicit state record for one Listening
period: the editor snapshot taken at start (base_content), the
append-only finalized text, and the current interim text. merge_batch()
folds one batch of hypotheses into the buffers; TranscriptSession drives
the Idle/Listening state machine, talks to the adapter, and publishes
base + finalized + interim to the editor after every batch.

RULES:
- finalized only grows: each final hypothesis adds its text plus " "
- interim is rebuilt per batch: the last interim hypothesis wins, and a
  batch without interim hypotheses clears it
- Published content = base_content + finalized + interim, always
- Batches arriving while Idle are ignored (content stays frozen)
- start() while Listening is a no-op and never restarts the adapter
- stop() does not promote interim text to finalized; it stays visible in
  the editor and so becomes part of the next session's base_content
- Adapter end/error force Idle; errors are reported, never raised
"""

from __future__ import annotations

import enum
import html
import logging
from dataclasses import dataclass, replace
from typing import Callable, List, Optional

from speech_docx.config import FINAL_SEPARATOR
from speech_docx.core.editor import RichTextEditor
from speech_docx.core.errors import EditorNotReady, RecognitionRuntimeError, UnsupportedPlatform
from speech_docx.recognition.base import BaseRecognitionAdapter, Hypothesis, RecognitionConfig

logger = logging.getLogger(__name__)


class SessionState(str, enum.Enum):
    IDLE = "idle"
    LISTENING = "listening"


StateCallback = Callable[[SessionState, SessionState], None]
ErrorCallback = Callable[[RecognitionRuntimeError], None]


@dataclass
class SessionBuffers:
    """Cross-event state for one Listening period.

    Attributes:
        base_content: Editor HTML captured at start ("" if it was empty).
        finalized: Final hypothesis texts, each followed by one separator.
        interim: Text of the live interim hypothesis, or "".
    """

    base_content: str = ""
    finalized: str = ""
    interim: str = ""

    def reset(self, base_content: str = "") -> None:
        self.base_content = base_content
        self.finalized = ""
        self.interim = ""

    def compose(self) -> str:
        """Build the content to publish to the editor.

        Recognized text is escaped so that "<" or "&" in a hypothesis is
        shown as text rather than read as markup.
        """
        return (
            self.base_content
            + html.escape(self.finalized, quote=False)
            + html.escape(self.interim, quote=False)
        )


def merge_batch(buffers: SessionBuffers, batch: List[Hypothesis]) -> None:
    """Fold one batch of hypotheses into the session buffers, left to right."""
    buffers.interim = ""
    for hypothesis in batch:
        if hypothesis.is_final:
            buffers.finalized += hypothesis.text + FINAL_SEPARATOR
        else:
            buffers.interim = hypothesis.text


class TranscriptSession:
    """Idle/Listening state machine that feeds recognized text to an editor.

    The session is also the RecognitionListener handed to the adapter.
    """

    def __init__(
        self,
        editor: Optional[RichTextEditor] = None,
        adapter: Optional[BaseRecognitionAdapter] = None,
        config: Optional[RecognitionConfig] = None,
        on_state_change: Optional[StateCallback] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> None:
        self.editor = editor
        self.adapter = adapter
        self.config = config or RecognitionConfig()
        self._on_state_change = on_state_change
        self._on_error = on_error

        self._state = SessionState.IDLE
        self._buffers = SessionBuffers()
        self.last_error: Optional[RecognitionRuntimeError] = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_listening(self) -> bool:
        return self._state == SessionState.LISTENING

    @property
    def buffers(self) -> SessionBuffers:
        """A copy of the current buffers."""
        return replace(self._buffers)

    @property
    def full_content(self) -> str:
        return self._buffers.compose()

    # -- user commands -----------------------------------------------------

    def start(self) -> None:
        """Begin a Listening session on top of the editor's current content.

        Raises:
            EditorNotReady: No editor is attached.
            UnsupportedPlatform: No recognition adapter is available.
            RecognitionRuntimeError: The adapter failed to start; the
                session is back in Idle with its previous buffers.
        """
        if self._state == SessionState.LISTENING:
            logger.debug("start() ignored: session already listening")
            return
        if self.editor is None:
            raise EditorNotReady()
        if self.adapter is None:
            raise UnsupportedPlatform()

        previous = replace(self._buffers)
        base = "" if self.editor.is_empty() else self.editor.get_html()
        self._buffers.reset(base)
        self.last_error = None
        self._transition(SessionState.LISTENING)

        try:
            self.adapter.start(self.config, self)
        except Exception as exc:
            logger.exception("Recognition adapter failed to start")
            self._buffers = previous
            self._transition(SessionState.IDLE)
            raise RecognitionRuntimeError("start-failed", str(exc)) from exc

        logger.info(
            "Listening (locale %s, base content %d chars)",
            self.config.locale,
            len(base),
        )

    def stop(self) -> None:
        """End the session immediately; interim text is not promoted."""
        if self._state != SessionState.LISTENING:
            return
        try:
            if self.adapter is not None:
                self.adapter.stop()
        finally:
            self._transition(SessionState.IDLE)
        logger.info("Stopped listening (%d finalized chars)", len(self._buffers.finalized))

    def clear(self) -> None:
        """Empty the editor and all session buffers; state is unchanged."""
        if self.editor is not None:
            self.editor.clear()
        self._buffers.reset("")
        logger.info("Cleared content (session %s)", self._state.value)

    # -- adapter events ----------------------------------------------------

    def on_results(self, batch: List[Hypothesis]) -> None:
        if self._state != SessionState.LISTENING:
            logger.debug("Ignoring %d hypotheses: session idle", len(batch))
            return
        merge_batch(self._buffers, batch)
        logger.debug(
            "Merged batch of %d (finalized %d chars, interim %d chars)",
            len(batch),
            len(self._buffers.finalized),
            len(self._buffers.interim),
        )
        self._publish()

    def on_end(self) -> None:
        if self._state == SessionState.LISTENING:
            logger.info("Recognition ended by adapter")
        self._transition(SessionState.IDLE)

    def on_error(self, code: str, message: str = "") -> None:
        error = RecognitionRuntimeError(code, message)
        self.last_error = error
        logger.error("Speech recognition error: %s %s", error.code, message)
        self._transition(SessionState.IDLE)
        if self._on_error:
            self._on_error(error)

    # -- internals ---------------------------------------------------------

    def _publish(self) -> None:
        if self.editor is None:
            return
        self.editor.set_content(self._buffers.compose())
        self.editor.focus_end()

    def _transition(self, to_state: SessionState) -> None:
        from_state = self._state
        if from_state == to_state:
            return
        self._state = to_state
        if self._on_state_change:
            self._on_state_change(from_state, to_state)
