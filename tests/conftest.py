"""Shared test fixtures for the speech_docx test suite.

WHY: Session, workspace, API, and CLI tests all replay the same Hebrew
dictation scenario and need a recognizer they can drive by hand and a
clock that does not move.

HOW: RecordingAdapter is a BaseRecognitionAdapter that records start and
stop calls and lets tests emit batches directly to the listener. Pytest
fixtures provide the adapter, an editor, a wired session, a fixed clock,
and a styled sample markup tree.

RULES:
- The fixed clock is 2026-10-19 09:30 UTC
- Scenario batches match the documented merge walkthrough exactly
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List

import pytest

from speech_docx.core.editor import RichTextEditor
from speech_docx.core.markup import NodeKind, document, element, text_node
from speech_docx.core.session import TranscriptSession
from speech_docx.recognition.base import (
    BaseRecognitionAdapter,
    Hypothesis,
    RecognitionConfig,
    RecognitionListener,
)


# ---------------------------------------------------------------------------
# Hebrew dictation scenario
# ---------------------------------------------------------------------------

SCENARIO_BATCHES: List[List[Hypothesis]] = [
    [Hypothesis(text="שלום", is_final=False)],
    [Hypothesis(text="שלום עולם", is_final=True)],
    [Hypothesis(text="טוב", is_final=False)],
]

SCENARIO_TEXTS = ["שלום", "שלום עולם ", "שלום עולם טוב"]

FIXED_NOW = datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc)


class RecordingAdapter(BaseRecognitionAdapter):
    """Recognition adapter driven directly by tests."""

    def __init__(self) -> None:
        super().__init__()
        self.starts: List[RecognitionConfig] = []
        self.stops = 0
        self.listener: RecognitionListener = None

    def start(self, config, listener):
        self.config = config
        self._listener = listener
        self.listener = listener
        self.starts.append(config)

    def stop(self):
        self._listener = None
        self.stops += 1

    def emit(self, batch):
        """Deliver a batch to the last registered listener, running or not."""
        self.listener.on_results(list(batch))


class FailingAdapter(BaseRecognitionAdapter):
    def start(self, config, listener):
        raise RuntimeError("microphone unavailable")

    def stop(self):
        pass


@pytest.fixture
def scenario_batches():
    return [list(batch) for batch in SCENARIO_BATCHES]


@pytest.fixture
def scenario_texts():
    return list(SCENARIO_TEXTS)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def failing_adapter():
    return FailingAdapter()


@pytest.fixture
def adapter():
    return RecordingAdapter()


@pytest.fixture
def editor():
    return RichTextEditor()


@pytest.fixture
def session(editor, adapter):
    return TranscriptSession(editor=editor, adapter=adapter)


@pytest.fixture
def styled_tree():
    """Two paragraphs mixing plain, bold, underline, and nested styling.

    <p>רגיל <strong>מודגש <u>שניהם</u></strong></p>
    <p><u>קו תחתון</u></p>
    """
    return document(
        element(
            NodeKind.PARAGRAPH,
            text_node("רגיל "),
            element(
                NodeKind.BOLD,
                text_node("מודגש "),
                element(NodeKind.UNDERLINE, text_node("שניהם")),
            ),
        ),
        element(
            NodeKind.PARAGRAPH,
            element(NodeKind.UNDERLINE, text_node("קו תחתון")),
        ),
    )
