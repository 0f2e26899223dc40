"""Tests for the scripted and push recognition adapters."""

import json

import pytest

from speech_docx.core.session import SessionState, TranscriptSession
from speech_docx.recognition import (
    PushRecognitionAdapter,
    RecognitionConfig,
    RecognitionEvent,
    ScriptedRecognitionAdapter,
    load_script,
)
from speech_docx.recognition.base import Hypothesis
from speech_docx.recognition.scripted import EVENT_END, EVENT_ERROR, EVENT_RESULTS


def _write_script(path, lines):
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def scenario_script(tmp_path):
    return _write_script(tmp_path / "session.jsonl", [
        json.dumps({"results": [{"text": "שלום", "is_final": False}]}, ensure_ascii=False),
        "",
        json.dumps({"results": [{"text": "שלום עולם", "is_final": True}]}, ensure_ascii=False),
        json.dumps({"results": [{"text": "טוב"}]}, ensure_ascii=False),
        json.dumps({"end": True}),
    ])


class TestLoadScript:

    def test_events_in_order(self, scenario_script):
        events = load_script(scenario_script)
        assert [e.kind for e in events] == [EVENT_RESULTS, EVENT_RESULTS, EVENT_RESULTS, EVENT_END]
        assert events[1].batch == [Hypothesis("שלום עולם", is_final=True)]
        assert events[2].batch == [Hypothesis("טוב", is_final=False)]

    def test_error_event(self, tmp_path):
        path = _write_script(tmp_path / "e.jsonl", ['{"error": "network", "message": "offline"}'])
        [event] = load_script(path)
        assert event.kind == EVENT_ERROR
        assert event.code == "network"
        assert event.message == "offline"

    def test_malformed_line_reports_line_number(self, tmp_path):
        path = _write_script(tmp_path / "bad.jsonl", ['{"end": true}', "{not json"])
        with pytest.raises(ValueError, match=":2:"):
            load_script(path)

    def test_unknown_event_shape(self, tmp_path):
        path = _write_script(tmp_path / "odd.jsonl", ['{"something": 1}'])
        with pytest.raises(ValueError, match="invalid event"):
            load_script(path)

    def test_non_object_line(self, tmp_path):
        path = _write_script(tmp_path / "list.jsonl", ["[1, 2]"])
        with pytest.raises(ValueError, match=":1:"):
            load_script(path)


class TestScriptedAdapter:

    def test_replay_scenario(self, scenario_script, editor):
        adapter = ScriptedRecognitionAdapter.from_file(scenario_script)
        session = TranscriptSession(editor=editor, adapter=adapter)
        session.start()

        assert adapter.play() == 4
        assert editor.get_text() == "שלום עולם טוב"
        assert session.state == SessionState.IDLE
        assert adapter.running is False

    def test_error_stops_playback(self, editor):
        adapter = ScriptedRecognitionAdapter([
            RecognitionEvent(kind=EVENT_RESULTS, batch=[Hypothesis("a", is_final=True)]),
            RecognitionEvent(kind=EVENT_ERROR, code="no-speech"),
            RecognitionEvent(kind=EVENT_RESULTS, batch=[Hypothesis("late", is_final=True)]),
        ])
        session = TranscriptSession(editor=editor, adapter=adapter)
        session.start()

        assert adapter.play() == 2
        assert editor.get_text() == "a "
        assert session.last_error.code == "no-speech"

    def test_play_before_start_delivers_nothing(self):
        adapter = ScriptedRecognitionAdapter([RecognitionEvent(kind=EVENT_END)])
        assert adapter.play() == 0

    def test_start_records_config(self, session):
        adapter = ScriptedRecognitionAdapter()
        session.adapter = adapter
        session.start()
        assert adapter.start_count == 1
        assert adapter.config == RecognitionConfig()
        assert adapter.running is True


class TestPushAdapter:

    def test_push_while_running(self, editor):
        adapter = PushRecognitionAdapter()
        session = TranscriptSession(editor=editor, adapter=adapter)
        session.start()
        assert adapter.push_results([Hypothesis("שלום")]) is True
        assert editor.get_text() == "שלום"

    def test_push_when_not_running_is_dropped(self, editor):
        adapter = PushRecognitionAdapter()
        session = TranscriptSession(editor=editor, adapter=adapter)
        assert adapter.push_results([Hypothesis("x")]) is False
        session.start()
        session.stop()
        assert adapter.push_results([Hypothesis("y")]) is False
        assert editor.is_empty()

    def test_end_and_error_stop_the_adapter(self, editor):
        adapter = PushRecognitionAdapter()
        session = TranscriptSession(editor=editor, adapter=adapter)
        session.start()
        assert adapter.push_end() is True
        assert adapter.running is False
        assert session.state == SessionState.IDLE

        session.start()
        assert adapter.push_error("network", "offline") is True
        assert adapter.push_error("network") is False
        assert session.last_error.code == "network"
