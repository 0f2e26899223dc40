"""Tests for the command-line interface."""

import io
import json
from pathlib import Path

import pytest
from docx import Document

from speech_docx.cli import build_parser, main


@pytest.fixture
def events_file(tmp_path):
    path = tmp_path / "session.jsonl"
    lines = [
        {"results": [{"text": "שלום", "is_final": False}]},
        {"results": [{"text": "שלום עולם", "is_final": True}]},
        {"results": [{"text": "טוב", "is_final": False}]},
    ]
    path.write_text(
        "\n".join(json.dumps(line, ensure_ascii=False) for line in lines) + "\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def out_dir(tmp_path):
    path = tmp_path / "out"
    path.mkdir()
    return path


def _saved_path(capsys):
    return Path(capsys.readouterr().out.strip())


class TestParser:

    def test_defaults(self):
        args = build_parser().parse_args(["convert", "doc.html"])
        assert args.format == "docx"
        assert args.input_file == "doc.html"

    def test_unknown_format_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["convert", "doc.html", "--format", "pdf"])

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestReplay:

    def test_replay_to_docx(self, events_file, out_dir, capsys):
        main(["replay", str(events_file), "--output-dir", str(out_dir)])
        saved = _saved_path(capsys)
        assert saved.parent == out_dir
        assert saved.name.startswith("speech_to_text_")
        assert saved.suffix == ".docx"
        doc = Document(io.BytesIO(saved.read_bytes()))
        assert [p.text for p in doc.paragraphs] == ["שלום עולם טוב"]

    def test_replay_onto_base_content(self, events_file, out_dir, tmp_path, capsys):
        base = tmp_path / "base.html"
        base.write_text("<p><strong>כותרת</strong></p>", encoding="utf-8")
        main([
            "replay", str(events_file),
            "--base", str(base),
            "--format", "plain_text",
            "--output-dir", str(out_dir),
        ])
        saved = _saved_path(capsys)
        assert saved.read_text(encoding="utf-8") == "כותרת\nשלום עולם טוב\n"

    def test_replay_with_recognizer_error_still_exports(self, tmp_path, out_dir, capsys):
        script = tmp_path / "error.jsonl"
        script.write_text(
            '{"results": [{"text": "a", "is_final": true}]}\n{"error": "network"}\n',
            encoding="utf-8",
        )
        main(["replay", str(script), "--format", "plain_text", "--output-dir", str(out_dir)])
        captured = capsys.readouterr()
        assert "network" in captured.err
        saved = Path(captured.out.strip())
        assert saved.read_text(encoding="utf-8") == "a\n"

    def test_empty_script_exits_with_error(self, tmp_path, out_dir, capsys):
        script = tmp_path / "empty.jsonl"
        script.write_text("\n", encoding="utf-8")
        with pytest.raises(SystemExit) as excinfo:
            main(["replay", str(script), "--output-dir", str(out_dir)])
        assert excinfo.value.code == 1
        assert "There is no text to export." in capsys.readouterr().err

    def test_malformed_script(self, tmp_path, out_dir, capsys):
        script = tmp_path / "bad.jsonl"
        script.write_text("{oops\n", encoding="utf-8")
        with pytest.raises(SystemExit) as excinfo:
            main(["replay", str(script), "--output-dir", str(out_dir)])
        assert excinfo.value.code == 1
        assert "Error:" in capsys.readouterr().err


class TestConvert:

    def test_convert_html(self, tmp_path, out_dir, capsys):
        source = tmp_path / "doc.html"
        source.write_text("<p>רגיל <u>קו</u></p>", encoding="utf-8")
        main(["convert", str(source), "--output-dir", str(out_dir)])
        saved = _saved_path(capsys)
        doc = Document(io.BytesIO(saved.read_bytes()))
        [para] = doc.paragraphs
        assert [(r.text, bool(r.underline)) for r in para.runs] == [("רגיל ", False), ("קו", True)]

    def test_convert_hand_written_html(self, tmp_path, out_dir, capsys):
        source = tmp_path / "saved.html"
        source.write_text("<p>one<p>two<div>three</div>", encoding="utf-8")
        main(["convert", str(source), "--format", "plain_text", "--output-dir", str(out_dir)])
        saved = _saved_path(capsys)
        assert saved.read_text(encoding="utf-8") == "one\ntwo\nthree\n"

    def test_second_convert_gets_numbered_name(self, tmp_path, out_dir, capsys):
        source = tmp_path / "doc.html"
        source.write_text("<p>x</p>", encoding="utf-8")
        main(["convert", str(source), "--output-dir", str(out_dir)])
        first = _saved_path(capsys)
        main(["convert", str(source), "--output-dir", str(out_dir)])
        second = _saved_path(capsys)
        assert second.name == first.stem + "-2.docx"

    def test_empty_html_exits_with_error(self, tmp_path, out_dir, capsys):
        source = tmp_path / "empty.html"
        source.write_text("<p></p>", encoding="utf-8")
        with pytest.raises(SystemExit) as excinfo:
            main(["convert", str(source), "--output-dir", str(out_dir)])
        assert excinfo.value.code == 1
        assert "There is no text to export." in capsys.readouterr().err

    def test_missing_input_file(self, tmp_path, out_dir, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["convert", str(tmp_path / "nope.html"), "--output-dir", str(out_dir)])
        assert excinfo.value.code == 1
        assert "File not found" in capsys.readouterr().err

    def test_missing_output_dir(self, tmp_path, capsys):
        source = tmp_path / "doc.html"
        source.write_text("<p>x</p>", encoding="utf-8")
        with pytest.raises(SystemExit) as excinfo:
            main(["convert", str(source), "--output-dir", str(tmp_path / "missing")])
        assert excinfo.value.code == 1
