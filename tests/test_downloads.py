"""Tests for saving export artifacts into a download directory."""

import pytest

from speech_docx import downloads
from speech_docx.downloads import (
    DirectoryDownloadSink,
    artifact_handle,
    claim_output_path,
    resolve_output_path,
)
from speech_docx.exporters.base import ExportArtifact


def _artifact(content=b"data", filename="speech_to_text_2026-10-19.docx"):
    return ExportArtifact(filename=filename, content=content, media_type="application/octet-stream")


class TestResolveOutputPath:

    def test_free_name(self, tmp_path):
        assert resolve_output_path(tmp_path, "a.docx") == tmp_path / "a.docx"

    def test_conflict_adds_counter(self, tmp_path):
        (tmp_path / "a.docx").write_bytes(b"")
        assert resolve_output_path(tmp_path, "a.docx") == tmp_path / "a-2.docx"

    def test_counter_skips_taken_numbers(self, tmp_path):
        (tmp_path / "a.docx").write_bytes(b"")
        (tmp_path / "a-2.docx").write_bytes(b"")
        assert resolve_output_path(tmp_path, "a.docx") == tmp_path / "a-3.docx"

    def test_name_without_extension(self, tmp_path):
        (tmp_path / "notes").write_bytes(b"")
        assert resolve_output_path(tmp_path, "notes") == tmp_path / "notes-2"


class TestArtifactHandle:

    def test_handle_holds_content_and_is_removed(self, tmp_path):
        with artifact_handle(_artifact(b"abc"), tmp_path) as path:
            assert path.read_bytes() == b"abc"
            assert path.name.endswith(".part")
        assert not path.exists()
        assert list(tmp_path.iterdir()) == []

    def test_handle_released_on_exception(self, tmp_path):
        with pytest.raises(RuntimeError):
            with artifact_handle(_artifact(), tmp_path):
                raise RuntimeError("delivery failed")
        assert list(tmp_path.iterdir()) == []


class TestDirectoryDownloadSink:

    def test_deliver(self, tmp_path):
        saved = DirectoryDownloadSink(tmp_path).deliver(_artifact(b"word"))
        assert saved == tmp_path / "speech_to_text_2026-10-19.docx"
        assert saved.read_bytes() == b"word"
        assert [p.name for p in tmp_path.iterdir()] == [saved.name]

    def test_same_day_exports_do_not_overwrite(self, tmp_path):
        sink = DirectoryDownloadSink(tmp_path)
        first = sink.deliver(_artifact(b"one"))
        second = sink.deliver(_artifact(b"two"))
        assert first.read_bytes() == b"one"
        assert second.name == "speech_to_text_2026-10-19-2.docx"
        assert second.read_bytes() == b"two"
        assert not any(p.name.endswith(".part") for p in tmp_path.iterdir())

    def test_name_taken_after_resolution_is_not_overwritten(self, tmp_path, monkeypatch):
        taken = tmp_path / "speech_to_text_2026-10-19.docx"
        calls = []

        def racing_resolve(output_dir, filename):
            # Another writer creates the chosen name right after it is picked.
            path = resolve_output_path(output_dir, filename)
            if not calls:
                taken.write_bytes(b"other writer")
            calls.append(path)
            return path

        monkeypatch.setattr(downloads, "resolve_output_path", racing_resolve)
        saved = DirectoryDownloadSink(tmp_path).deliver(_artifact(b"mine"))

        assert taken.read_bytes() == b"other writer"
        assert saved.name == "speech_to_text_2026-10-19-2.docx"
        assert saved.read_bytes() == b"mine"
        assert calls[0] == taken

    def test_claim_creates_file_exclusively(self, tmp_path):
        first = claim_output_path(tmp_path, "a.txt")
        second = claim_output_path(tmp_path, "a.txt")
        assert first.name == "a.txt"
        assert second.name == "a-2.txt"
        assert first.exists() and second.exists()

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            DirectoryDownloadSink(tmp_path / "missing").deliver(_artifact())
