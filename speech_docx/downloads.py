"""Delivering export artifacts to a download directory.

WHY: An exported document only helps once it lands where the user can
open it. Writing straight to the final name would leave a truncated file
behind if the write fails, and overwriting an earlier export from the
same day would lose work.

HOW: artifact_handle() is a context manager that writes the artifact to
a temporary file in the target directory and always removes that file on
exit. DirectoryDownloadSink reserves a conflict-free final name with an
exclusive create and atomically moves the temporary file onto it while
the handle is open.

RULES:
- First attempt: {filename}; conflict: counter before the extension
  (speech_to_text_2026-10-19-2.docx), counter starts at 2
- An existing file is never overwritten, even one created concurrently
- The temporary handle is released whether or not delivery succeeds
- The output directory must already exist
"""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

from speech_docx.exporters.base import ExportArtifact

logger = logging.getLogger(__name__)


def resolve_output_path(output_dir: Path, filename: str) -> Path:
    """Return output_dir/filename, or a numbered variant that does not exist yet."""
    base_path = output_dir / filename
    if not base_path.exists():
        return base_path

    dot_idx = filename.rfind(".")
    if dot_idx > 0:
        name, ext = filename[:dot_idx], filename[dot_idx:]
    else:
        name, ext = filename, ""

    counter = 2
    while True:
        candidate = output_dir / "{}-{}{}".format(name, counter, ext)
        if not candidate.exists():
            return candidate
        counter += 1


def claim_output_path(output_dir: Path, filename: str) -> Path:
    """Create an empty file at a conflict-free name and return its path.

    WHY: Checking for a free name and then writing to it leaves a window
    in which another writer can take the same name. Creating the file
    with O_EXCL reserves it atomically; a lost race moves on to the next
    counter value.
    """
    while True:
        candidate = resolve_output_path(output_dir, filename)
        try:
            fd = os.open(str(candidate), os.O_CREAT | os.O_EXCL | os.O_WRONLY)
        except FileExistsError:
            logger.debug("%s was taken concurrently, trying the next name", candidate.name)
            continue
        os.close(fd)
        return candidate


@contextmanager
def artifact_handle(artifact: ExportArtifact, directory: Path) -> Iterator[Path]:
    """Materialize an artifact as a temporary file for the duration of a block.

    Yields:
        Path of the temporary file. It is deleted on exit unless the block
        moved it elsewhere.
    """
    fd, name = tempfile.mkstemp(prefix=".speech_docx_", suffix=".part", dir=str(directory))
    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(artifact.content)
        yield path
    finally:
        if path.exists():
            path.unlink()
            logger.debug("Released temporary download handle %s", path.name)


class DirectoryDownloadSink:
    """Saves artifacts into a local directory."""

    def __init__(self, output_dir: Union[str, Path]) -> None:
        self.output_dir = Path(output_dir)

    def deliver(self, artifact: ExportArtifact) -> Path:
        """Save the artifact and return where it was written.

        Raises:
            FileNotFoundError: The output directory does not exist.
        """
        if not self.output_dir.is_dir():
            raise FileNotFoundError("Output directory does not exist: {}".format(self.output_dir))

        with artifact_handle(artifact, self.output_dir) as temp_path:
            target = claim_output_path(self.output_dir, artifact.filename)
            try:
                os.replace(str(temp_path), str(target))
            except OSError:
                target.unlink()
                raise
        logger.info("Saved %s (%d bytes)", target.name, len(artifact.content))
        return target
