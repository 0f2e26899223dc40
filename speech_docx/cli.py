"""Command-line interface for Speech-to-DOCX.

WHY: Recorded recognition sessions and saved editor HTML need to become
Word documents without running the API or a browser, for example to
check how a recorded session merges.

HOW: argparse with two subcommands. ``replay`` loads a JSON Lines
recognition script, optionally seeds the editor with an HTML file, runs
one dictation session through ScriptedRecognitionAdapter, and exports
the result. ``convert`` loads an HTML file into the editor and exports
it. Status messages go to stderr; the saved path is printed to stdout.

RULES:
- replay EVENTS.jsonl [--base FILE.html]; convert INPUT.html
- --format: exporter key (default: docx); --output-dir (default: config)
- Output naming: speech_to_text_<YYYY-MM-DD><ext>, numbered on conflict
- Errors print "Error: ..." to stderr and exit 1; Ctrl-C exits 130
- A recognizer error in the script ends the session but still exports
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from speech_docx.config import DEFAULT_OUTPUT_DIR, configure_logging
from speech_docx.core.errors import SpeechDocxError
from speech_docx.exporters import DEFAULT_EXPORTER, EXPORTERS
from speech_docx.recognition import ScriptedRecognitionAdapter
from speech_docx.workspace import DictationWorkspace


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not pollute stdout so the CLI can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _read_html(path: str) -> str:
    html_path = Path(path)
    if not html_path.is_file():
        raise FileNotFoundError("File not found: {}".format(html_path))
    return html_path.read_text(encoding="utf-8")


def _replay(args: argparse.Namespace) -> Path:
    """Run one recorded dictation session and export the result."""
    adapter = ScriptedRecognitionAdapter.from_file(args.events)
    workspace = DictationWorkspace(adapter=adapter)
    if args.base:
        workspace.set_html(_read_html(args.base))
        _status("Loaded base content from {}".format(args.base))

    _status("Replaying {} recognition events...".format(len(adapter.events)))
    workspace.start()
    adapter.play()
    workspace.stop()

    error = workspace.session.last_error
    if error is not None:
        _status("  Recognition ended with error: {}".format(error.code))
    _status("  Merged text: {} chars".format(len(workspace.editor.get_text())))

    return workspace.download(Path(args.output_dir), args.format)


def _convert(args: argparse.Namespace) -> Path:
    """Export an editor HTML file."""
    workspace = DictationWorkspace()
    workspace.set_html(_read_html(args.input_file))
    return workspace.download(Path(args.output_dir), args.format)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable. Tests can inspect the parser without running anything.
    """
    parser = argparse.ArgumentParser(
        prog="speech_docx",
        description="Merge recorded speech-recognition sessions into rich text "
                    "and export right-to-left Word documents.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: SPEECH_DOCX_LOG_LEVEL or INFO).",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--format",
        default=DEFAULT_EXPORTER,
        choices=sorted(EXPORTERS.keys()),
        help="Export format (default: %(default)s).",
    )
    common.add_argument(
        "--output-dir",
        default=DEFAULT_OUTPUT_DIR,
        help="Directory to save the exported file (default: %(default)s).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    replay = subparsers.add_parser(
        "replay",
        parents=[common],
        help="Replay a JSON Lines recognition script and export the result.",
    )
    replay.add_argument("events", help="Path to the .jsonl recognition event script.")
    replay.add_argument(
        "--base",
        default=None,
        help="HTML file with editor content to dictate onto.",
    )
    replay.set_defaults(handler=_replay)

    convert = subparsers.add_parser(
        "convert",
        parents=[common],
        help="Export an editor HTML file.",
    )
    convert.add_argument("input_file", help="Path to the editor HTML file.")
    convert.set_defaults(handler=_convert)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        saved = args.handler(args)
    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        sys.exit(130)
    except (SpeechDocxError, ValueError, OSError) as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)

    _status("Done! Saved {}".format(saved.name))
    print(saved)


if __name__ == "__main__":
    main()
