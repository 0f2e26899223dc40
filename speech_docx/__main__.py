"""Package entry point for ``python -m speech_docx``.

WHY: Users run ``python -m speech_docx replay session.jsonl`` for CLI
mode, or ``python -m speech_docx --serve`` for the HTTP API.

HOW: Checks sys.argv for the ``--serve`` flag. If present, starts the
API under uvicorn. Otherwise, delegates to the CLI's main() function.
"""

import sys

if __name__ == "__main__":
    if "--serve" in sys.argv:
        from speech_docx.server.app import run_api
        run_api()
    else:
        from speech_docx.cli import main
        main()
