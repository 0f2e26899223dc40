"""FastAPI application exposing the dictation workspace over HTTP.

WHY: The recognition engine runs where the microphone is, typically a
browser. The browser pushes hypothesis batches here, the workspace
merges them into the document, and the user's edit and export commands
go through the same API, so the merge and the Word export stay on the
Python side.

HOW: A single module-level DictationWorkspace backed by a
PushRecognitionAdapter. Session endpoints start/stop dictation and
forward results, end, and error signals to the adapter. Editor endpoints
read, replace, clear, and style the document. /export/{key} returns the
exported file as an attachment download.

RULES:
- Every handler runs under the workspace lock (one command at a time)
- EditorNotReady → 409, UnsupportedPlatform → 501,
  RecognitionRuntimeError → 502, EmptyContent → 422
- Unknown exporter → 404, unknown style → 400
- Results pushed while idle are accepted and ignored (200, content unchanged)
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response

from speech_docx import __version__
from speech_docx.config import API_HOST, API_PORT, configure_logging
from speech_docx.core.errors import (
    EditorNotReady,
    EmptyContent,
    RecognitionRuntimeError,
    SpeechDocxError,
    UnsupportedPlatform,
)
from speech_docx.exporters import EXPORTERS
from speech_docx.recognition import Hypothesis, PushRecognitionAdapter
from speech_docx.server.models import (
    EditorContentRequest,
    EditorStateResponse,
    ErrorResponse,
    ExporterInfo,
    HealthResponse,
    RecognitionErrorRequest,
    ResultsRequest,
    StyleToggleResponse,
)
from speech_docx.workspace import DictationWorkspace

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App and workspace setup
# ---------------------------------------------------------------------------

recognizer = PushRecognitionAdapter()
workspace = DictationWorkspace(adapter=recognizer)

app = FastAPI(
    title="Speech-to-DOCX API",
    description=(
        "Merge streaming speech-recognition results into an editable "
        "right-to-left rich-text document, style it, and download it as a "
        "Word file."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

_ERROR_STATUS = (
    (EditorNotReady, 409),
    (UnsupportedPlatform, 501),
    (RecognitionRuntimeError, 502),
    (EmptyContent, 422),
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _http_error(exc: SpeechDocxError) -> HTTPException:
    """Translate a workspace error into an HTTPException."""
    for error_cls, status_code in _ERROR_STATUS:
        if isinstance(exc, error_cls):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))


def _state_response() -> EditorStateResponse:
    snap = workspace.snapshot()
    return EditorStateResponse(
        html=snap.html,
        text=snap.text,
        is_empty=snap.is_empty,
        state=snap.state.value,
        bold_active=snap.bold_active,
        underline_active=snap.underline_active,
        last_error=snap.last_error,
    )


# ---------------------------------------------------------------------------
# Endpoints: Session
# ---------------------------------------------------------------------------


@app.post(
    "/session/start",
    response_model=EditorStateResponse,
    tags=["session"],
    summary="Start dictation",
    description=(
        "Snapshot the current document and start accepting recognition "
        "results. Calling it while already listening changes nothing."
    ),
    responses={
        409: {"model": ErrorResponse, "description": "Editor not ready"},
        501: {"model": ErrorResponse, "description": "No recognition capability"},
        502: {"model": ErrorResponse, "description": "Recognizer failed to start"},
    },
)
async def start_session() -> EditorStateResponse:
    try:
        workspace.start()
    except SpeechDocxError as exc:
        raise _http_error(exc)
    return _state_response()


@app.post(
    "/session/stop",
    response_model=EditorStateResponse,
    tags=["session"],
    summary="Stop dictation",
    description="Stop immediately. Live interim text stays visible but is not finalized.",
)
async def stop_session() -> EditorStateResponse:
    workspace.stop()
    return _state_response()


@app.post(
    "/session/results",
    response_model=EditorStateResponse,
    tags=["session"],
    summary="Push a batch of recognition results",
    description=(
        "Deliver one ordered batch of hypotheses. The document is republished "
        "as snapshot + finalized text + the latest interim text."
    ),
)
async def push_results(request: ResultsRequest) -> EditorStateResponse:
    batch = [Hypothesis(text=h.text, is_final=h.is_final) for h in request.hypotheses]
    with workspace.lock:
        recognizer.push_results(batch)
    return _state_response()


@app.post(
    "/session/end",
    response_model=EditorStateResponse,
    tags=["session"],
    summary="Signal that the recognizer ended",
)
async def end_session() -> EditorStateResponse:
    with workspace.lock:
        recognizer.push_end()
    return _state_response()


@app.post(
    "/session/error",
    response_model=EditorStateResponse,
    tags=["session"],
    summary="Signal a recognizer error",
    description="Forces the session back to idle and records the error code.",
)
async def error_session(request: RecognitionErrorRequest) -> EditorStateResponse:
    with workspace.lock:
        recognizer.push_error(request.code, request.message)
    return _state_response()


# ---------------------------------------------------------------------------
# Endpoints: Editor
# ---------------------------------------------------------------------------


@app.get(
    "/editor",
    response_model=EditorStateResponse,
    tags=["editor"],
    summary="Get the document and dictation state",
)
async def get_editor() -> EditorStateResponse:
    return _state_response()


@app.put(
    "/editor",
    response_model=EditorStateResponse,
    tags=["editor"],
    summary="Replace the document content",
)
async def put_editor(request: EditorContentRequest) -> EditorStateResponse:
    workspace.set_html(request.html)
    return _state_response()


@app.post(
    "/editor/clear",
    response_model=EditorStateResponse,
    tags=["editor"],
    summary="Clear the document",
    description="Empties the document and the dictation buffers. Listening state is kept.",
)
async def clear_editor() -> EditorStateResponse:
    workspace.clear()
    return _state_response()


@app.post(
    "/editor/toggle/{style}",
    response_model=StyleToggleResponse,
    tags=["editor"],
    summary="Toggle bold or underline",
    responses={
        400: {"model": ErrorResponse, "description": "Unknown style"},
    },
)
async def toggle_style(style: str) -> StyleToggleResponse:
    try:
        active = workspace.toggle_style(style)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return StyleToggleResponse(style=style, active=active)


# ---------------------------------------------------------------------------
# Endpoints: Export
# ---------------------------------------------------------------------------


@app.get(
    "/exporters",
    response_model=List[ExporterInfo],
    tags=["export"],
    summary="List available export formats",
)
async def list_exporters() -> List[ExporterInfo]:
    result = []
    for key, exporter_cls in sorted(EXPORTERS.items()):
        exporter = exporter_cls()
        result.append(ExporterInfo(
            key=key,
            name=exporter.name,
            extension=exporter.extension,
            media_type=exporter.media_type,
        ))
    return result


@app.get(
    "/export/{exporter_key}",
    tags=["export"],
    summary="Download the document",
    description=(
        "Export the current document with the given exporter and return it "
        "as an attachment named speech_to_text_<YYYY-MM-DD><ext>."
    ),
    responses={
        404: {"model": ErrorResponse, "description": "Unknown exporter"},
        422: {"model": ErrorResponse, "description": "Nothing to export"},
    },
)
async def export_document(exporter_key: str) -> Response:
    if exporter_key not in EXPORTERS:
        available = ", ".join(sorted(EXPORTERS.keys()))
        raise HTTPException(
            status_code=404,
            detail="Unknown exporter '{}'. Available: {}".format(exporter_key, available),
        )
    try:
        artifact = workspace.export(exporter_key)
    except SpeechDocxError as exc:
        raise _http_error(exc)

    return Response(
        content=artifact.content,
        media_type=artifact.media_type,
        headers={"Content-Disposition": 'attachment; filename="{}"'.format(artifact.filename)},
    )


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the speech-docx-api console script."""
    import uvicorn

    configure_logging()
    logger.info("Starting API on %s:%d", API_HOST, API_PORT)
    uvicorn.run(app, host=API_HOST, port=API_PORT)
