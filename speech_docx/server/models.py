"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation. Pydantic
models enforce field types at runtime and generate JSON Schema that
appears in the /docs UI.

HOW: One model per request body or response shape. All fields carry
Field descriptions for rich OpenAPI docs.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Response models never expose internal session buffers
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class HypothesisIn(BaseModel):
    """One recognition hypothesis pushed by the front end."""

    text: str = Field(description="Recognized text for the current segment.")
    is_final: bool = Field(
        default=False,
        description="True when the recognizer will not revise this text again.",
    )


class ResultsRequest(BaseModel):
    """An ordered batch of hypotheses, as delivered by the recognizer.

    RULES:
    - Hypotheses are processed left to right
    - Finals are appended, the last interim replaces the live text
    """

    hypotheses: List[HypothesisIn] = Field(description="Hypotheses in index order.")

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "hypotheses": [
                    {"text": "שלום עולם", "is_final": True},
                    {"text": "טוב", "is_final": False},
                ]
            }
        ]
    }}


class RecognitionErrorRequest(BaseModel):
    """An error signal from the recognizer."""

    code: str = Field(description="Recognizer error code, e.g. 'network' or 'not-allowed'.")
    message: str = Field(default="", description="Optional human-readable detail.")


class EditorContentRequest(BaseModel):
    """Replacement content for the editor."""

    html: str = Field(description="Editor HTML (<p>, <strong>, <u>, ...).")


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class EditorStateResponse(BaseModel):
    """Current editor content and dictation state.

    RULES:
    - state is 'idle' or 'listening'
    - last_error is the code of the most recent recognizer error, if any
    """

    html: str = Field(description="Editor content as HTML.")
    text: str = Field(description="Editor content as plain text, one line per paragraph.")
    is_empty: bool = Field(description="True when the editor holds no text.")
    state: str = Field(description="Dictation session state.")
    bold_active: bool = Field(description="Whether the bold mark is active for typing.")
    underline_active: bool = Field(description="Whether the underline mark is active for typing.")
    last_error: Optional[str] = Field(
        default=None,
        description="Most recent recognition error code, cleared on start.",
    )


class StyleToggleResponse(BaseModel):
    style: str = Field(description="The toggled style ('bold' or 'underline').")
    active: bool = Field(description="Whether the style is active after the toggle.")


class ExporterInfo(BaseModel):
    """Description of an available export format."""

    key: str = Field(description="Exporter identifier used in /export/{key}.")
    name: str = Field(description="Human-readable format name.")
    extension: str = Field(description="File extension produced (e.g. '.docx').")
    media_type: str = Field(description="MIME type of the exported file.")


class ErrorResponse(BaseModel):
    """Standard error response body.

    RULES:
    - detail is always a human-readable error message
    """

    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
