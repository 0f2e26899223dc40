"""Recognition capabilities consumed by the transcript session.

WHY: The session depends on an interface, not on a concrete engine.
This package holds that interface and the adapters shipped with it.
"""

from speech_docx.recognition.base import (
    BaseRecognitionAdapter,
    Hypothesis,
    RecognitionConfig,
    RecognitionListener,
)
from speech_docx.recognition.scripted import (
    PushRecognitionAdapter,
    RecognitionEvent,
    ScriptedRecognitionAdapter,
    load_script,
)

__all__ = [
    "BaseRecognitionAdapter",
    "Hypothesis",
    "PushRecognitionAdapter",
    "RecognitionConfig",
    "RecognitionEvent",
    "RecognitionListener",
    "ScriptedRecognitionAdapter",
    "load_script",
]
