"""Recognition adapter interface and hypothesis types.

WHY: Speech recognition is supplied by the platform (a browser engine, a
cloud streaming API, a recorded script). The session's merge logic must
not care which one is running, and must be testable with synthetic
event sequences. This module is the seam between the two.

HOW: BaseRecognitionAdapter is an ABC with start()/stop(). Once started,
an adapter reports to a RecognitionListener: ordered batches of
Hypothesis objects, an end signal, or an error code.

RULES:
- Batches are delivered in arrival order, hypotheses in index order
- A batch may mix final and interim hypotheses
- After stop(), an adapter delivers nothing further
- Errors are reported as short string codes, never raised to the listener
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Protocol

from speech_docx.config import (
    RECOGNITION_CONTINUOUS,
    RECOGNITION_INTERIM_RESULTS,
    RECOGNITION_LOCALE,
)


@dataclass(frozen=True)
class Hypothesis:
    """One recognition hypothesis.

    Attributes:
        text: Recognized text for the current segment.
        is_final: True when the engine will not revise this text again.
    """

    text: str
    is_final: bool = False


@dataclass(frozen=True)
class RecognitionConfig:
    """Settings passed to an adapter when a session starts."""

    locale: str = RECOGNITION_LOCALE
    continuous: bool = RECOGNITION_CONTINUOUS
    interim_results: bool = RECOGNITION_INTERIM_RESULTS


class RecognitionListener(Protocol):
    def on_results(self, batch: List[Hypothesis]) -> None: ...

    def on_end(self) -> None: ...

    def on_error(self, code: str, message: str = "") -> None: ...


class BaseRecognitionAdapter(ABC):
    """Abstract base for recognition capabilities.

    To add a new recognition source:
    1. Subclass BaseRecognitionAdapter
    2. Implement start() and stop()
    3. Deliver events to the listener given to start()
    """

    def __init__(self) -> None:
        self._listener: Optional[RecognitionListener] = None
        self.config: Optional[RecognitionConfig] = None

    @property
    def running(self) -> bool:
        return self._listener is not None

    @abstractmethod
    def start(self, config: RecognitionConfig, listener: RecognitionListener) -> None:
        """Begin delivering events for one session."""

    @abstractmethod
    def stop(self) -> None:
        """Stop delivering events; safe to call when not running."""
