"""Recognition adapters driven by recorded scripts or pushed events.

WHY: Without a live microphone, the CLI replays a recorded recognition
session and the HTTP API receives batches from a front end that runs the
real engine. Both need to look like any other recognition capability to
the TranscriptSession.

HOW: ScriptedRecognitionAdapter holds a list of events and replays them
through play() after start(). PushRecognitionAdapter forwards batches
handed to push_results()/push_end()/push_error() while it is running.
load_script() reads the JSON Lines event format:

    {"results": [{"text": "שלום", "is_final": false}]}
    {"end": true}
    {"error": "network", "message": "optional detail"}

RULES:
- Events delivered after stop() are dropped
- end and error events both stop the adapter after notifying the listener
- Blank lines in a script are skipped; malformed lines raise ValueError
  with the line number
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from speech_docx.recognition.base import (
    BaseRecognitionAdapter,
    Hypothesis,
    RecognitionConfig,
    RecognitionListener,
)

logger = logging.getLogger(__name__)

EVENT_RESULTS = "results"
EVENT_END = "end"
EVENT_ERROR = "error"


@dataclass
class RecognitionEvent:
    """One recorded adapter event: a batch, an end signal, or an error."""

    kind: str
    batch: List[Hypothesis] = field(default_factory=list)
    code: str = ""
    message: str = ""


def _parse_event(data: Dict[str, Any]) -> RecognitionEvent:
    if EVENT_RESULTS in data:
        batch = [
            Hypothesis(text=str(item.get("text", "")), is_final=bool(item.get("is_final", False)))
            for item in data[EVENT_RESULTS]
        ]
        return RecognitionEvent(kind=EVENT_RESULTS, batch=batch)
    if EVENT_ERROR in data:
        return RecognitionEvent(
            kind=EVENT_ERROR,
            code=str(data[EVENT_ERROR]),
            message=str(data.get("message", "")),
        )
    if data.get(EVENT_END):
        return RecognitionEvent(kind=EVENT_END)
    raise ValueError("Unrecognized event: {}".format(data))


def load_script(path: Union[str, Path]) -> List[RecognitionEvent]:
    """Load a JSON Lines recognition script.

    Args:
        path: Path to the .jsonl file.

    Returns:
        Events in file order.
    """
    events: List[RecognitionEvent] = []
    text = Path(path).read_text(encoding="utf-8")
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            data = json.loads(line)
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            events.append(_parse_event(data))
        except (ValueError, TypeError) as exc:
            raise ValueError("{}:{}: invalid event ({})".format(path, lineno, exc)) from exc
    return events


def _deliver(listener: RecognitionListener, event: RecognitionEvent) -> None:
    if event.kind == EVENT_RESULTS:
        listener.on_results(list(event.batch))
    elif event.kind == EVENT_END:
        listener.on_end()
    elif event.kind == EVENT_ERROR:
        listener.on_error(event.code, event.message)


class ScriptedRecognitionAdapter(BaseRecognitionAdapter):
    """Replays a fixed list of recognition events."""

    def __init__(self, events: Optional[List[RecognitionEvent]] = None) -> None:
        super().__init__()
        self.events: List[RecognitionEvent] = list(events or [])
        self.start_count = 0

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ScriptedRecognitionAdapter":
        return cls(load_script(path))

    def start(self, config: RecognitionConfig, listener: RecognitionListener) -> None:
        self.config = config
        self._listener = listener
        self.start_count += 1
        logger.info("Replaying %d recognition events (locale %s)", len(self.events), config.locale)

    def stop(self) -> None:
        self._listener = None

    def play(self) -> int:
        """Deliver the scripted events in order until done or stopped.

        Returns:
            The number of events delivered.
        """
        delivered = 0
        for event in self.events:
            listener = self._listener
            if listener is None:
                break
            if event.kind in (EVENT_END, EVENT_ERROR):
                self._listener = None
            _deliver(listener, event)
            delivered += 1
        return delivered


class PushRecognitionAdapter(BaseRecognitionAdapter):
    """Forwards externally pushed events while running."""

    def start(self, config: RecognitionConfig, listener: RecognitionListener) -> None:
        self.config = config
        self._listener = listener
        logger.info("Push recognition started (locale %s)", config.locale)

    def stop(self) -> None:
        self._listener = None

    def push_results(self, batch: List[Hypothesis]) -> bool:
        """Deliver one batch. Returns False if the adapter is not running."""
        return self._push(RecognitionEvent(kind=EVENT_RESULTS, batch=list(batch)))

    def push_end(self) -> bool:
        return self._push(RecognitionEvent(kind=EVENT_END))

    def push_error(self, code: str, message: str = "") -> bool:
        return self._push(RecognitionEvent(kind=EVENT_ERROR, code=code, message=message))

    def _push(self, event: RecognitionEvent) -> bool:
        listener = self._listener
        if listener is None:
            logger.debug("Dropping %s event: adapter not running", event.kind)
            return False
        if event.kind in (EVENT_END, EVENT_ERROR):
            self._listener = None
        _deliver(listener, event)
        return True
