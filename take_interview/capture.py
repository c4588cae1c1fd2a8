"""Recording lifecycle for one question's spoken answer."""
from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Callable, Dict, FrozenSet, List, Optional, Protocol

from errors import CaptureStateError, DeviceUnavailableError


logger = logging.getLogger(__name__)


class CaptureState(str, Enum):
    IDLE = "Idle"
    RECORDING = "Recording"
    PAUSED = "Paused"
    FINALIZED = "Finalized"


class CaptureAction(str, Enum):
    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    FINALIZE = "finalize"
    REOPEN = "reopen"


TRANSITIONS: Dict[CaptureAction, Dict[CaptureState, CaptureState]] = {
    CaptureAction.START: {CaptureState.IDLE: CaptureState.RECORDING},
    CaptureAction.PAUSE: {CaptureState.RECORDING: CaptureState.PAUSED},
    CaptureAction.RESUME: {CaptureState.PAUSED: CaptureState.RECORDING},
    CaptureAction.FINALIZE: {
        CaptureState.IDLE: CaptureState.FINALIZED,
        CaptureState.RECORDING: CaptureState.FINALIZED,
        CaptureState.PAUSED: CaptureState.FINALIZED,
    },
    CaptureAction.REOPEN: {CaptureState.FINALIZED: CaptureState.PAUSED},
}

LISTENING: FrozenSet[CaptureState] = frozenset({CaptureState.RECORDING})


def next_state(state: CaptureState, action: CaptureAction) -> CaptureState:
    """Single transition function; raises for combinations the flow never allows."""

    allowed = TRANSITIONS[action]
    if state not in allowed:
        raise CaptureStateError(
            f"Cannot {action.value} while {state.value}",
            detail={"state": state.value, "action": action.value},
        )
    return allowed[state]


class SpeechEngine(Protocol):
    """Speech-to-text source. ``start`` raises DeviceUnavailableError on denied access."""

    def start(self, on_text: Callable[[str], None], *, language: str) -> None: ...

    def stop(self) -> None: ...


class RelayedSpeechEngine:
    """Engine whose recognition runs on the applicant's device.

    The device pushes recognized fragments through ``push``; they only reach the
    controller while listening.
    """

    def __init__(self) -> None:
        self._on_text: Optional[Callable[[str], None]] = None
        self.microphone_available = True
        self.language: Optional[str] = None

    @property
    def listening(self) -> bool:
        return self._on_text is not None

    def start(self, on_text: Callable[[str], None], *, language: str) -> None:
        if not self.microphone_available:
            raise DeviceUnavailableError(
                "Microphone access is blocked. Please allow microphone permissions and refresh."
            )
        self.language = language
        self._on_text = on_text

    def stop(self) -> None:
        self._on_text = None

    def push(self, fragment: str) -> None:
        if self._on_text is None:
            raise CaptureStateError("Transcript received while not recording")
        self._on_text(fragment)


class AnswerCapture:
    """Accumulates the transcript for a single question.

    The transcript is append-only: resuming after a pause keeps adding to it.
    Once finalized the transcript is frozen unless the controller is reopened
    after a failed submission.
    """

    def __init__(self, question_id: int, engine: SpeechEngine, *, language: str = "en-US") -> None:
        self.question_id = question_id
        self._engine = engine
        self._language = language
        self._state = CaptureState.IDLE
        self._fragments: List[str] = []
        self._lock = threading.Lock()

    @property
    def state(self) -> CaptureState:
        return self._state

    @property
    def transcript(self) -> str:
        with self._lock:
            return " ".join(self._fragments)

    def start(self) -> CaptureState:
        return self._begin(CaptureAction.START)

    def resume(self) -> CaptureState:
        return self._begin(CaptureAction.RESUME)

    def pause(self) -> CaptureState:
        target = next_state(self._state, CaptureAction.PAUSE)
        self._engine.stop()
        self._state = target
        return self._state

    def finalize(self) -> str:
        """Stop capture if still recording, freeze and return the transcript."""

        target = next_state(self._state, CaptureAction.FINALIZE)
        if self._state in LISTENING:
            self.pause()
        self._state = target
        return self.transcript

    def reopen(self) -> CaptureState:
        self._state = next_state(self._state, CaptureAction.REOPEN)
        return self._state

    def _begin(self, action: CaptureAction) -> CaptureState:
        previous = self._state
        self._state = next_state(previous, action)
        try:
            self._engine.start(self._append, language=self._language)
        except Exception:
            self._state = previous
            raise
        return self._state

    def _append(self, fragment: str) -> None:
        text = fragment.strip()
        if not text:
            return
        with self._lock:
            if self._state is not CaptureState.RECORDING:
                raise CaptureStateError("Transcript received while not recording")
            self._fragments.append(text)


__all__ = [
    "AnswerCapture",
    "CaptureAction",
    "CaptureState",
    "RelayedSpeechEngine",
    "SpeechEngine",
    "next_state",
]
