"""Applicant interview-taking flow."""
from .capture import AnswerCapture, CaptureAction, CaptureState, RelayedSpeechEngine, SpeechEngine, next_state
from .session import InterviewSession, open_session
from .status_gate import StatusGate
from .walker import NextQuestion, Outcome, SessionComplete, SessionWalker

__all__ = [
    "AnswerCapture",
    "CaptureAction",
    "CaptureState",
    "InterviewSession",
    "NextQuestion",
    "Outcome",
    "RelayedSpeechEngine",
    "SessionComplete",
    "SessionWalker",
    "SpeechEngine",
    "StatusGate",
    "next_state",
    "open_session",
]
