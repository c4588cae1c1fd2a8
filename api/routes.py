"""FastAPI routes for applicant interview sessions."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from api.deps import get_repository, get_session_registry, get_status_gate
from api.schemas import CaptureReq, SessionResp, StartReq, TranscriptReq, WelcomePayload
from config.settings import settings
from services.sessions import SessionRegistry
from storage import Repository
from take_interview import InterviewSession, RelayedSpeechEngine, StatusGate, open_session


router = APIRouter(prefix="/api/interview-sessions")


def _welcome(session: InterviewSession) -> WelcomePayload:
    applicant = session.applicant
    return WelcomePayload(
        interview_title=session.interview.title,
        job_role=session.interview.job_role,
        applicant_name=applicant.full_name,
        email_address=applicant.email_address,
        phone_number=applicant.phone_number,
        question_count=session.walker.total,
    )


def _resp(session: InterviewSession, *, welcome: bool = False) -> SessionResp:
    payload = SessionResp(**session.snapshot())
    if welcome:
        payload.welcome = _welcome(session)
    return payload


@router.post("/start", response_model=SessionResp)
def start(
    req: StartReq,
    repository: Repository = Depends(get_repository),
    gate: StatusGate = Depends(get_status_gate),
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResp:
    session = open_session(
        repository,
        gate,
        req.interview_id,
        req.applicant_id,
        language=settings.SPEECH_LANGUAGE,
    )
    registry.add(session)
    return _resp(session, welcome=True)


@router.get("/{session_id}", response_model=SessionResp)
def fetch(session_id: str, registry: SessionRegistry = Depends(get_session_registry)) -> SessionResp:
    return _resp(registry.require(session_id), welcome=True)


@router.post("/{session_id}/capture/start", response_model=SessionResp)
def capture_start(
    session_id: str,
    req: Optional[CaptureReq] = None,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResp:
    session = registry.require(session_id)
    # The device reports microphone permission; the relay enforces it on start.
    if req is not None and isinstance(session.engine, RelayedSpeechEngine):
        session.engine.microphone_available = req.microphone_available
    session.start_capture()
    return _resp(session)


@router.post("/{session_id}/capture/pause", response_model=SessionResp)
def capture_pause(session_id: str, registry: SessionRegistry = Depends(get_session_registry)) -> SessionResp:
    session = registry.require(session_id)
    session.pause_capture()
    return _resp(session)


@router.post("/{session_id}/capture/resume", response_model=SessionResp)
def capture_resume(
    session_id: str,
    req: Optional[CaptureReq] = None,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResp:
    session = registry.require(session_id)
    if req is not None and isinstance(session.engine, RelayedSpeechEngine):
        session.engine.microphone_available = req.microphone_available
    session.resume_capture()
    return _resp(session)


@router.post("/{session_id}/capture/transcript", response_model=SessionResp)
def capture_transcript(
    session_id: str,
    req: TranscriptReq,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResp:
    session = registry.require(session_id)
    session.receive_transcript(req.text)
    return _resp(session)


@router.post("/{session_id}/submit", response_model=SessionResp)
def submit(session_id: str, registry: SessionRegistry = Depends(get_session_registry)) -> SessionResp:
    session = registry.require(session_id)
    session.submit_current_answer()
    payload = _resp(session)
    if session.complete:
        registry.discard(session_id)
    return payload


@router.post("/{session_id}/skip", response_model=SessionResp)
def skip(session_id: str, registry: SessionRegistry = Depends(get_session_registry)) -> SessionResp:
    session = registry.require(session_id)
    session.skip_current_question()
    payload = _resp(session)
    if session.complete:
        registry.discard(session_id)
    return payload
