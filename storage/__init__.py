"""Persistence boundary for interviews, questions, applicants and answers."""
from .base import ResourceStore
from .models import (
    Answer,
    Applicant,
    ApplicantStatus,
    Difficulty,
    Interview,
    InterviewStatus,
    InterviewWithCounts,
    Question,
)
from .repository import Repository
from .rest import RestStore
from .sqlite import SqliteStore

__all__ = [
    "Answer",
    "Applicant",
    "ApplicantStatus",
    "Difficulty",
    "Interview",
    "InterviewStatus",
    "InterviewWithCounts",
    "Question",
    "Repository",
    "ResourceStore",
    "RestStore",
    "SqliteStore",
]
