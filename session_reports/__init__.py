from __future__ import annotations  # Answer review package exports

from .models import SKIPPED_TEXT, AnswerReview, ReviewEntry
from .pdf import render_review_pdf
from .review import build_review

__all__ = ["AnswerReview", "ReviewEntry", "SKIPPED_TEXT", "build_review", "render_review_pdf"]
