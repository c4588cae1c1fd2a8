from __future__ import annotations  # PDF rendering for applicant answer reviews

import os
from typing import Any, List, Tuple

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from .models import AnswerReview, ReviewEntry


DEJAVU_SANS = "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"  # System font
DEJAVU_SANS_BOLD = "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"  # System font

ACCENT = (45, 115, 245)  # Palette accent
TEXT = (34, 34, 34)  # Primary text color
MUTED = (100, 100, 100)  # Secondary text color
RULE = (230, 230, 230)  # Divider color


def _effective_width(pdf: FPDF) -> float:  # Compute effective page width
    return float(pdf.w) - float(pdf.l_margin) - float(pdf.r_margin)


class ReviewPDF(FPDF):  # PDF with banner header and page footer
    def __init__(self, title: str) -> None:
        super().__init__()
        self.header_title = title
        self.font_regular = "Helvetica"
        self.font_bold = "Helvetica"
        self.supports_unicode = False
        if os.path.exists(DEJAVU_SANS) and os.path.exists(DEJAVU_SANS_BOLD):
            self.add_font("DejaVu", "", DEJAVU_SANS)
            self.add_font("DejaVu", "B", DEJAVU_SANS_BOLD)
            self.font_regular = self.font_bold = "DejaVu"
            self.supports_unicode = True

    def clean(self, text: Any) -> str:  # Core fonts only cover latin-1
        value = "" if text is None else str(text)
        if self.supports_unicode:
            return value
        return value.encode("latin-1", "replace").decode("latin-1")

    def header(self) -> None:
        self.set_fill_color(*ACCENT)
        self.rect(0, 0, self.w, 18, style="F")
        self.set_text_color(255, 255, 255)
        self.set_font(self.font_bold, "B", 14)
        self.set_xy(self.l_margin, 5)
        self.cell(0, 8, self.clean(self.header_title), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        self.set_text_color(*TEXT)
        self.set_y(24)

    def footer(self) -> None:
        self.set_y(-12)
        self.set_draw_color(*RULE)
        self.line(self.l_margin, self.get_y(), self.w - self.r_margin, self.get_y())
        self.set_text_color(120, 120, 120)
        self.set_font(self.font_regular, "", 9)
        self.cell(0, 10, f"Page {self.page_no()}/{{nb}}", align="R")


def _meta_rows(review: AnswerReview) -> List[Tuple[str, str]]:
    return [
        ("Applicant", review.applicant_name),
        ("Status", review.interview_status),
        ("Interview", review.interview_title),
        ("Job role", review.job_role or "-"),
    ]


def _render_entry(pdf: ReviewPDF, entry: ReviewEntry) -> None:
    width = _effective_width(pdf)
    pdf.set_x(pdf.l_margin)
    pdf.set_font(pdf.font_bold, "B", 11)
    label = f"Question {entry.sequence}"
    if entry.difficulty:
        label += f" ({entry.difficulty})"
    pdf.cell(width, 7, pdf.clean(label), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_font(pdf.font_regular, "", 11)
    pdf.multi_cell(width, 6, pdf.clean(entry.question), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(1)
    pdf.set_text_color(*(MUTED if entry.skipped else TEXT))
    pdf.multi_cell(width, 6, pdf.clean(entry.display_answer), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_text_color(*TEXT)
    pdf.set_draw_color(*RULE)
    pdf.line(pdf.l_margin, pdf.get_y() + 2, pdf.l_margin + width, pdf.get_y() + 2)
    pdf.ln(5)


def render_review_pdf(review: AnswerReview) -> bytes:  # Build PDF payload for an answer review
    pdf = ReviewPDF(f"Interview Answers for {review.interview_title}")
    pdf.alias_nb_pages()
    pdf.set_margins(15, 22, 15)
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.add_page()

    for label, value in _meta_rows(review):
        pdf.set_text_color(*MUTED)
        pdf.set_font(pdf.font_regular, "", 10)
        pdf.cell(30, 6, pdf.clean(label), new_x=XPos.RIGHT, new_y=YPos.TOP)
        pdf.set_text_color(*TEXT)
        pdf.set_font(pdf.font_bold, "B", 10)
        pdf.cell(0, 6, pdf.clean(value), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(4)

    if not review.entries:
        pdf.set_font(pdf.font_regular, "", 11)
        pdf.cell(0, 8, "No answers submitted yet.", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    for entry in review.entries:
        _render_entry(pdf, entry)

    return bytes(pdf.output())


__all__ = ["render_review_pdf"]
