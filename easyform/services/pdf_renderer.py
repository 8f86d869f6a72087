"""
Submission PDF renderer.

Loads a submission with its company and form, then lays out a fixed A4
document: company header, form title block and one line per answer in the
order the answers were stored.
"""
import io
import logging
from datetime import datetime
from typing import Any, Dict, Optional
from xml.sax.saxutils import escape

from motor.motor_asyncio import AsyncIOMotorDatabase
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from easyform.config.database import Collections
from easyform.config.settings import settings
from easyform.database.db_operations import db_ops
from easyform.services.submission_service import get_submission

logger = logging.getLogger(__name__)

PAGE_MARGIN = 50
DATE_FORMAT = "%Y-%m-%d %H:%M:%S UTC"
DEFAULT_FORM_TITLE = "Form Submission"
DEFAULT_LABEL = "Field"

BRAND_COLOR = colors.HexColor("#052A74")
MUTED_COLOR = colors.HexColor("#555555")
LABEL_COLOR = colors.HexColor("#111827")
VALUE_HEX = "#374151"


async def load_submission_bundle(database: AsyncIOMotorDatabase, submission_id: str) -> Dict[str, Optional[Dict]]:
    """Submission is required; company and form are best-effort and may be None"""
    submission = await get_submission(database, submission_id)

    company = None
    if submission.get("companyId"):
        company = await db_ops.get_by_id(database, Collections.COMPANIES, submission["companyId"])
    form = None
    if submission.get("formId"):
        form = await db_ops.get_by_id(database, Collections.FORMS, submission["formId"])

    if company is None:
        logger.warning("Company %s not found for submission %s", submission.get("companyId"), submission_id)
    if form is None:
        logger.warning("Form %s not found for submission %s", submission.get("formId"), submission_id)

    return {"submission": submission, "company": company, "form": form}


def format_answer_value(answer: Dict[str, Any]) -> str:
    value = answer.get("value")
    if answer.get("type") == "checkbox":
        return "Yes" if value else "No"
    if value is None:
        return ""
    return str(value)


def answer_label(answer: Dict[str, Any]) -> str:
    return answer.get("label") or answer.get("fieldId") or DEFAULT_LABEL


def format_timestamp(value: Any) -> str:
    if isinstance(value, datetime):
        return value.strftime(DATE_FORMAT)
    return "" if value is None else str(value)


def pdf_filename(submission_id: str) -> str:
    return f"{settings.PDF_FILENAME_PREFIX}-{submission_id}.pdf"


def _styles() -> Dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "company": ParagraphStyle("company", parent=base["Normal"], fontSize=20, leading=24, textColor=BRAND_COLOR),
        "address": ParagraphStyle("address", parent=base["Normal"], fontSize=12, leading=15),
        "title": ParagraphStyle("title", parent=base["Normal"], fontSize=18, leading=22),
        "meta": ParagraphStyle("meta", parent=base["Normal"], fontSize=10, leading=13, textColor=MUTED_COLOR),
        "section": ParagraphStyle("section", parent=base["Normal"], fontSize=12, leading=15),
        "answer": ParagraphStyle("answer", parent=base["Normal"], fontSize=11, leading=14, textColor=LABEL_COLOR),
    }


def build_story(submission: Dict, company: Optional[Dict] = None, form: Optional[Dict] = None) -> list:
    """Flowables for the document. Missing company or form leaves those parts blank."""
    styles = _styles()
    company = company or {}
    form = form or {}
    metadata = company.get("metadata") or {}

    elems = [
        Paragraph(escape(str(company.get("name") or "")), styles["company"]),
        Paragraph(escape(str(metadata.get("address") or "")), styles["address"]),
        Spacer(1, 14),
        Paragraph(escape(str(form.get("title") or DEFAULT_FORM_TITLE)), styles["title"]),
        Spacer(1, 7),
        Paragraph(escape(f"Form ID: {submission.get('formId', '')}"), styles["meta"]),
        Paragraph(escape(f"Submission ID: {submission.get('_id', '')}"), styles["meta"]),
        Paragraph(escape(f"Date: {format_timestamp(submission.get('createdAt'))}"), styles["meta"]),
        Spacer(1, 14),
        Paragraph("<u>Answers:</u>", styles["section"]),
        Spacer(1, 7),
    ]

    answers = submission.get("answers")
    if not isinstance(answers, list):
        answers = []
    for answer in answers:
        if not isinstance(answer, dict):
            continue
        label = escape(str(answer_label(answer)))
        value = escape(format_answer_value(answer))
        elems.append(Paragraph(
            f'{label}: <font color="{VALUE_HEX}">{value}</font>',
            styles["answer"],
        ))
        elems.append(Spacer(1, 3))

    return elems


def render_submission_pdf(submission: Dict, company: Optional[Dict] = None, form: Optional[Dict] = None) -> bytes:
    form = form or {}
    stream = io.BytesIO()
    doc = SimpleDocTemplate(
        stream,
        pagesize=A4,
        leftMargin=PAGE_MARGIN,
        rightMargin=PAGE_MARGIN,
        topMargin=PAGE_MARGIN,
        bottomMargin=PAGE_MARGIN,
        title=str(form.get("title") or DEFAULT_FORM_TITLE),
    )
    doc.build(build_story(submission, company, form))
    return stream.getvalue()
