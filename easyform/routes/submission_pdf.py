"""
Submission PDF route
"""
import io
import logging
from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from easyform.config.database import get_database
from easyform.services.pdf_renderer import load_submission_bundle, pdf_filename, render_submission_pdf
from easyform.utils.errors import RenderError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/submission-pdf", tags=["Submissions"])


@router.get("")
async def get_submission_pdf(
    id: Optional[str] = None,
    database: AsyncIOMotorDatabase = Depends(get_database),
):
    """Render a submission as an inline PDF"""
    if not id:
        raise ValidationError("Submission id is required", error="missing_id")

    # Lookups and rendering finish before the response starts, so every
    # failure up to here still gets a JSON error body.
    bundle = await load_submission_bundle(database, id)
    try:
        content = render_submission_pdf(bundle["submission"], bundle["company"], bundle["form"])
    except Exception as exc:
        logger.error("❌ PDF generation error for submission %s: %s", id, exc, exc_info=True)
        raise RenderError(str(exc))

    return StreamingResponse(
        io.BytesIO(content),
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{pdf_filename(id)}"'},
    )
