"""
Submission service - immutable form submissions
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING

from easyform.config.database import Collections
from easyform.config.settings import settings
from easyform.database.db_operations import db_ops
from easyform.utils.errors import NotFoundError, ValidationError
from easyform.utils.helpers import is_blank

logger = logging.getLogger(__name__)


async def create_submission(
    database: AsyncIOMotorDatabase,
    company_id: Optional[str],
    form_id: Optional[str],
    answers: Optional[List[Dict[str, Any]]],
) -> Dict:
    """
    Store a submission as given.

    companyId and formId are free-text references and are not checked against
    the companies or forms collections.
    """
    if is_blank(company_id) or is_blank(form_id) or not answers:
        raise ValidationError("companyId, formId and at least one answer are required")

    submission = {
        "companyId": company_id,
        "formId": form_id,
        "answers": list(answers),
        "createdAt": datetime.utcnow(),
    }
    created = await db_ops.create(database, Collections.SUBMISSIONS, submission)
    logger.info("📨 Submission stored id=%s form=%s company=%s", created["_id"], form_id, company_id)
    return created


async def get_submission(database: AsyncIOMotorDatabase, submission_id: str) -> Dict:
    submission = await db_ops.get_by_id(database, Collections.SUBMISSIONS, submission_id)
    if submission is None:
        raise NotFoundError("submission not found")
    return submission


async def list_submissions(
    database: AsyncIOMotorDatabase,
    company_id: Optional[str] = None,
    form_id: Optional[str] = None,
) -> List[Dict]:
    filter_query = {}
    if company_id:
        filter_query["companyId"] = company_id
    if form_id:
        filter_query["formId"] = form_id

    return await db_ops.get_all(
        database,
        Collections.SUBMISSIONS,
        filter_query,
        sort=[("createdAt", DESCENDING)],
        limit=settings.SUBMISSION_LIST_LIMIT,
    )
