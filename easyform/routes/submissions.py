"""
Submission routes - store and fetch form submissions
"""
from fastapi import APIRouter, Depends, status
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from easyform.config.database import get_database
from easyform.models.submission import SubmissionCreate
from easyform.services import submission_service
from easyform.utils.helpers import serialize_doc, serialize_docs

router = APIRouter(prefix="/submissions", tags=["Submissions"])


@router.get("")
async def get_submissions(
    id: Optional[str] = None,
    companyId: Optional[str] = None,
    formId: Optional[str] = None,
    database: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    - ?id=...                      single submission
    - ?companyId=...&formId=...    newest 200, filtered by whichever is given
    """
    if id:
        submission = await submission_service.get_submission(database, id)
        return {"success": True, "submission": serialize_doc(submission)}

    submissions = await submission_service.list_submissions(database, companyId, formId)
    return {"success": True, "submissions": serialize_docs(submissions)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_submission(
    payload: Optional[SubmissionCreate] = None,
    database: AsyncIOMotorDatabase = Depends(get_database),
):
    """Store a submission: {companyId, formId, answers: [{fieldId, label, type, value}]}"""
    payload = payload or SubmissionCreate()
    answers = [answer.model_dump(exclude_unset=True) for answer in payload.answers or []]
    submission = await submission_service.create_submission(
        database, payload.companyId, payload.formId, answers
    )
    submission = serialize_doc(submission)
    return {"success": True, "id": submission["_id"], "submission": submission}
