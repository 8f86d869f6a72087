"""
Form routes - template CRUD and the approval flow
"""
from fastapi import APIRouter, Body, Depends, status
from typing import Any, Dict, Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from easyform.config.database import get_database
from easyform.models.form import FormApproval
from easyform.services import form_service
from easyform.utils.errors import ValidationError
from easyform.utils.helpers import serialize_doc, serialize_docs

router = APIRouter(prefix="/forms", tags=["Forms"])


@router.get("")
async def get_forms(
    id: Optional[str] = None,
    database: AsyncIOMotorDatabase = Depends(get_database),
):
    """Get one form by ?id=, or the 200 newest forms"""
    if id:
        form = await form_service.get_form(database, id)
        return {"success": True, "form": serialize_doc(form)}

    forms = await form_service.list_forms(database)
    return {"success": True, "forms": serialize_docs(forms)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_form(
    payload: Optional[Dict[str, Any]] = Body(None),
    database: AsyncIOMotorDatabase = Depends(get_database),
):
    """Create a form template; the id defaults to a slug of the title"""
    form = serialize_doc(await form_service.create_form(database, payload or {}))
    return {"success": True, "id": form["_id"], "form": form}


@router.put("")
async def update_form(
    id: Optional[str] = None,
    payload: Optional[Dict[str, Any]] = Body(None),
    database: AsyncIOMotorDatabase = Depends(get_database),
):
    """Replace title, description, category, active and fields of a form"""
    if not id:
        raise ValidationError("form id is required", error="missing_id")

    form = await form_service.update_form(database, id, payload or {})
    return {"success": True, "form": serialize_doc(form)}


@router.put("/approve")
async def approve_form(
    payload: Optional[FormApproval] = None,
    database: AsyncIOMotorDatabase = Depends(get_database),
):
    """Approve a form for a company and add it to the company's approvedForms"""
    payload = payload or FormApproval()
    result = await form_service.approve_form(database, payload.formId, payload.companyId)
    return {
        "success": True,
        "form": serialize_doc(result["form"]),
        "companyLinked": result["companyLinked"],
    }
