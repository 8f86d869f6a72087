"""
Company routes - list, fetch, create and update companies
"""
from fastapi import APIRouter, Depends, status
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from easyform.config.database import get_database
from easyform.models.company import CompanyCreate, CompanyUpdate
from easyform.services import company_service
from easyform.utils.errors import ValidationError
from easyform.utils.helpers import serialize_doc, serialize_docs

router = APIRouter(prefix="/company", tags=["Companies"])


@router.get("")
async def get_companies(
    id: Optional[str] = None,
    database: AsyncIOMotorDatabase = Depends(get_database),
):
    """Get one company by ?id=, or up to 100 companies"""
    if id:
        company = await company_service.get_company(database, id)
        return {"success": True, "company": serialize_doc(company)}

    companies = await company_service.list_companies(database)
    return {"success": True, "companies": serialize_docs(companies)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_company(
    payload: Optional[CompanyCreate] = None,
    database: AsyncIOMotorDatabase = Depends(get_database),
):
    """Create a new company"""
    payload = payload or CompanyCreate()
    company = await company_service.create_company(
        database,
        payload.name,
        payload.email,
        metadata=payload.metadata,
        approved_forms=payload.approvedForms,
    )
    company = serialize_doc(company)
    return {"success": True, "id": company["_id"], "company": company}


@router.put("")
async def update_company(
    id: Optional[str] = None,
    payload: Optional[CompanyUpdate] = None,
    database: AsyncIOMotorDatabase = Depends(get_database),
):
    """Replace whitelisted fields of a company"""
    if not id:
        raise ValidationError("company id is required", error="missing_id")

    update_data = payload.model_dump(exclude_unset=True) if payload else {}
    company = await company_service.update_company(database, id, update_data)
    return {"success": True, "company": serialize_doc(company)}
