"""
Company service - list, fetch, create and update company records
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from easyform.config.database import Collections
from easyform.config.settings import settings
from easyform.database.db_operations import db_ops
from easyform.utils.errors import NotFoundError, ValidationError
from easyform.utils.helpers import is_blank, unique_in_order

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "email", "metadata", "approvedForms")


async def list_companies(database: AsyncIOMotorDatabase) -> List[Dict]:
    return await db_ops.get_all(database, Collections.COMPANIES, limit=settings.COMPANY_LIST_LIMIT)


async def get_company(database: AsyncIOMotorDatabase, company_id: str) -> Dict:
    company = await db_ops.get_by_id(database, Collections.COMPANIES, company_id)
    if company is None:
        raise NotFoundError("company not found")
    return company


async def create_company(
    database: AsyncIOMotorDatabase,
    name: Optional[str],
    email: Optional[str],
    metadata: Optional[Dict[str, Any]] = None,
    approved_forms: Optional[List[Any]] = None,
) -> Dict:
    if is_blank(name) or is_blank(email):
        raise ValidationError("name and email required")

    company = {
        "name": name,
        "email": email,
        "createdAt": datetime.utcnow(),
        "approvedForms": unique_in_order(approved_forms or []),
        "metadata": metadata or {},
    }
    created = await db_ops.create(database, Collections.COMPANIES, company)
    logger.info("🏢 Company created id=%s", created["_id"])
    return created


async def update_company(database: AsyncIOMotorDatabase, company_id: str, fields: Dict[str, Any]) -> Dict:
    """
    Replace whitelisted top-level fields of a company.

    Keys outside UPDATABLE_FIELDS are dropped before anything is written, so a
    payload made only of unknown keys leaves the stored document untouched.
    """
    update_data = {key: value for key, value in fields.items() if key in UPDATABLE_FIELDS}
    if not update_data:
        raise ValidationError(
            "at least one of name, email, metadata, approvedForms required",
            error="no_updatable_fields",
        )

    for key in ("name", "email"):
        if key in update_data and is_blank(update_data[key]):
            raise ValidationError(f"{key} cannot be empty")

    # approvedForms must stay a list so the approval flow can $addToSet onto it
    if "approvedForms" in update_data:
        update_data["approvedForms"] = unique_in_order(update_data["approvedForms"] or [])
    if "metadata" in update_data and update_data["metadata"] is None:
        update_data["metadata"] = {}

    updated = await db_ops.update_by_id(database, Collections.COMPANIES, company_id, {"$set": update_data})
    if updated is None:
        raise NotFoundError("company not found")
    return updated


async def link_approved_form(database: AsyncIOMotorDatabase, company_id: str, form_id: str) -> bool:
    """Add form_id to the company's approvedForms set; False when no company matched"""
    return await db_ops.update_one_by_id(
        database,
        Collections.COMPANIES,
        company_id,
        {"$addToSet": {"approvedForms": form_id}},
    )
