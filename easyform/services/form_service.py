"""
Form service - form templates and the approval flow that links a form to a company
"""
import logging
import re
from datetime import datetime
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

from easyform.config.database import Collections
from easyform.config.settings import settings
from easyform.database.db_operations import db_ops
from easyform.models.form import FormRecord
from easyform.services.company_service import link_approved_form
from easyform.utils.errors import ConflictError, NotFoundError, StoreError, ValidationError
from easyform.utils.helpers import is_blank

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled Form"
SLUG_PREFIX = "form_"
FALSE_STRINGS = ("", "false", "0", "no", "off")
UPDATABLE_FIELDS = ("title", "description", "category", "active", "fields")

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify_title(title: str) -> str:
    """'My Great Form!' -> 'form_my_great_form'"""
    slug = _NON_ALNUM.sub("_", (title or "").lower()).strip("_")
    return SLUG_PREFIX + (slug or "untitled_form")


def _clean_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _coerce_active(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip().lower() not in FALSE_STRINGS
    return bool(value)


def _coerce_fields(value: Any) -> list:
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    return []


def normalize_form(raw: Dict[str, Any], existing_id: Optional[str] = None) -> FormRecord:
    """
    Build the canonical form record from a loosely shaped request body.

    Identifier precedence: explicit body id, then existing_id (update path),
    then a slug of the title.
    """
    raw = raw or {}
    title = _clean_text(raw.get("title")) or DEFAULT_TITLE

    form_id = _clean_text(raw.get("id") or raw.get("_id"))
    if not form_id:
        form_id = existing_id or slugify_title(title)

    return FormRecord(
        _id=form_id,
        title=title,
        description=_clean_text(raw.get("description")),
        category=_clean_text(raw.get("category")),
        active=_coerce_active(raw.get("active")),
        fields=_coerce_fields(raw.get("fields")),
    )


async def create_form(database: AsyncIOMotorDatabase, raw: Dict[str, Any]) -> Dict:
    record = normalize_form(raw)

    if await db_ops.get_by_id(database, Collections.FORMS, record.id) is not None:
        raise ConflictError(f"form '{record.id}' already exists", error="form_exists")

    now = datetime.utcnow()
    document = record.model_dump(by_alias=True, exclude={"approvedAt"})
    document["createdAt"] = now
    document["updatedAt"] = now

    try:
        created = await db_ops.create(database, Collections.FORMS, document)
    except DuplicateKeyError:
        # Lost a race with a concurrent create of the same slug
        raise ConflictError(f"form '{record.id}' already exists", error="form_exists")

    logger.info("📝 Form created id=%s", created["_id"])
    return created


async def list_forms(database: AsyncIOMotorDatabase) -> List[Dict]:
    return await db_ops.get_all(
        database,
        Collections.FORMS,
        sort=[("createdAt", DESCENDING)],
        limit=settings.FORM_LIST_LIMIT,
    )


async def get_form(database: AsyncIOMotorDatabase, form_id: str) -> Dict:
    form = await db_ops.get_by_id(database, Collections.FORMS, form_id)
    if form is None:
        raise NotFoundError("form not found")
    return form


async def update_form(database: AsyncIOMotorDatabase, form_id: str, raw: Dict[str, Any]) -> Dict:
    # The path identifier always wins over an id in the body
    raw = {key: value for key, value in (raw or {}).items() if key not in ("id", "_id")}
    if not any(key in raw for key in UPDATABLE_FIELDS):
        raise ValidationError(
            "at least one of title, description, category, active, fields required",
            error="no_updatable_fields",
        )
    record = normalize_form(raw, existing_id=form_id)

    update_data = record.model_dump(include=set(UPDATABLE_FIELDS))
    update_data["updatedAt"] = datetime.utcnow()

    updated = await db_ops.update_by_id(database, Collections.FORMS, form_id, {"$set": update_data})
    if updated is None:
        raise NotFoundError("form not found")
    return updated


async def approve_form(database: AsyncIOMotorDatabase, form_id: Optional[str], company_id: Optional[str]) -> Dict:
    """
    Mark a form approved for a company and link it into the company's approvedForms.

    Two independent writes, not a transaction. If the form is missing nothing
    is written. If the second write fails the form stays approved without the
    reciprocal link; calling again repairs it since both writes are idempotent.

    Returns {"form": <updated form>, "companyLinked": <bool>}.
    """
    if is_blank(form_id) or is_blank(company_id):
        raise ValidationError("formId and companyId required")

    form = await db_ops.update_by_id(
        database,
        Collections.FORMS,
        form_id,
        {"$set": {"approved": True, "companyId": company_id, "approvedAt": datetime.utcnow()}},
    )
    if form is None:
        raise NotFoundError("form not found")

    try:
        linked = await link_approved_form(database, company_id, form["_id"])
    except PyMongoError as exc:
        logger.error(
            "❌ Form %s approved but link to company %s failed: %s",
            form["_id"], company_id, exc,
        )
        raise StoreError(f"form approved but company link failed: {exc}")

    if not linked:
        logger.warning("⚠️ Form %s approved; company %s not found, no link recorded", form["_id"], company_id)
    else:
        logger.info("✅ Form %s approved and linked to company %s", form["_id"], company_id)

    return {"form": form, "companyLinked": linked}
