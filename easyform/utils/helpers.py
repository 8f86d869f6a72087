"""
Helper utility functions
"""
from bson import ObjectId
from typing import Any, Dict, Iterable, List
from datetime import datetime
import pytz

from easyform.config.settings import settings

TZ = pytz.timezone(settings.TIMEZONE)


def serialize_value(value: Any) -> Any:
    """Convert a single BSON value to its JSON-serializable form"""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        # Naive datetimes from the DB are UTC
        if value.tzinfo is None:
            value = pytz.utc.localize(value)
        return value.astimezone(TZ).isoformat()
    if isinstance(value, dict):
        return serialize_doc(value)
    if isinstance(value, (list, tuple)):
        return [serialize_value(item) for item in value]
    return value


def serialize_doc(doc: Dict) -> Dict:
    """Convert MongoDB document to JSON-serializable format"""
    if doc is None:
        return None
    return {key: serialize_value(value) for key, value in doc.items()}


def serialize_docs(docs: List[Dict]) -> List[Dict]:
    """Convert list of MongoDB documents to JSON-serializable format"""
    return [serialize_doc(doc) for doc in docs]


def unique_in_order(values: Iterable) -> list:
    """Drop duplicates, keeping the first occurrence of each value"""
    seen = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return seen


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False
