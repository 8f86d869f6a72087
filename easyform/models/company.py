"""
Company model and schemas
"""
from pydantic import BaseModel
from typing import Optional, List, Dict, Any


class CompanyCreate(BaseModel):
    # Presence is checked by the service so a missing field maps to missing_fields
    name: Optional[str] = None
    email: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    approvedForms: Optional[List[Any]] = None


class CompanyUpdate(BaseModel):
    """Whitelisted updatable keys; anything else in the body is ignored"""
    name: Optional[str] = None
    email: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    approvedForms: Optional[List[Any]] = None
