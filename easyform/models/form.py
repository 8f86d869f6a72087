"""
Form template model and schemas
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Any
from datetime import datetime


class FormRecord(BaseModel):
    """Canonical stored shape of a form template"""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    title: str = "Untitled Form"
    description: str = ""
    category: str = ""
    active: bool = True
    fields: List[Any] = Field(default_factory=list)
    approved: bool = False
    companyId: Optional[str] = None
    approvedAt: Optional[datetime] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class FormApproval(BaseModel):
    formId: Optional[str] = None
    companyId: Optional[str] = None
