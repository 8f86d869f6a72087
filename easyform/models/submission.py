"""
Models for storing form submissions
"""
from pydantic import BaseModel, ConfigDict
from typing import Optional, List, Any


class Answer(BaseModel):
    # Clients may attach extra keys to an answer; they are stored untouched
    model_config = ConfigDict(extra="allow")

    fieldId: Any = None
    label: Any = None
    type: Any = None
    value: Any = None


class SubmissionCreate(BaseModel):
    companyId: Optional[str] = None
    formId: Optional[str] = None
    answers: Optional[List[Answer]] = None
