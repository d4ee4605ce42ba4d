"""
Pydantic models for contact form submissions.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class SubmissionStatus(str, Enum):
    NEW = "new"
    READ = "read"
    ARCHIVED = "archived"


class ContactSubmissionCreate(BaseModel):
    fullname: str = Field(..., min_length=1, examples=["John Smith"])
    email: str = Field(..., min_length=1, examples=["john@example.com"])
    subject: str = Field(..., min_length=1, examples=["Opening hours"])
    message: str = Field(..., min_length=1)


class SubmissionUpdate(BaseModel):
    status: Optional[SubmissionStatus] = None
