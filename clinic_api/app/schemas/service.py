"""
Pydantic models for clinic services.

Services are free-form records shown on the public site.  The only
requirement is a display name, given either as ``name`` or ``title``
(both spellings exist in stored data).
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ServiceCreate(BaseModel):
    """Schema for creating a service.  Unknown fields are kept."""

    model_config = ConfigDict(extra="allow")

    name: Optional[str] = Field(None, examples=["X-Ray"])
    title: Optional[str] = Field(None, examples=["General Consultation"])
    description: Optional[str] = None

    @model_validator(mode="after")
    def _require_label(self) -> "ServiceCreate":
        if not (self.name or self.title):
            raise ValueError("Service requires a name or title")
        return self


class ServiceUpdate(BaseModel):
    """Partial update; only the supplied fields are merged."""

    model_config = ConfigDict(extra="allow")

    name: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
