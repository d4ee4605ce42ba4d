"""
Pydantic models for blog articles.

Article ids are always generated by the server, so an ``id`` sent by a
client is dropped before the record is stored.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ArticleCreate(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: str = Field(..., min_length=1, examples=["Five tips for a healthy heart"])
    excerpt: Optional[str] = None
    content: Optional[str] = None
    author: Optional[str] = None
    image: Optional[str] = None
    # ISO-8601 timestamp; filled in by the server when omitted.
    created_at: Optional[str] = None


class ArticleUpdate(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: Optional[str] = Field(None, min_length=1)
    excerpt: Optional[str] = None
    content: Optional[str] = None
    author: Optional[str] = None
    image: Optional[str] = None
