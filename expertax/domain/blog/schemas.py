"""Blog domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...shared.validators import validate_slug

BlogCategory = Literal["tax-tips", "regulatory-updates", "planning"]


class BlogPostCreate(BaseModel):
    """New posts always start as drafts; publish state is not accepted here"""

    title: str = Field(min_length=1, max_length=200)
    slug: str = Field(min_length=1, max_length=100)
    excerpt: str = Field(min_length=1, max_length=500)
    content: str = Field(min_length=1)
    category: BlogCategory
    authorId: Optional[str] = None

    @field_validator("slug")
    @classmethod
    def validate_slug_field(cls, v: str) -> str:
        return validate_slug(v)


class BlogPostUpdate(BaseModel):
    """Partial edit; author and publish fields are dropped if sent"""

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    slug: Optional[str] = Field(default=None, min_length=1, max_length=100)
    excerpt: Optional[str] = Field(default=None, min_length=1, max_length=500)
    content: Optional[str] = Field(default=None, min_length=1)
    category: Optional[BlogCategory] = None

    @field_validator("slug")
    @classmethod
    def validate_slug_field(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return validate_slug(v)


class BlogPostResponse(BaseModel):
    id: str
    title: str
    slug: str
    excerpt: str
    content: str
    category: str
    authorId: Optional[str] = None
    published: bool
    publishedAt: Optional[datetime] = None
    createdAt: datetime
    updatedAt: datetime


class BlogPostCreated(BaseModel):
    success: bool = True
    blogPost: BlogPostResponse
