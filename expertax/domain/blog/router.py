"""Blog router - public reading and admin editing"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...auth import Principal, get_optional_admin, require_admin
from ...models import BlogPost
from ...storage import Storage, get_storage
from .schemas import BlogPostCreate, BlogPostCreated, BlogPostResponse, BlogPostUpdate
from .service import BlogService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/blog", tags=["Blog"])


def get_blog_service(storage: Storage = Depends(get_storage)) -> BlogService:
    """Dependency injection for BlogService"""
    return BlogService(storage)


def _to_response(post: BlogPost) -> BlogPostResponse:
    return BlogPostResponse(
        id=post.id,
        title=post.title,
        slug=post.slug,
        excerpt=post.excerpt,
        content=post.content,
        category=post.category,
        authorId=post.author_id,
        published=post.published,
        publishedAt=post.published_at,
        createdAt=post.created_at,
        updatedAt=post.updated_at,
    )


def _parse_flag(value: Optional[str]) -> Optional[bool]:
    if value == "true":
        return True
    if value == "false":
        return False
    return None


@router.post("", response_model=BlogPostCreated)
async def create_blog_post(
    data: BlogPostCreate,
    _admin: Principal = Depends(require_admin),
    service: BlogService = Depends(get_blog_service),
):
    post = service.create_post(data)
    return BlogPostCreated(blogPost=_to_response(post))


@router.get("", response_model=list[BlogPostResponse])
async def get_blog_posts(
    published: Optional[str] = Query(None),
    admin: Optional[Principal] = Depends(get_optional_admin),
    service: BlogService = Depends(get_blog_service),
):
    """Public readers always get published posts; admins may filter or see all"""
    show_published = _parse_flag(published) if admin else True
    return [_to_response(p) for p in service.get_posts(show_published)]


@router.get("/{slug}", response_model=BlogPostResponse)
async def get_blog_post(
    slug: str,
    admin: Optional[Principal] = Depends(get_optional_admin),
    service: BlogService = Depends(get_blog_service),
):
    post = service.get_post_by_slug(slug, include_drafts=admin is not None)
    return _to_response(post)


@router.patch("/{post_id}", response_model=BlogPostResponse)
async def update_blog_post(
    post_id: str,
    data: BlogPostUpdate,
    _admin: Principal = Depends(require_admin),
    service: BlogService = Depends(get_blog_service),
):
    post = service.update_post(post_id, data)
    return _to_response(post)


@router.patch("/{post_id}/publish", response_model=BlogPostResponse)
async def publish_blog_post(
    post_id: str,
    _admin: Principal = Depends(require_admin),
    service: BlogService = Depends(get_blog_service),
):
    post = service.publish_post(post_id)
    return _to_response(post)
