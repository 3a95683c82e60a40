"""Blog service - draft/publish workflow"""

import logging
from typing import Optional

from fastapi import HTTPException

from ...models import BlogPost
from ...storage import Storage
from .schemas import BlogPostCreate, BlogPostUpdate

logger = logging.getLogger(__name__)


class BlogService:
    """Service layer for blog business logic"""

    def __init__(self, storage: Storage):
        self.storage = storage

    def _ensure_slug_available(self, slug: str, post_id: Optional[str] = None) -> None:
        existing = self.storage.get_blog_post_by_slug(slug)
        if existing and existing.id != post_id:
            raise HTTPException(status_code=400, detail="Slug is already in use")

    def create_post(self, data: BlogPostCreate) -> BlogPost:
        self._ensure_slug_available(data.slug)
        post = self.storage.create_blog_post(
            title=data.title,
            slug=data.slug,
            excerpt=data.excerpt,
            content=data.content,
            category=data.category,
            author_id=data.authorId,
            published=False,
            published_at=None,
        )
        logger.info(f"📝 Draft created: {post.slug}")
        return post

    def get_posts(self, published: Optional[bool]) -> list[BlogPost]:
        return self.storage.get_blog_posts(published)

    def get_post_by_slug(self, slug: str, include_drafts: bool) -> BlogPost:
        post = self.storage.get_blog_post_by_slug(slug)
        # Drafts are hidden from the public exactly like missing posts
        if not post or (not post.published and not include_drafts):
            raise HTTPException(status_code=404, detail="Blog post not found")
        return post

    def _get_post(self, post_id: str) -> BlogPost:
        post = self.storage.get_blog_post(post_id)
        if not post:
            raise HTTPException(status_code=404, detail="Blog post not found")
        return post

    def update_post(self, post_id: str, data: BlogPostUpdate) -> BlogPost:
        post = self._get_post(post_id)

        updates = {}
        if data.title is not None:
            updates["title"] = data.title
        if data.excerpt is not None:
            updates["excerpt"] = data.excerpt
        if data.content is not None:
            updates["content"] = data.content
        if data.category is not None:
            updates["category"] = data.category
        if data.slug is not None and data.slug != post.slug:
            if post.published:
                raise HTTPException(
                    status_code=400, detail="Slug cannot be changed after the post is published"
                )
            self._ensure_slug_available(data.slug, post_id)
            updates["slug"] = data.slug

        updated = self.storage.update_blog_post(post_id, **updates)
        if not updated:
            raise HTTPException(status_code=404, detail="Blog post not found")
        return updated

    def publish_post(self, post_id: str) -> BlogPost:
        """Publishing twice keeps the original publishedAt"""
        post = self.storage.publish_blog_post(post_id)
        if not post:
            raise HTTPException(status_code=404, detail="Blog post not found")
        logger.info(f"✅ Published blog post: {post.slug}")
        return post
