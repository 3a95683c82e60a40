"""Testimonial service - public submissions and admin moderation"""

import logging
from typing import Optional

from fastapi import HTTPException

from ...models import Testimonial
from ...storage import Storage
from .schemas import TestimonialCreate

logger = logging.getLogger(__name__)


class TestimonialService:
    def __init__(self, storage: Storage):
        self.storage = storage

    def submit(self, data: TestimonialCreate) -> Testimonial:
        testimonial = self.storage.create_testimonial(
            client_name=data.clientName,
            client_email=data.clientEmail,
            rating=data.rating,
            testimonial_text=data.testimonialText,
            service=data.service,
            approved=False,
            featured=False,
        )
        logger.info(f"📥 Testimonial {testimonial.id} submitted ({testimonial.rating}★), awaiting approval")
        return testimonial

    def get_testimonials(self, approved: Optional[bool]) -> list[Testimonial]:
        return self.storage.get_testimonials(approved)

    def approve(self, testimonial_id: str) -> Testimonial:
        testimonial = self.storage.approve_testimonial(testimonial_id)
        if not testimonial:
            raise HTTPException(status_code=404, detail="Testimonial not found")
        logger.info(f"✅ Testimonial {testimonial_id} approved")
        return testimonial

    def set_featured(self, testimonial_id: str, featured: bool) -> Testimonial:
        """Featured is independent of approval"""
        testimonial = self.storage.feature_testimonial(testimonial_id, featured)
        if not testimonial:
            raise HTTPException(status_code=404, detail="Testimonial not found")
        return testimonial
