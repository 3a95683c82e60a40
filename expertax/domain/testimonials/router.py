"""Testimonial router"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...auth import Principal, get_optional_admin, require_admin
from ...models import Testimonial
from ...storage import Storage, get_storage
from .schemas import (
    TestimonialCreate,
    TestimonialCreated,
    TestimonialFeatureUpdate,
    TestimonialResponse,
)
from .service import TestimonialService

router = APIRouter(prefix="/api/testimonials", tags=["Testimonials"])


def get_testimonial_service(storage: Storage = Depends(get_storage)) -> TestimonialService:
    """Dependency injection for TestimonialService"""
    return TestimonialService(storage)


def _to_response(testimonial: Testimonial) -> TestimonialResponse:
    return TestimonialResponse(
        id=testimonial.id,
        clientName=testimonial.client_name,
        clientEmail=testimonial.client_email,
        rating=testimonial.rating,
        testimonialText=testimonial.testimonial_text,
        service=testimonial.service,
        approved=testimonial.approved,
        featured=testimonial.featured,
        createdAt=testimonial.created_at,
    )


@router.post("", response_model=TestimonialCreated)
async def submit_testimonial(
    data: TestimonialCreate,
    service: TestimonialService = Depends(get_testimonial_service),
):
    testimonial = service.submit(data)
    return TestimonialCreated(testimonial=_to_response(testimonial))


@router.get("", response_model=list[TestimonialResponse])
async def get_testimonials(
    approved: Optional[str] = Query(None),
    admin: Optional[Principal] = Depends(get_optional_admin),
    service: TestimonialService = Depends(get_testimonial_service),
):
    """Non-admins only ever see approved testimonials, whatever the query says"""
    if admin:
        show_approved = {"true": True, "false": False}.get(approved or "")
    else:
        show_approved = True
    return [_to_response(t) for t in service.get_testimonials(show_approved)]


@router.patch("/{testimonial_id}/approve", response_model=TestimonialResponse)
async def approve_testimonial(
    testimonial_id: str,
    _admin: Principal = Depends(require_admin),
    service: TestimonialService = Depends(get_testimonial_service),
):
    return _to_response(service.approve(testimonial_id))


@router.patch("/{testimonial_id}/feature", response_model=TestimonialResponse)
async def feature_testimonial(
    testimonial_id: str,
    data: TestimonialFeatureUpdate,
    _admin: Principal = Depends(require_admin),
    service: TestimonialService = Depends(get_testimonial_service),
):
    return _to_response(service.set_featured(testimonial_id, data.featured))
