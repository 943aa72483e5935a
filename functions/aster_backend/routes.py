"""
HTTP routes for the site and the back-office.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from aster_backend import pages
from aster_backend.admin import (
    EDITABLE_KINDS,
    AdminWorkspace,
    InlineImageTooLarge,
    seed_defaults,
)
from aster_backend.auth import Operator
from aster_backend.config import get_settings
from aster_backend.dependencies import get_content_repository, require_operator
from aster_backend.inquiries import (
    InquirySubmission,
    build_whatsapp_message,
    build_whatsapp_url,
    filter_inquiries,
    submit_inquiry,
)
from aster_backend.repository import (
    COLLECTIONS,
    ContentRepository,
    InvalidRecord,
    decode_payload,
    encode_record,
    get_spec,
)
from aster_backend.schemas import (
    ContentEnvelope,
    ErrorResponse,
    InquiryListResponse,
    InquiryRequest,
    InquiryResponse,
    InquiryStatusUpdate,
    ItemResponse,
    SeedRequest,
    SeedResponse,
    StatusResponse,
    WhatsappLinkResponse,
)
from aster_shared.constants import INQUIRIES_COLLECTION
from aster_shared.json_utils import convert_keys, to_plain_json
from aster_shared.types import InquiryStatus, SiteContent, SiteSettings

logger = logging.getLogger(__name__)

router = APIRouter()

# Leads are only visible to operators.
PUBLIC_CONTENT = tuple(name for name in COLLECTIONS if name != INQUIRIES_COLLECTION)

# Body returned when the store rejects a write; see app.store_write_error_handler.
WRITE_ERRORS = {503: {"model": ErrorResponse, "description": "Store rejected the write"}}


def _document(record) -> dict:
    return to_plain_json(encode_record(record))


def _submission(payload: InquiryRequest) -> InquirySubmission:
    return InquirySubmission(**payload.model_dump(by_alias=False))


def _decode_payload(record_type: type, payload: dict):
    try:
        return decode_payload(record_type, payload)
    except (InvalidRecord, TypeError, ValueError) as e:
        raise HTTPException(status_code=422, detail=f"Invalid {record_type.__name__}: {e}")


def _workspace(repository: ContentRepository) -> AdminWorkspace:
    return AdminWorkspace(
        repository, max_inline_image_bytes=get_settings().max_inline_image_bytes
    )


def _check_kind(kind: str) -> str:
    if kind not in EDITABLE_KINDS:
        raise HTTPException(status_code=404, detail=f"Unknown item kind: {kind}")
    return kind


# --- Public pages ---


@router.get("/pages/home")
def home_page(repository: ContentRepository = Depends(get_content_repository)):
    return pages.home_page(repository).to_document()


@router.get("/pages/services")
def services_page(repository: ContentRepository = Depends(get_content_repository)):
    return pages.services_page(repository).to_document()


@router.get("/pages/packages")
def packages_page(repository: ContentRepository = Depends(get_content_repository)):
    return pages.packages_page(repository).to_document()


@router.get("/pages/portfolio")
def portfolio_page(
    tag: Optional[str] = Query(default=None, max_length=64),
    repository: ContentRepository = Depends(get_content_repository),
):
    return pages.portfolio_page(repository, tag).to_document()


@router.get("/pages/about")
def about_page(repository: ContentRepository = Depends(get_content_repository)):
    return pages.about_page(repository).to_document()


@router.get("/pages/contact")
def contact_page(
    package: Optional[str] = Query(default=None, max_length=120),
    repository: ContentRepository = Depends(get_content_repository),
):
    return pages.contact_page(repository, package).to_document()


@router.get("/content/{name}", response_model=ContentEnvelope)
def get_content(
    name: str, repository: ContentRepository = Depends(get_content_repository)
):
    """
    Raw content for one collection, tagged with whether it is live or the
    built-in fallback.
    """
    if name not in PUBLIC_CONTENT:
        raise HTTPException(status_code=404, detail=f"Unknown content: {name}")
    spec = get_spec(name)
    if spec.is_singleton:
        result = repository.fetch_singleton(name)
        data = _document(result.data)
    else:
        result = repository.fetch_collection(name)
        data = [_document(item) for item in result.data]
    return ContentEnvelope(
        name=name, source=str(result.source), outcome=str(result.outcome), data=data
    )


# --- Inquiries ---


@router.post(
    "/inquiries", response_model=InquiryResponse, status_code=201, responses=WRITE_ERRORS
)
def create_inquiry(
    payload: InquiryRequest,
    repository: ContentRepository = Depends(get_content_repository),
):
    inquiry = submit_inquiry(repository, _submission(payload))
    return InquiryResponse(
        id=inquiry.id, status=inquiry.status, created_at=inquiry.created_at
    )


@router.post("/inquiries/whatsapp-link", response_model=WhatsappLinkResponse)
def whatsapp_link(
    payload: InquiryRequest,
    repository: ContentRepository = Depends(get_content_repository),
):
    """Builds the WhatsApp hand-off link. Does not record the inquiry."""
    settings = repository.get_settings().data
    message = build_whatsapp_message(_submission(payload), settings)
    try:
        url = build_whatsapp_url(settings.whatsapp_number, message)
    except ValueError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return WhatsappLinkResponse(url=url, message=message)


# --- Back-office ---


@router.get("/admin/inquiries", response_model=InquiryListResponse)
def list_inquiries(
    status: Optional[InquiryStatus] = Query(default=None),
    q: Optional[str] = Query(default=None, max_length=120),
    repository: ContentRepository = Depends(get_content_repository),
    operator: Operator = Depends(require_operator),
):
    result = repository.get_inquiries()
    selected = filter_inquiries(result.data, status=status, query=q)
    return InquiryListResponse(
        source=str(result.source),
        outcome=str(result.outcome),
        inquiries=[_document(inquiry) for inquiry in selected],
    )


@router.patch(
    "/admin/inquiries/{inquiry_id}", response_model=StatusResponse, responses=WRITE_ERRORS
)
def update_inquiry_status(
    inquiry_id: str,
    payload: InquiryStatusUpdate,
    repository: ContentRepository = Depends(get_content_repository),
    operator: Operator = Depends(require_operator),
):
    repository.update_inquiry_status(inquiry_id, payload.status)
    logger.info("%s set inquiry %s to %s", operator.uid, inquiry_id, payload.status)
    return StatusResponse(status="ok")


@router.put("/admin/site-content", response_model=StatusResponse, responses=WRITE_ERRORS)
def save_site_content(
    payload: dict = Body(...),
    repository: ContentRepository = Depends(get_content_repository),
    operator: Operator = Depends(require_operator),
):
    content = _decode_payload(SiteContent, payload)
    try:
        _workspace(repository).save_content(content)
    except InlineImageTooLarge as e:
        raise HTTPException(status_code=413, detail=str(e))
    return StatusResponse(status="ok")


@router.put("/admin/settings", response_model=StatusResponse, responses=WRITE_ERRORS)
def save_settings(
    payload: dict = Body(...),
    repository: ContentRepository = Depends(get_content_repository),
    operator: Operator = Depends(require_operator),
):
    settings = _decode_payload(SiteSettings, payload)
    _workspace(repository).save_settings(settings)
    return StatusResponse(status="ok")


@router.post(
    "/admin/seed-defaults", response_model=SeedResponse, responses=WRITE_ERRORS
)
def seed_default_content(
    payload: Optional[SeedRequest] = None,
    repository: ContentRepository = Depends(get_content_repository),
    operator: Operator = Depends(require_operator),
):
    force = payload.force if payload else False
    seeded, skipped = seed_defaults(repository, force=force)
    return SeedResponse(seeded=seeded, skipped=skipped)


@router.post(
    "/admin/{kind}", response_model=ItemResponse, status_code=201, responses=WRITE_ERRORS
)
def create_item(
    kind: str,
    payload: Optional[dict] = Body(default=None),
    repository: ContentRepository = Depends(get_content_repository),
    operator: Operator = Depends(require_operator),
):
    """Creates a record from form fields; blank fields get defaults."""
    _check_kind(kind)
    workspace = _workspace(repository)
    workspace.load()
    try:
        item = workspace.create_item(
            kind, convert_keys(payload or {}, "camel_to_snake")
        )
    except InlineImageTooLarge as e:
        raise HTTPException(status_code=413, detail=str(e))
    return ItemResponse(kind=kind, item=_document(item))


@router.put("/admin/{kind}/{item_id}", response_model=ItemResponse, responses=WRITE_ERRORS)
def save_item(
    kind: str,
    item_id: str,
    payload: dict = Body(...),
    repository: ContentRepository = Depends(get_content_repository),
    operator: Operator = Depends(require_operator),
):
    _check_kind(kind)
    item = _decode_payload(get_spec(kind).record_type, {**payload, "id": item_id})
    try:
        _workspace(repository).save_item(kind, item)
    except InlineImageTooLarge as e:
        raise HTTPException(status_code=413, detail=str(e))
    return ItemResponse(kind=kind, item=_document(item))


@router.delete("/admin/{kind}/{item_id}", response_model=StatusResponse, responses=WRITE_ERRORS)
def delete_item(
    kind: str,
    item_id: str,
    repository: ContentRepository = Depends(get_content_repository),
    operator: Operator = Depends(require_operator),
):
    _check_kind(kind)
    _workspace(repository).delete_item(kind, item_id)
    return StatusResponse(status="ok")
