"""
Pydantic schemas for the HTTP API.

Payloads use the same camelCase field names as the stored documents; snake
case names are accepted too.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from aster_shared.constants import (
    MAX_EMAIL_LENGTH,
    MAX_MESSAGE_LENGTH,
    MAX_NAME_LENGTH,
    MAX_PHONE_LENGTH,
)
from aster_shared.types import InquiryStatus


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InquiryRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    email: str = Field(..., pattern=r"^[^@\s]+@[^@\s]+$", max_length=MAX_EMAIL_LENGTH)
    phone: str = Field(..., min_length=1, max_length=MAX_PHONE_LENGTH)
    event_date: str = Field(default="", max_length=32)
    budget_range: str = Field(default="", max_length=64)
    service_interested: list[str] = Field(default_factory=list, max_length=10)
    message: str = Field(default="", max_length=MAX_MESSAGE_LENGTH)


class InquiryResponse(CamelModel):
    id: str
    status: InquiryStatus
    created_at: str


class WhatsappLinkResponse(CamelModel):
    url: str
    message: str


class InquiryStatusUpdate(CamelModel):
    status: InquiryStatus


class InquiryListResponse(CamelModel):
    source: str
    outcome: str
    inquiries: list[dict]


class ContentEnvelope(CamelModel):
    name: str
    source: str
    outcome: str
    data: Any


class ItemResponse(CamelModel):
    kind: str
    item: dict


class StatusResponse(BaseModel):
    status: Literal["ok"]


class SeedRequest(CamelModel):
    force: bool = False


class SeedResponse(CamelModel):
    seeded: list[str]
    skipped: list[str]


class ErrorResponse(BaseModel):
    detail: str
    operation: Optional[str] = None
    collection: Optional[str] = None
