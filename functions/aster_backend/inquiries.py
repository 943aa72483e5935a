"""
Inquiry intake for the contact form and lead triage for the back-office.

Recording the inquiry and handing the visitor off to WhatsApp are separate
steps; neither waits for or confirms the other.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from typing import Iterable, Optional
from urllib.parse import quote

from aster_backend.repository import ContentRepository, created_at_key
from aster_shared.types import Inquiry, InquiryStatus, SiteSettings

WHATSAPP_BASE_URL = "https://wa.me"

# Placeholders for fields the visitor left blank.
UNSET_DATE = "Belum fix"
UNSET_VALUE = "-"


@dataclass
class InquirySubmission:
    """What a visitor types into the contact form."""

    name: str
    email: str
    phone: str
    event_date: str = ""
    budget_range: str = ""
    service_interested: list[str] = field(default_factory=list)
    message: str = ""

    def to_fields(self) -> dict:
        return asdict(self)


def submit_inquiry(
    repository: ContentRepository, submission: InquirySubmission
) -> Inquiry:
    """Records the inquiry as a new lead. Raises StoreWriteError on failure."""
    return repository.submit_inquiry(submission.to_fields())


def _or_placeholder(value: Optional[str], placeholder: str = UNSET_VALUE) -> str:
    value = (value or "").strip()
    return value if value else placeholder


def build_whatsapp_message(
    submission: InquirySubmission, settings: SiteSettings
) -> str:
    services = ", ".join(s for s in submission.service_interested if s.strip())
    lines = [
        f"Halo {settings.brand_name}, saya ingin konsultasi pernikahan.",
        "",
        f"Nama: {_or_placeholder(submission.name)}",
        f"Email: {_or_placeholder(submission.email)}",
        f"No. HP: {_or_placeholder(submission.phone)}",
        f"Tanggal Acara: {_or_placeholder(submission.event_date, UNSET_DATE)}",
        f"Budget: {_or_placeholder(submission.budget_range)}",
        f"Paket: {_or_placeholder(services)}",
        f"Pesan: {_or_placeholder(submission.message)}",
    ]
    return "\n".join(lines)


def build_whatsapp_url(number: str, text: str) -> str:
    """
    Returns the wa.me deep link for `number` with `text` pre-filled. Anything
    that is not a digit (spaces, "+", dashes) is stripped from the number.
    """
    digits = re.sub(r"\D", "", number or "")
    if not digits:
        raise ValueError("A WhatsApp number needs at least one digit")
    return f"{WHATSAPP_BASE_URL}/{digits}?text={quote(text, safe='')}"


def filter_inquiries(
    inquiries: Iterable[Inquiry],
    status: Optional[InquiryStatus] = None,
    query: Optional[str] = None,
) -> list[Inquiry]:
    """Narrows the inbox by status and a case-insensitive name/email search."""
    needle = (query or "").strip().lower()
    selected = []
    for inquiry in inquiries:
        if status is not None and inquiry.status != status:
            continue
        if needle and needle not in inquiry.name.lower() and needle not in inquiry.email.lower():
            continue
        selected.append(inquiry)
    return sorted(selected, key=created_at_key, reverse=True)
