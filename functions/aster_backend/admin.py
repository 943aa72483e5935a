"""
Operator workspace for the back-office.

Holds the lists an operator is editing and keeps them consistent with the
store: a record enters or leaves memory only after the store accepted the
write. Inquiry status changes are the exception; they are applied first and
rolled back if the store rejects them.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
import time
from dataclasses import replace
from typing import Any, Callable, Optional

from aster_backend.errors import StoreWriteError
from aster_backend.repository import (
    ContentRepository,
    FetchOutcome,
    decode_record,
    get_spec,
    validate_record,
)
from aster_shared import catalog
from aster_shared.constants import (
    BLOGS_COLLECTION,
    INQUIRIES_COLLECTION,
    MAX_INLINE_IMAGE_BYTES,
    PACKAGES_COLLECTION,
    PROJECTS_COLLECTION,
    SETTINGS_COLLECTION,
    SITE_CONTENT_COLLECTION,
    TESTIMONIALS_COLLECTION,
)
from aster_shared.types import (
    BlogPost,
    Inquiry,
    InquiryStatus,
    PortfolioProject,
    ServicePackage,
    SiteContent,
    SiteSettings,
    Testimonial,
)

logger = logging.getLogger(__name__)

EDITABLE_KINDS = (
    PACKAGES_COLLECTION,
    PROJECTS_COLLECTION,
    TESTIMONIALS_COLLECTION,
    BLOGS_COLLECTION,
)

_DATA_URI = re.compile(
    r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<params>(;[^,;]*)*?),(?P<payload>.*)$", re.S
)


class InlineImageTooLarge(ValueError):
    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(
            f"Inline image is {size // 1024} KiB; the limit is {limit // 1024} KiB. "
            "Use an image URL instead."
        )


def inline_image_size(value: str) -> Optional[int]:
    """Decoded byte size of a `data:` URI, or None if `value` is not one."""
    match = _DATA_URI.match(value or "")
    if not match:
        return None
    payload = match.group("payload")
    if ";base64" in (match.group("params") or ""):
        try:
            return len(base64.b64decode(payload, validate=False))
        except (binascii.Error, ValueError):
            # Undecodable payloads are measured by their raw length.
            return len(payload)
    return len(payload.encode("utf-8"))


def check_inline_image(value: Optional[str], limit: int = MAX_INLINE_IMAGE_BYTES) -> None:
    """Rejects an inline image above `limit` bytes. URLs are always accepted."""
    size = inline_image_size(value or "")
    if size is not None and size > limit:
        raise InlineImageTooLarge(size, limit)


def new_item_id() -> str:
    """Millisecond timestamp, the id format operators' records have always used."""
    return str(int(time.time() * 1000))


def slugify(title: str) -> str:
    return re.sub(r"\s+", "-", title.strip().lower())


def _text(fields: dict, key: str, default: str = "") -> str:
    value = fields.get(key)
    if value is None:
        return default
    value = str(value).strip()
    return value or default


def _split(value: Any, separator: str) -> list[str]:
    if isinstance(value, (list, tuple)):
        parts = [str(v) for v in value]
    else:
        parts = str(value or "").split(separator)
    return [p.strip() for p in parts if p.strip()]


class AdminWorkspace:
    """In-memory copy of everything an operator edits in one session."""

    def __init__(
        self,
        repository: ContentRepository,
        *,
        max_inline_image_bytes: int = MAX_INLINE_IMAGE_BYTES,
        clock: Callable[[], str] = new_item_id,
    ):
        self.repository = repository
        self.max_inline_image_bytes = max_inline_image_bytes
        self._new_id = clock
        self.packages: list[ServicePackage] = []
        self.projects: list[PortfolioProject] = []
        self.testimonials: list[Testimonial] = []
        self.blogs: list[BlogPost] = []
        self.inquiries: list[Inquiry] = []
        self.content: Optional[SiteContent] = None
        self.settings: Optional[SiteSettings] = None
        self.outcomes: dict[str, FetchOutcome] = {}

    def load(self) -> None:
        """Fetches every collection. Unreadable ones come back as defaults."""
        repo = self.repository
        loaders = {
            PACKAGES_COLLECTION: repo.get_packages,
            PROJECTS_COLLECTION: repo.get_projects,
            TESTIMONIALS_COLLECTION: repo.get_testimonials,
            BLOGS_COLLECTION: repo.get_blogs,
            INQUIRIES_COLLECTION: repo.get_inquiries,
        }
        for name, loader in loaders.items():
            result = loader()
            setattr(self, name, list(result.data))
            self.outcomes[name] = result.outcome

        content = repo.get_site_content()
        self.content = content.data
        self.outcomes[SITE_CONTENT_COLLECTION] = content.outcome

        settings = repo.get_settings()
        self.settings = settings.data
        self.outcomes[SETTINGS_COLLECTION] = settings.outcome

    def items(self, kind: str) -> list:
        if kind not in EDITABLE_KINDS:
            raise ValueError(f"Unknown item kind: {kind}")
        return getattr(self, kind)

    # --- Building new records ---

    def _build_project(self, item_id: str, fields: dict) -> PortfolioProject:
        title = _text(fields, "title", "New Project")
        tags = _split(fields.get("theme_tags"), ",")
        return PortfolioProject(
            id=item_id,
            title=title,
            slug=slugify(_text(fields, "title", "new")),
            cover_image=_text(fields, "cover_image", "https://picsum.photos/800/600"),
            location=_text(fields, "location", "Jakarta"),
            date=_text(fields, "date", "2024"),
            theme_tags=tags or ["Wedding"],
            description=_text(fields, "description"),
            vendors=_split(fields.get("vendors"), ","),
        )

    def _build_package(self, item_id: str, fields: dict) -> ServicePackage:
        features = _split(fields.get("features"), "\n")
        return ServicePackage(
            id=item_id,
            name=_text(fields, "name", "New Package"),
            price_from=_text(fields, "price_from", "IDR 0"),
            features=features or ["Feature 1"],
            is_featured=bool(fields.get("is_featured", False)),
            order=len(self.packages) + 1,
        )

    def _build_testimonial(self, item_id: str, fields: dict) -> Testimonial:
        return Testimonial(
            id=item_id,
            name=_text(fields, "name", "Client Name"),
            role=_text(fields, "role", "Couple"),
            rating=5,
            quote=_text(fields, "quote"),
            event_type=_text(fields, "event_type", "Wedding"),
        )

    def _build_blog(self, item_id: str, fields: dict) -> BlogPost:
        return BlogPost(
            id=item_id,
            title=_text(fields, "title", "New Post"),
            excerpt=_text(fields, "excerpt"),
            cover_image=_text(fields, "cover_image", "https://picsum.photos/800/400"),
            date=_text(fields, "date", "2024"),
            category=_text(fields, "category", "Planning"),
        )

    def build_item(self, kind: str, fields: dict):
        builders = {
            PACKAGES_COLLECTION: self._build_package,
            PROJECTS_COLLECTION: self._build_project,
            TESTIMONIALS_COLLECTION: self._build_testimonial,
            BLOGS_COLLECTION: self._build_blog,
        }
        if kind not in builders:
            raise ValueError(f"Unknown item kind: {kind}")
        return builders[kind](self._new_id(), fields)

    # --- Writes ---

    def create_item(self, kind: str, fields: dict):
        """
        Builds a record from the operator's form, blank fields defaulted, and
        saves it. Nothing changes in memory if the save fails.
        """
        item = self.build_item(kind, fields)
        check_inline_image(getattr(item, "cover_image", None), self.max_inline_image_bytes)
        self.repository.upsert(kind, item)

        # New projects show first; everything else is appended.
        if kind == PROJECTS_COLLECTION:
            self.projects.insert(0, item)
        else:
            self.items(kind).append(item)
        logger.info("Created %s/%s", kind, item.id)
        return item

    def save_item(self, kind: str, item) -> None:
        """Overwrites an existing record, or adds it if it is not loaded."""
        validate_record(item)
        items = self.items(kind)
        check_inline_image(getattr(item, "cover_image", None), self.max_inline_image_bytes)
        self.repository.upsert(kind, item)
        for index, existing in enumerate(items):
            if existing.id == item.id:
                items[index] = item
                break
        else:
            items.append(item)

    def delete_item(self, kind: str, item_id: str) -> None:
        items = self.items(kind)
        self.repository.remove(kind, item_id)
        items[:] = [item for item in items if item.id != item_id]
        logger.info("Deleted %s/%s", kind, item_id)

    def save_content(self, content: Optional[SiteContent] = None) -> None:
        content = content if content is not None else self.content
        if content is None:
            raise ValueError("No site content loaded")
        validate_record(content)
        check_inline_image(content.hero.background_image, self.max_inline_image_bytes)
        self.repository.update_site_content(content)
        self.content = content

    def save_settings(self, settings: Optional[SiteSettings] = None) -> None:
        settings = settings if settings is not None else self.settings
        if settings is None:
            raise ValueError("No settings loaded")
        validate_record(settings)
        self.repository.update_settings(settings)
        self.settings = settings

    def change_inquiry_status(self, inquiry_id: str, status: InquiryStatus) -> None:
        """
        Shows the new status immediately. If the store rejects the change the
        previous list is restored and the StoreWriteError is re-raised.
        """
        status = InquiryStatus(status)
        previous = list(self.inquiries)
        self.inquiries = [
            replace(inquiry, status=status) if inquiry.id == inquiry_id else inquiry
            for inquiry in self.inquiries
        ]
        try:
            self.repository.update_inquiry_status(inquiry_id, status)
        except StoreWriteError:
            self.inquiries = previous
            raise


def seed_defaults(repository: ContentRepository, force: bool = False) -> tuple[list, list]:
    """
    Writes the built-in content into the store. Names that already hold live
    data are skipped unless `force` is set. Returns (seeded, skipped) names.
    """
    seeded, skipped = [], []
    for name in catalog.catalog_names():
        if name == INQUIRIES_COLLECTION:
            continue
        spec = get_spec(name)
        if spec.is_singleton:
            result = repository.fetch_singleton(name)
        else:
            result = repository.fetch_collection(name)
        if result.is_live and not force:
            skipped.append(name)
            continue

        documents = catalog.default_documents(name)
        if spec.is_singleton:
            documents = [documents]
        for document in documents:
            repository.upsert(name, decode_record(spec.record_type, document))
        seeded.append(name)
        logger.info("Seeded %s with %d default document(s)", name, len(documents))
    return seeded, skipped
