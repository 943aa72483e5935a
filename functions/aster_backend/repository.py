"""
Content repository: the single access point for site content.

Reads never fail. When the store is empty, missing the document, unreachable
or refuses access, the built-in catalog entry for that name is returned and
the outcome is reported alongside the data. Writes are passed through with no
fallback and no retry; any failure is raised as StoreWriteError.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any, Callable, Generic, Optional, TypeVar

from dacite import Config, DaciteError, from_dict

from aster_backend.errors import (
    StoreNotFound,
    StorePermissionDenied,
    StoreUnavailable,
    StoreWriteError,
)
from aster_backend.store import DocumentStore
from aster_shared import catalog
from aster_shared.constants import (
    BLOGS_COLLECTION,
    INQUIRIES_COLLECTION,
    PACKAGES_COLLECTION,
    PROJECTS_COLLECTION,
    SETTINGS_COLLECTION,
    SETTINGS_DOC_ID,
    SITE_CONTENT_COLLECTION,
    SITE_CONTENT_DOC_ID,
    TESTIMONIALS_COLLECTION,
)
from aster_shared.json_utils import convert_keys
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

T = TypeVar("T")

_DACITE_CONFIG = Config(check_types=False, cast=[InquiryStatus])
# Operator payloads are untrusted; field types are enforced.
_STRICT_DACITE_CONFIG = Config(check_types=True, cast=[InquiryStatus])

RATING_RANGE = range(1, 6)


class FetchOutcome(StrEnum):
    SUCCESS_NONEMPTY = "success-nonempty"
    SUCCESS_EMPTY = "success-empty"
    NOT_FOUND = "not-found"
    PERMISSION_DENIED = "permission-denied"
    UNREACHABLE = "unreachable"
    OTHER_ERROR = "other-error"


class FetchSource(StrEnum):
    LIVE = "live"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Data returned by a read, tagged with where it came from."""

    data: T
    outcome: FetchOutcome

    @property
    def source(self) -> FetchSource:
        if self.outcome == FetchOutcome.SUCCESS_NONEMPTY:
            return FetchSource.LIVE
        return FetchSource.FALLBACK

    @property
    def is_live(self) -> bool:
        return self.source == FetchSource.LIVE


def created_at_key(inquiry: Inquiry) -> datetime:
    try:
        parsed = datetime.fromisoformat(str(inquiry.created_at))
    except ValueError:
        return datetime.min.replace(tzinfo=timezone.utc)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _sort_packages(items: list[ServicePackage]) -> list[ServicePackage]:
    # sorted() is stable: equal `order` values keep the store's order.
    return sorted(items, key=lambda p: p.order)


def _sort_inquiries(items: list[Inquiry]) -> list[Inquiry]:
    return sorted(items, key=created_at_key, reverse=True)


@dataclass(frozen=True)
class CollectionSpec:
    name: str
    record_type: type
    doc_id: Optional[str] = None  # set for single-document collections
    order: Optional[Callable[[list], list]] = None

    @property
    def is_singleton(self) -> bool:
        return self.doc_id is not None


COLLECTIONS: dict[str, CollectionSpec] = {
    spec.name: spec
    for spec in (
        CollectionSpec(PACKAGES_COLLECTION, ServicePackage, order=_sort_packages),
        CollectionSpec(PROJECTS_COLLECTION, PortfolioProject),
        CollectionSpec(TESTIMONIALS_COLLECTION, Testimonial),
        CollectionSpec(BLOGS_COLLECTION, BlogPost),
        CollectionSpec(INQUIRIES_COLLECTION, Inquiry, order=_sort_inquiries),
        CollectionSpec(SITE_CONTENT_COLLECTION, SiteContent, doc_id=SITE_CONTENT_DOC_ID),
        CollectionSpec(SETTINGS_COLLECTION, SiteSettings, doc_id=SETTINGS_DOC_ID),
    )
}


def get_spec(name: str) -> CollectionSpec:
    try:
        return COLLECTIONS[name]
    except KeyError:
        raise KeyError(f"Unknown content collection: {name}") from None


def decode_record(record_type: type, document: dict) -> Any:
    """Converts a stored camelCase document into its dataclass."""
    return from_dict(
        data_class=record_type,
        data=convert_keys(document, "camel_to_snake"),
        config=_DACITE_CONFIG,
    )


class InvalidRecord(ValueError):
    """A record an operator submitted does not fit its collection."""


def validate_record(record: Any) -> Any:
    """Checks the value rules field types cannot express. Returns `record`."""
    if isinstance(record, ServicePackage):
        if isinstance(record.order, bool):
            raise InvalidRecord("order must be an integer")
    elif isinstance(record, Testimonial):
        if isinstance(record.rating, bool) or record.rating not in RATING_RANGE:
            raise InvalidRecord(
                f"rating must be between {RATING_RANGE.start} and {RATING_RANGE.stop - 1}"
            )
    elif isinstance(record, SiteContent):
        if record.hero is None or record.cta_section is None:
            raise InvalidRecord("site content needs a hero and a ctaSection")
    return record


def decode_payload(record_type: type, document: dict) -> Any:
    """
    Like decode_record, for documents coming from an operator rather than the
    store: wrong field types and out-of-range values raise instead of being
    written through.
    """
    try:
        record = from_dict(
            data_class=record_type,
            data=convert_keys(document, "camel_to_snake"),
            config=_STRICT_DACITE_CONFIG,
        )
    except DaciteError as e:
        raise InvalidRecord(str(e)) from e
    return validate_record(record)


def encode_record(record: Any) -> dict:
    """Converts a dataclass into the stored camelCase document."""
    return convert_keys(asdict(record), "snake_to_camel")


def _classify(error: Exception) -> FetchOutcome:
    if isinstance(error, StoreNotFound):
        return FetchOutcome.NOT_FOUND
    if isinstance(error, StorePermissionDenied):
        return FetchOutcome.PERMISSION_DENIED
    if isinstance(error, (StoreUnavailable, TimeoutError, ConnectionError)):
        return FetchOutcome.UNREACHABLE
    return FetchOutcome.OTHER_ERROR


def _report(outcome: FetchOutcome, context: str, error: Exception | None = None):
    if outcome == FetchOutcome.PERMISSION_DENIED:
        logger.warning(
            "[%s] Store access denied. Returning default content. "
            "Check the store's read rules. (%s)",
            context,
            error,
        )
    elif outcome == FetchOutcome.UNREACHABLE:
        logger.warning(
            "[%s] Store unreachable. Returning default content. (%s)", context, error
        )
    elif outcome == FetchOutcome.OTHER_ERROR:
        logger.error(
            "[%s] Store read failed. Returning default content.",
            context,
            exc_info=error,
        )
    else:
        logger.info("[%s] No stored data (%s). Returning default content.", context, outcome)


class ContentRepository:
    """Stateless facade over a DocumentStore. Holds no data between calls."""

    def __init__(self, store: DocumentStore):
        self.store = store

    # --- Reads ---

    def _fallback(self, spec: CollectionSpec, outcome: FetchOutcome) -> FetchResult:
        documents = catalog.default_documents(spec.name)
        if spec.is_singleton:
            return FetchResult(decode_record(spec.record_type, documents), outcome)
        items = [decode_record(spec.record_type, doc) for doc in documents]
        if spec.order:
            items = spec.order(items)
        return FetchResult(items, outcome)

    def fetch_collection(self, name: str) -> FetchResult[list]:
        """
        Returns every record of `name`, or the catalog's list when the store
        has none or cannot be read. Raises only for unregistered names.
        """
        spec = get_spec(name)
        if spec.is_singleton:
            raise ValueError(f"{name} is a single-document collection")

        context = f"fetch_collection:{name}"
        try:
            documents = self.store.list(name)
            if not documents:
                outcome = FetchOutcome.SUCCESS_EMPTY
                _report(outcome, context)
                return self._fallback(spec, outcome)
            items = [decode_record(spec.record_type, doc) for doc in documents]
            if spec.order:
                items = spec.order(items)
        except Exception as e:
            outcome = _classify(e)
            _report(outcome, context, e)
            return self._fallback(spec, outcome)
        return FetchResult(items, FetchOutcome.SUCCESS_NONEMPTY)

    def fetch_singleton(self, name: str) -> FetchResult:
        """
        Returns the single document of `name` as stored, with no merging of
        defaults into a partial document, or the catalog's value when absent
        or unreadable.
        """
        spec = get_spec(name)
        if not spec.is_singleton:
            raise ValueError(f"{name} is not a single-document collection")

        context = f"fetch_singleton:{name}"
        try:
            document = self.store.get(name, spec.doc_id)
            if document is None:
                outcome = FetchOutcome.NOT_FOUND
                _report(outcome, context)
                return self._fallback(spec, outcome)
            value = decode_record(spec.record_type, document)
        except Exception as e:
            outcome = _classify(e)
            _report(outcome, context, e)
            return self._fallback(spec, outcome)
        return FetchResult(value, FetchOutcome.SUCCESS_NONEMPTY)

    # --- Writes ---

    def upsert(self, name: str, record: Any) -> None:
        """Overwrites one record keyed by its id (or the fixed singleton id)."""
        spec = get_spec(name)
        if spec.is_singleton:
            doc_id = spec.doc_id
            document = encode_record(record)
        else:
            doc_id = record.id
            if not doc_id:
                raise ValueError(f"Cannot upsert into {name} without an id")
            document = encode_record(record)
            document["id"] = doc_id
        try:
            self.store.set(name, doc_id, document)
        except Exception as e:
            logger.error("upsert %s/%s failed: %s", name, doc_id, e)
            raise StoreWriteError("upsert", name, doc_id) from e

    def remove(self, name: str, record_id: str) -> None:
        get_spec(name)
        try:
            self.store.delete(name, record_id)
        except Exception as e:
            logger.error("remove %s/%s failed: %s", name, record_id, e)
            raise StoreWriteError("remove", name, record_id) from e

    def update_field(self, name: str, record_id: str, delta: dict) -> None:
        """Partially updates one record. `delta` uses Python (snake_case) keys."""
        get_spec(name)
        try:
            self.store.update(
                name, record_id, convert_keys(dict(delta), "snake_to_camel")
            )
        except Exception as e:
            logger.error("update_field %s/%s failed: %s", name, record_id, e)
            raise StoreWriteError("update_field", name, record_id) from e

    def append(self, name: str, fields: dict) -> Any:
        """
        Creates a record with a store-generated id and a creation timestamp
        set here. Any `id`, `created_at` (or, for inquiries, `status`) passed
        in `fields` is ignored.
        """
        spec = get_spec(name)
        if spec.is_singleton:
            raise ValueError(f"Cannot append to single-document collection {name}")

        values = {k: v for k, v in fields.items() if k not in ("id", "created_at")}
        values["created_at"] = datetime.now(timezone.utc).isoformat()
        if name == INQUIRIES_COLLECTION:
            values["status"] = InquiryStatus.NEW
        document = convert_keys(values, "snake_to_camel")

        try:
            doc_id = self.store.add(name, document)
        except Exception as e:
            logger.error("append to %s failed: %s", name, e)
            raise StoreWriteError("append", name) from e

        logger.info("Appended %s/%s", name, doc_id)
        return decode_record(spec.record_type, {**document, "id": doc_id})

    # --- Named accessors used by pages and the admin workspace ---

    def get_packages(self) -> FetchResult[list[ServicePackage]]:
        return self.fetch_collection(PACKAGES_COLLECTION)

    def get_projects(self) -> FetchResult[list[PortfolioProject]]:
        return self.fetch_collection(PROJECTS_COLLECTION)

    def get_testimonials(self) -> FetchResult[list[Testimonial]]:
        return self.fetch_collection(TESTIMONIALS_COLLECTION)

    def get_blogs(self) -> FetchResult[list[BlogPost]]:
        return self.fetch_collection(BLOGS_COLLECTION)

    def get_inquiries(self) -> FetchResult[list[Inquiry]]:
        return self.fetch_collection(INQUIRIES_COLLECTION)

    def get_site_content(self) -> FetchResult[SiteContent]:
        return self.fetch_singleton(SITE_CONTENT_COLLECTION)

    def get_settings(self) -> FetchResult[SiteSettings]:
        return self.fetch_singleton(SETTINGS_COLLECTION)

    def save_package(self, package: ServicePackage) -> None:
        self.upsert(PACKAGES_COLLECTION, package)

    def delete_package(self, package_id: str) -> None:
        self.remove(PACKAGES_COLLECTION, package_id)

    def save_project(self, project: PortfolioProject) -> None:
        self.upsert(PROJECTS_COLLECTION, project)

    def delete_project(self, project_id: str) -> None:
        self.remove(PROJECTS_COLLECTION, project_id)

    def save_testimonial(self, testimonial: Testimonial) -> None:
        self.upsert(TESTIMONIALS_COLLECTION, testimonial)

    def delete_testimonial(self, testimonial_id: str) -> None:
        self.remove(TESTIMONIALS_COLLECTION, testimonial_id)

    def save_blog(self, post: BlogPost) -> None:
        self.upsert(BLOGS_COLLECTION, post)

    def delete_blog(self, post_id: str) -> None:
        self.remove(BLOGS_COLLECTION, post_id)

    def update_site_content(self, content: SiteContent) -> None:
        # Last write wins; there is no revision check between operators.
        self.upsert(SITE_CONTENT_COLLECTION, content)

    def update_settings(self, settings: SiteSettings) -> None:
        self.upsert(SETTINGS_COLLECTION, settings)

    def submit_inquiry(self, fields: dict) -> Inquiry:
        return self.append(INQUIRIES_COLLECTION, fields)

    def update_inquiry_status(self, inquiry_id: str, status: InquiryStatus) -> None:
        self.update_field(
            INQUIRIES_COLLECTION, inquiry_id, {"status": InquiryStatus(status)}
        )
