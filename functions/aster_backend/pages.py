"""
View-models for the public pages.

Each function reads what one page needs from the repository and returns a
PageView. When the stored site content predates a section (process, FAQ,
services page, about page), that section is taken from the built-in content
here, at render time; the stored document itself is never patched.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, is_dataclass, replace
from typing import Any, Optional

from aster_backend.repository import (
    ContentRepository,
    FetchResult,
    FetchSource,
    decode_record,
)
from aster_shared import catalog
from aster_shared.constants import (
    HOME_FEATURED_PROJECTS,
    PORTFOLIO_FILTER_ALL,
    PORTFOLIO_FILTERS,
    SITE_CONTENT_COLLECTION,
)
from aster_shared.json_utils import convert_keys, to_plain_json
from aster_shared.types import SiteContent

_OPTIONAL_SECTIONS = ("process", "faq", "services_page", "about_page")


@dataclass
class PageView:
    page: str
    sections: dict[str, Any]
    # Where each collection the page read came from (live or fallback).
    sources: dict[str, FetchSource] = field(default_factory=dict)

    def to_document(self) -> dict:
        """camelCase JSON-ready form for the HTTP layer."""
        document = {
            "page": self.page,
            "sections": _plain(self.sections),
            "sources": dict(self.sources),
        }
        return to_plain_json(convert_keys(document, "snake_to_camel"))


def _plain(value: Any) -> Any:
    if is_dataclass(value):
        return asdict(value)
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


def _default_content() -> SiteContent:
    return decode_record(
        SiteContent, catalog.default_documents(SITE_CONTENT_COLLECTION)
    )


def complete_site_content(content: SiteContent) -> SiteContent:
    """Returns `content` with any missing optional section filled from defaults."""
    missing = [name for name in _OPTIONAL_SECTIONS if getattr(content, name) is None]
    if not missing:
        return content
    defaults = _default_content()
    values = {name: getattr(defaults, name) for name in missing}
    return replace(content, **values)


def _site_content(repository: ContentRepository, sources: dict) -> SiteContent:
    result = repository.get_site_content()
    sources["site_content"] = result.source
    return complete_site_content(result.data)


def _track(result: FetchResult, name: str, sources: dict):
    sources[name] = result.source
    return result.data


def home_page(repository: ContentRepository) -> PageView:
    sources: dict[str, FetchSource] = {}
    content = _site_content(repository, sources)
    projects = _track(repository.get_projects(), "projects", sources)
    testimonials = _track(repository.get_testimonials(), "testimonials", sources)
    return PageView(
        page="home",
        sections={
            "hero": content.hero,
            "signature_styles": content.signature_styles,
            "featured_projects": projects[:HOME_FEATURED_PROJECTS],
            "testimonials": testimonials,
            "process": content.process,
            "faq": content.faq,
            "cta_section": content.cta_section,
        },
        sources=sources,
    )


def services_page(repository: ContentRepository) -> PageView:
    sources: dict[str, FetchSource] = {}
    content = _site_content(repository, sources)
    page = content.services_page
    return PageView(
        page="services",
        sections={
            "header": page.header,
            "section1": page.section1,
            "section2": page.section2,
            "process": content.process,
            "cta_section": content.cta_section,
        },
        sources=sources,
    )


def packages_page(repository: ContentRepository) -> PageView:
    sources: dict[str, FetchSource] = {}
    packages = _track(repository.get_packages(), "packages", sources)
    return PageView(page="packages", sections={"packages": packages}, sources=sources)


def filter_projects(projects: list, tag: Optional[str]) -> list:
    if not tag or tag == PORTFOLIO_FILTER_ALL:
        return list(projects)
    return [p for p in projects if tag in p.theme_tags]


def portfolio_page(repository: ContentRepository, tag: Optional[str] = None) -> PageView:
    sources: dict[str, FetchSource] = {}
    projects = _track(repository.get_projects(), "projects", sources)
    return PageView(
        page="portfolio",
        sections={
            "filters": list(PORTFOLIO_FILTERS),
            "active_filter": tag or PORTFOLIO_FILTER_ALL,
            "projects": filter_projects(projects, tag),
        },
        sources=sources,
    )


def about_page(repository: ContentRepository) -> PageView:
    sources: dict[str, FetchSource] = {}
    content = _site_content(repository, sources)
    return PageView(
        page="about",
        sections={
            "header": content.about_page.header,
            "story": content.about_page.story,
            "signature_styles": content.signature_styles,
        },
        sources=sources,
    )


def contact_page(repository: ContentRepository, package: Optional[str] = None) -> PageView:
    """Contact form data. `package` pre-selects the service the visitor came from."""
    sources: dict[str, FetchSource] = {}
    settings = _track(repository.get_settings(), "settings", sources)
    return PageView(
        page="contact",
        sections={
            "settings": settings,
            "budget_ranges": settings.budget_ranges,
            "service_interested": [package] if package else [],
        },
        sources=sources,
    )

