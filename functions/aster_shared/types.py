# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================

from enum import StrEnum
from dataclasses import dataclass, field
from typing import List, Optional


class InquiryStatus(StrEnum):
    NEW = "new"
    CONTACTED = "contacted"
    CLOSED = "closed"


@dataclass
class ServicePackage:
    """A priced planning package. Display order is ascending `order`."""

    id: str
    name: str = ""
    price_from: str = ""
    features: List[str] = field(default_factory=list)
    is_featured: bool = False
    order: int = 0


@dataclass
class PortfolioProject:
    """A past wedding shown in the portfolio.

    `cover_image` is either a URL or an inline `data:` URI. `slug` is derived
    from the title and is not guaranteed to be unique.
    """

    id: str
    title: str = ""
    slug: str = ""
    cover_image: str = ""
    location: str = ""
    date: str = ""
    theme_tags: List[str] = field(default_factory=list)
    description: str = ""
    vendors: List[str] = field(default_factory=list)
    is_featured: Optional[bool] = None


@dataclass
class Testimonial:
    id: str
    name: str = ""
    role: str = ""  # e.g. "Bride", "Mother of Groom"
    rating: int = 5
    quote: str = ""
    event_type: str = ""


@dataclass
class BlogPost:
    id: str
    title: str = ""
    excerpt: str = ""
    cover_image: str = ""
    date: str = ""
    category: str = ""


@dataclass
class Inquiry:
    """A lead submitted from the contact form.

    Created once by a visitor; only `status` changes afterwards.
    """

    id: str
    name: str = ""
    email: str = ""
    phone: str = ""
    event_date: str = ""
    budget_range: str = ""
    service_interested: List[str] = field(default_factory=list)
    message: str = ""
    status: InquiryStatus = InquiryStatus.NEW
    created_at: str = ""  # ISO-8601, UTC


@dataclass
class HeroSection:
    headline: str
    subheadline: str
    cta_text: str
    background_image: str


@dataclass
class SignatureStyle:
    id: str
    title: str
    description: str
    icon_name: str  # "Heart" | "Clock" | "Star"


@dataclass
class CtaSection:
    title: str
    description: str
    button_text: str


@dataclass
class ProcessStep:
    number: str
    title: str
    description: str


@dataclass
class FaqItem:
    question: str
    answer: str


@dataclass
class PageSection:
    title: str
    description: str
    image: Optional[str] = None
    subtitle: Optional[str] = None


@dataclass
class ServicesPage:
    header: PageSection
    section1: PageSection
    section2: PageSection


@dataclass
class AboutPage:
    header: PageSection
    story: PageSection


@dataclass
class SiteContent:
    """Landing page and per-page copy. A single document; edits replace it whole.

    Sections added after the first release are optional so that an older
    stored document still decodes; they come back as None rather than being
    filled in from the defaults.
    """

    hero: HeroSection
    signature_styles: List[SignatureStyle]
    cta_section: CtaSection
    process: Optional[List[ProcessStep]] = None
    faq: Optional[List[FaqItem]] = None
    services_page: Optional[ServicesPage] = None
    about_page: Optional[AboutPage] = None


@dataclass
class SiteSettings:
    brand_name: str
    whatsapp_number: str
    admin_email: str
    address: str
    budget_ranges: List[str] = field(default_factory=list)
