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

# Built-in content served whenever the document store is empty, unreachable or
# refuses access. Documents are kept in the stored (camelCase) shape so they go
# through the same decoding path as live data.

import copy
from types import MappingProxyType

from aster_shared.constants import (
    BLOGS_COLLECTION,
    INQUIRIES_COLLECTION,
    PACKAGES_COLLECTION,
    PROJECTS_COLLECTION,
    SETTINGS_COLLECTION,
    SITE_CONTENT_COLLECTION,
    TESTIMONIALS_COLLECTION,
)

BRAND_NAME = "Aster & Co."

DEFAULT_SETTINGS = {
    "brandName": BRAND_NAME,
    "whatsappNumber": "6281234567890",
    "adminEmail": "hello@asterandco.com",
    "address": "Jakarta Selatan, Indonesia",
    "budgetRanges": [
        "< IDR 100 Juta",
        "IDR 100 Juta - 250 Juta",
        "IDR 250 Juta - 500 Juta",
        "IDR 500 Juta - 1 Milyar",
        "> IDR 1 Milyar",
    ],
}

DEFAULT_SITE_CONTENT = {
    "hero": {
        "headline": "Creating Timeless Moments & \nUnforgettable Memories",
        "subheadline": "Premium Wedding Organizer & Planner in Indonesia",
        "ctaText": "Book Free Consultation",
        "backgroundImage": "https://images.unsplash.com/photo-1519741497674-611481863552?ixlib=rb-1.2.1&auto=format&fit=crop&w=1920&q=80",
    },
    "signatureStyles": [
        {
            "id": "s1",
            "iconName": "Heart",
            "title": "Personalized Concept",
            "description": "Kami mendengarkan cerita Anda untuk menciptakan konsep pernikahan yang benar-benar personal dan unik.",
        },
        {
            "id": "s2",
            "iconName": "Clock",
            "title": "Seamless Execution",
            "description": "Perencanaan teliti dan koordinasi sempurna agar Anda bisa menikmati momen tanpa rasa khawatir.",
        },
        {
            "id": "s3",
            "iconName": "Star",
            "title": "Premium Vendors",
            "description": "Akses eksklusif ke vendor-vendor pernikahan terbaik di industri yang telah terkurasi.",
        },
    ],
    "ctaSection": {
        "title": "Let's Plan Your Dream Wedding",
        "description": "Jadwalkan konsultasi gratis dengan tim expert kami untuk mendiskusikan visi pernikahan Anda.",
        "buttonText": "Start Planning Today",
    },
    "process": [
        {
            "number": "01",
            "title": "Free Consultation",
            "description": "Ceritakan visi, jumlah tamu, dan anggaran Anda. Kami bantu memetakan kebutuhan awal.",
        },
        {
            "number": "02",
            "title": "Concept & Planning",
            "description": "Kami menyusun konsep, timeline, dan rekomendasi vendor yang sesuai dengan gaya Anda.",
        },
        {
            "number": "03",
            "title": "Vendor Coordination",
            "description": "Negosiasi, technical meeting, dan finalisasi rundown bersama seluruh vendor.",
        },
        {
            "number": "04",
            "title": "The Big Day",
            "description": "Tim kami memastikan setiap detail berjalan sesuai rencana sementara Anda menikmati momen.",
        },
    ],
    "faq": [
        {
            "question": "Berapa lama sebelum acara sebaiknya kami booking?",
            "answer": "Idealnya 9-12 bulan sebelum hari H untuk Full Planning, dan minimal 2 bulan untuk On-the-Day Coordination.",
        },
        {
            "question": "Apakah bisa custom paket?",
            "answer": "Bisa. Semua paket dapat disesuaikan dengan kebutuhan dan anggaran Anda setelah sesi konsultasi.",
        },
        {
            "question": "Apakah melayani pernikahan di luar Jakarta?",
            "answer": "Ya, kami melayani destination wedding di seluruh Indonesia, termasuk Bali, Yogyakarta, dan Bandung.",
        },
    ],
    "servicesPage": {
        "header": {
            "title": "Our Services",
            "description": "Kami menawarkan rangkaian layanan yang disesuaikan dengan kebutuhan Anda, mulai dari perencanaan awal hingga koordinasi hari-H.",
        },
        "section1": {
            "title": "Full Wedding Planning",
            "subtitle": "Best for busy couples",
            "description": "Layanan komprehensif dimana kami mendampingi Anda dari nol. Mulai dari pencarian venue, seleksi vendor, konsep desain, manajemen anggaran, hingga eksekusi hari H.",
            "image": "https://images.unsplash.com/photo-1511795409834-ef04bbd61622?ixlib=rb-1.2.1&auto=format&fit=crop&w=800&q=80",
        },
        "section2": {
            "title": "Wedding Day Coordination",
            "subtitle": "For the DIY planner",
            "description": "Anda sudah merencanakan semuanya? Biarkan kami yang mengambil alih di bulan terakhir dan memastikan semua rencana berjalan mulus di hari H.",
            "image": "https://images.unsplash.com/photo-1515934751635-c81c6bc9a2d8?ixlib=rb-1.2.1&auto=format&fit=crop&w=800&q=80",
        },
    },
    "aboutPage": {
        "header": {
            "title": "About Aster & Co.",
            "subtitle": "Our Story",
            "description": "Wedding organizer yang percaya setiap pasangan layak mendapatkan hari yang tenang dan berkesan.",
            "image": "https://images.unsplash.com/photo-1469371670807-013ccf25f16a?ixlib=rb-1.2.1&auto=format&fit=crop&w=1920&q=80",
        },
        "story": {
            "title": "Crafted With Heart Since 2015",
            "description": "Berawal dari tim kecil di Jakarta, kami telah mendampingi ratusan pasangan merayakan hari bahagia mereka.\nKami percaya perencanaan yang baik membuat Anda bebas menikmati setiap momen.",
            "image": "https://images.unsplash.com/photo-1522673607200-164d1b6ce486?ixlib=rb-1.2.1&auto=format&fit=crop&w=800&q=80",
        },
    },
}

DEFAULT_PACKAGES = [
    {
        "id": "1",
        "name": "Full Planning Service",
        "priceFrom": "IDR 75.000.000",
        "features": [
            "Konsep & Desain Acara Lengkap",
            "Pengelolaan Budget & Pembayaran",
            "Kurasi & Negosiasi Vendor",
            "Unlimited Konsultasi",
            "Hari-H Koordinasi (10 Tim)",
            "RSVP Management",
        ],
        "isFeatured": True,
        "order": 1,
    },
    {
        "id": "2",
        "name": "Partial Planning",
        "priceFrom": "IDR 45.000.000",
        "features": [
            "Melanjutkan Perencanaan Klien",
            "Rekomendasi Vendor Tersisa",
            "Finalisasi Rundown",
            "Technical Meeting Vendor",
            "Hari-H Koordinasi (8 Tim)",
        ],
        "isFeatured": False,
        "order": 2,
    },
    {
        "id": "3",
        "name": "On-the-Day Coordination",
        "priceFrom": "IDR 25.000.000",
        "features": [
            "Handover 1 Bulan Sebelum Acara",
            "Pembuatan Rundown Detail",
            "Koordinasi Vendor Saat Hari-H",
            "Hari-H Koordinasi (6 Tim)",
            "Penyelesaian Masalah Lapangan",
        ],
        "isFeatured": False,
        "order": 3,
    },
]

DEFAULT_PROJECTS = [
    {
        "id": "p1",
        "title": "Clara & David",
        "slug": "clara-david",
        "coverImage": "https://picsum.photos/800/600?random=1",
        "location": "Amanjiwo, Magelang",
        "date": "12 October 2023",
        "themeTags": ["Outdoor", "Intimate", "Traditional-Modern"],
        "description": "Sebuah perayaan cinta yang intim dengan latar belakang Candi Borobudur, menggabungkan adat Jawa dengan sentuhan modern minimalis.",
        "vendors": ["Axioo Photography", "Syalendra Decoration", "Hian Tjen (Dress)"],
    },
    {
        "id": "p2",
        "title": "Eleanor & James",
        "slug": "eleanor-james",
        "coverImage": "https://picsum.photos/800/600?random=2",
        "location": "The Langham, Jakarta",
        "date": "05 September 2023",
        "themeTags": ["Ballroom", "Elegant", "International"],
        "description": "Kemewahan klasik di jantung Jakarta. Didominasi warna putih dan emas, menciptakan suasana royal wedding yang tak terlupakan.",
        "vendors": ["David Salim Photography", "Stupa Caspea", "Yefta Gunawan"],
    },
    {
        "id": "p3",
        "title": "Sinta & Rama",
        "slug": "sinta-rama",
        "coverImage": "https://picsum.photos/800/600?random=3",
        "location": "Pine Hill, Bandung",
        "date": "20 August 2023",
        "themeTags": ["Outdoor", "Rustic", "Modern"],
        "description": "Pesta kebun di tengah hutan pinus dengan nuansa hangat dan santai, diakhiri dengan pesta kembang api yang meriah.",
        "vendors": ["Terralogical", "Tea Rose Wedding", "Biyan"],
    },
]

DEFAULT_TESTIMONIALS = [
    {
        "id": "t1",
        "name": "Clara Santoso",
        "role": "Bride",
        "rating": 5,
        "quote": "Aster & Co benar-benar mewujudkan pernikahan impian kami. Detailnya luar biasa dan tim sangat profesional. Saya tidak perlu pusing sama sekali di hari H!",
        "eventType": "Intimate Wedding",
    },
    {
        "id": "t2",
        "name": "James Anderson",
        "role": "Groom",
        "rating": 5,
        "quote": "Professional, calm, and incredibly organized. Choosing Aster & Co was the best investment for our wedding.",
        "eventType": "International Wedding",
    },
]

DEFAULT_BLOGS = [
    {
        "id": "b1",
        "title": "5 Tren Pernikahan 2024 yang Perlu Anda Tahu",
        "excerpt": "Mulai dari dekorasi sustainable hingga micro-wedding, berikut adalah prediksi tren tahun depan.",
        "coverImage": "https://picsum.photos/800/400?random=10",
        "date": "10 Nov 2023",
        "category": "Trends",
    },
    {
        "id": "b2",
        "title": "Cara Mengatur Budget Pernikahan Tanpa Stress",
        "excerpt": "Panduan lengkap alokasi dana untuk venue, katering, dan detail kecil yang sering terlupakan.",
        "coverImage": "https://picsum.photos/800/400?random=11",
        "date": "25 Oct 2023",
        "category": "Planning",
    },
]

_CATALOG = MappingProxyType(
    {
        PACKAGES_COLLECTION: DEFAULT_PACKAGES,
        PROJECTS_COLLECTION: DEFAULT_PROJECTS,
        TESTIMONIALS_COLLECTION: DEFAULT_TESTIMONIALS,
        BLOGS_COLLECTION: DEFAULT_BLOGS,
        # Leads are never invented; an unreadable inbox is an empty inbox.
        INQUIRIES_COLLECTION: [],
        SITE_CONTENT_COLLECTION: DEFAULT_SITE_CONTENT,
        SETTINGS_COLLECTION: DEFAULT_SETTINGS,
    }
)


def catalog_names() -> list[str]:
    return list(_CATALOG.keys())


def default_documents(name: str):
    """
    Returns a fresh copy of the built-in documents for `name`: a list for
    collections, a single dict for single-document collections.

    Raises KeyError for names the catalog does not know.
    """
    return copy.deepcopy(_CATALOG[name])
