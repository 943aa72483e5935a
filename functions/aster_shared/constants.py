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

# Collection names in the document store.
PACKAGES_COLLECTION = "packages"
PROJECTS_COLLECTION = "projects"
TESTIMONIALS_COLLECTION = "testimonials"
BLOGS_COLLECTION = "blogs"
INQUIRIES_COLLECTION = "inquiries"

# Single-document collections.
SITE_CONTENT_COLLECTION = "site_content"
SITE_CONTENT_DOC_ID = "main"
SETTINGS_COLLECTION = "settings"
SETTINGS_DOC_ID = "global"

# Inline images are stored as data URIs inside documents, so they are capped.
MAX_INLINE_IMAGE_BYTES = 500 * 1024

# Contact form limits.
MAX_NAME_LENGTH = 120
MAX_EMAIL_LENGTH = 254
MAX_PHONE_LENGTH = 32
MAX_MESSAGE_LENGTH = 4000

# Filter buttons on the portfolio page.
PORTFOLIO_FILTERS = ["All", "Outdoor", "Ballroom", "Intimate", "Traditional-Modern"]
PORTFOLIO_FILTER_ALL = "All"

# Number of projects featured on the home page.
HOME_FEATURED_PROJECTS = 3
