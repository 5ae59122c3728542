"""Global configuration constants for the project.

Defines paths, archive member names, site branding and rendering defaults
used across the directory pipeline.
"""

from __future__ import annotations

from pathlib import Path

# Project directories
PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
LOG_DIR: Path = PROJECT_ROOT / "logs"
TEMPLATES_DIR: Path = PROJECT_ROOT / "templates"

# Input archive and its fixed member names
DATA_ZIP_PATH: Path = PROJECT_ROOT / "data" / "data.zip"
BUSINESSES_MEMBER: str = "beauty_salon.csv"
CITIES_MEMBER: str = "city.csv"
STATES_MEMBER: str = "state.csv"
CATEGORIES_MEMBER: str = "category.csv"

# Output tree
OUTPUT_DIR: Path = PROJECT_ROOT / "public"
DATA_SUBDIR: str = "data"
COMPANIES_SUBDIR: str = "companies"
CITIES_SUBDIR: str = "cities"
STATES_SUBDIR: str = "states"
CATEGORIES_SUBDIR: str = "categories"
HTML_SITEMAP_SUBDIR: str = "sitemap"
XML_SITEMAPS_SUBDIR: str = "sitemaps"
SITEMAP_INDEX_FILENAME: str = "sitemap.xml"
PAGE_FILENAME: str = "index.html"

# JSON snapshot filenames
SALONS_JSON_FILENAME: str = "salons.json"
CITIES_JSON_FILENAME: str = "cities.json"
STATES_JSON_FILENAME: str = "states.json"
CATEGORIES_JSON_FILENAME: str = "categories.json"

# Site branding
SITE_NAME: str = "Electrolysis Directory"
SITE_BASE_URL: str = "https://electrolysisdirectory.com"
SITE_TAGLINE: str = "Find the best electrolysis providers in your area."
SITE_CONTACT_EMAIL: str = "info@electrolysisdirectory.com"
SITE_CONTACT_PHONE: str = "(555) 123-4567"

# Slug fallbacks
UNKNOWN_CITY_SLUG: str = "unknown-city"
UNKNOWN_STATE_SLUG: str = "us"

# Sitemaps
SITEMAP_BATCH_SIZE: int = 200
SITEMAP_NAMESPACE: str = "http://www.sitemaps.org/schemas/sitemap/0.9"
COMPANY_CHANGEFREQ: str = "monthly"
COMPANY_PRIORITY: str = "0.8"
LOCATION_CHANGEFREQ: str = "weekly"
LOCATION_PRIORITY: str = "0.7"
HTML_SITEMAP_CITY_LIMIT: int = 100

# Page rendering defaults
FALLBACK_DESCRIPTION_TEXT: str = (
    "Professional electrolysis services for permanent hair removal."
)
PROVIDER_EXCERPT_LENGTH: int = 150
NEARBY_CITIES_LIMIT: int = 5
FEATURED_PROVIDERS_LIMIT: int = 5
PROGRESS_LOG_INTERVAL: int = 100
DEBUG_SAMPLE_SIZE: int = 5

# Logging
LOG_FILENAME_GENERATE_SITE: str = "generate_site.log"
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
