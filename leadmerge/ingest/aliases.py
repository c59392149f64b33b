"""Field alias tables for the two scrape sources.

Each canonical field lists the column names it may arrive under, in priority
order. Rows are resolved once at ingestion so nothing downstream has to know
about scraper-specific spellings.
"""

from typing import Any, Mapping

PROFILE_ALIASES: dict[str, tuple[str, ...]] = {
    "first_name": ("firstName", "first_name", "First Name"),
    "last_name": ("lastName", "last_name", "Last Name"),
    "full_name": ("fullName", "full_name", "Full Name", "name"),
    "job_title": ("jobTitle", "job_title", "title", "Job Title", "headline"),
    "company_name": ("companyName", "company_name", "company", "Company"),
    "company_url": ("companyUrl", "company_url", "Company URL"),
    "website": ("website", "Website", "companyWebsite"),
    "location": ("location", "Location", "address"),
    "phone": ("phone", "Phone", "phoneNumber"),
    "email": ("email", "Email"),
    "profile_url": ("linkedinProfile", "linkedin_url", "linkedinUrl", "profileUrl", "LinkedIn Profile"),
    "company_size": ("companySize", "company_size", "employeeCount", "Company Size"),
    "industry": ("industry", "Industry"),
    "vertical": ("vertical", "Vertical"),
    "recent_activity": ("recentActivity", "recent_activity"),
}

DIRECTORY_ALIASES: dict[str, tuple[str, ...]] = {
    "name": ("name", "businessName", "business_name", "title", "Name"),
    "phone": ("phone", "Phone", "phoneNumber"),
    "address": ("address", "Address", "fullAddress"),
    "website": ("website", "Website", "url"),
    "rating": ("rating", "googleRating", "totalScore", "Rating"),
    "review_count": ("reviewCount", "review_count", "reviewsCount", "reviews", "Reviews"),
    "map_url": ("googleMapsUrl", "mapUrl", "map_url", "placeUrl"),
    "email": ("email", "Email"),
    "category": ("category", "categoryName", "Category"),
    "vertical": ("vertical", "Vertical"),
}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def resolve_fields(row: Mapping[str, Any], aliases: Mapping[str, tuple[str, ...]]) -> dict[str, Any]:
    """Map a raw row onto canonical field names using the first non-blank alias."""
    resolved: dict[str, Any] = {}
    for field, names in aliases.items():
        for name in names:
            value = row.get(name)
            if not _is_blank(value):
                resolved[field] = value
                break
    return resolved
