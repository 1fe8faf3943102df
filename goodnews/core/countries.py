"""
Country code lookup.
"""
DEFAULT_COUNTRY = "us"

COUNTRY_NAMES = {
    "us": "United States",
    "gb": "United Kingdom",
    "ca": "Canada",
    "au": "Australia",
    "de": "Germany",
    "fr": "France",
    "it": "Italy",
    "es": "Spain",
    "nl": "Netherlands",
    "se": "Sweden",
    "no": "Norway",
    "jp": "Japan",
    "kr": "South Korea",
    "sg": "Singapore",
    "bg": "Bulgaria",
}


def normalize_country(code: str) -> str:
    """Lower-case a country code, defaulting blank input to "us"."""
    code = (code or "").strip().lower()
    return code or DEFAULT_COUNTRY


def resolve(code: str) -> str:
    """
    Map a country code to its English display name.

    Lookup is case-insensitive; unknown codes are returned unchanged.
    """
    return COUNTRY_NAMES.get((code or "").strip().lower(), code)
