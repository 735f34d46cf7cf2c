"""Field-level normalization of loosely typed provider records."""

from .analysis import normalize_analysis
from .competitor import is_client_row, normalize_competitor, normalize_competitors
from .fallback import fallback_analysis, fallback_competitor
from .fields import canonicalize_url, normalize_categories, string_array, string_or_array

__all__ = [
    "canonicalize_url",
    "fallback_analysis",
    "fallback_competitor",
    "is_client_row",
    "normalize_analysis",
    "normalize_categories",
    "normalize_competitor",
    "normalize_competitors",
    "string_array",
    "string_or_array",
]
