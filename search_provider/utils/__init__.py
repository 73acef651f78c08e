"""공용 유틸리티 (URL, 해싱)."""

from .hash_utils import hash_string, canonicalize_query
from .url_utils import (
    get_host_from_url,
    get_link_extension,
    is_valid_absolute_url,
    normalize_string_for_url,
    validate_url_consistency,
)

__all__ = [
    "hash_string",
    "canonicalize_query",
    "get_host_from_url",
    "get_link_extension",
    "is_valid_absolute_url",
    "normalize_string_for_url",
    "validate_url_consistency",
]
