"""Pydantic 스키마."""

from .search_schema import CachedSearchResult

__all__ = ["CachedSearchResult"]
