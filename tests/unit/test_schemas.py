"""Pydantic 스키마 테스트."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from search_provider.schemas.search_schema import CachedSearchResult


def test_cached_search_result_creation():
    """CachedSearchResult 생성."""
    record = CachedSearchResult(
        searched_string="hp 2700 manual",
        engine_url="www.bing.com",
        link="https://support.hp.com/manual.pdf",
        title="HP 2700",
    )

    assert record.description is None
    assert record.link == "https://support.hp.com/manual.pdf"


def test_cached_search_result_relative_link_rejected():
    with pytest.raises(ValidationError):
        CachedSearchResult(
            searched_string="hp",
            engine_url="www.bing.com",
            link="/manual.pdf",
        )


def test_cached_search_result_unknown_key_rejected():
    """예전 형식의 레코드(알 수 없는 키)는 거부."""
    with pytest.raises(ValidationError):
        CachedSearchResult.model_validate(
            {
                "searched_string": "hp",
                "engine_url": "www.bing.com",
                "link": "https://a.com",
                "title": "",
                "rank": 1,
            }
        )
