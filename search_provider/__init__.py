"""search_provider - 검색 엔진 결과 수집기

여러 검색 엔진을 우선순위대로 호출하고(폴백), 결과 페이지에서 링크/제목/설명을 추출해
(engine, query, locale) 단위로 캐시합니다.
"""

from search_provider.services.search_service import SearchOptions, SearchService, build_default_search_service

__all__ = ["SearchOptions", "SearchService", "build_default_search_service"]
