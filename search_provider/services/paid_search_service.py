"""유료 검색 서비스 (프록시 SERP)

비용이 발생하므로 accept_usage=True로 명시적으로 동의한 경우에만 실행합니다.
"""

from __future__ import annotations

from typing import Optional

from search_provider.core.logging import logger, sanitize_for_log
from search_provider.core.exceptions import CacheException, PaidUsageNotAcceptedException
from search_provider.crawlers.engines.google import GOOGLE_ENGINE_NAME
from search_provider.engine.cache_adapter import EngineResultCache
from search_provider.engine.context import ProxyPolicy
from search_provider.engine.result import SearchEngineResult

from .search_service import SearchOptions, SearchService


PROXY_USAGE_SERP = "serp"


class PaidSearchService:
    """유료 검색 기본 클래스"""

    service_name = "paid_search"

    def __init__(
        self,
        search_service: SearchService,
        cache: Optional[EngineResultCache] = None,
        accept_usage: bool = False,
    ):
        if search_service is None:
            raise ValueError("search_service must not be None")
        self.search_service = search_service
        self.cache = cache
        self.accept_usage = accept_usage

    def ensure_usage_accepted(self) -> None:
        """
        Raises:
            PaidUsageNotAcceptedException: 사용 동의가 없는 경우
        """
        if not self.accept_usage:
            raise PaidUsageNotAcceptedException(self.service_name)

    async def get_search_results(self, query: str, target_country: Optional[str] = None) -> list[SearchEngineResult]:
        raise NotImplementedError


class BrightDataSearchService(PaidSearchService):
    """Bright Data SERP 프록시를 통한 Google 검색

    Usage:
        paid = BrightDataSearchService(search_service, cache, accept_usage=True)
        results = await paid.get_search_results("hp 2700 printer manual pdf", target_country="PL")
    """

    service_name = "bright_data"

    async def get_search_results(self, query: str, target_country: Optional[str] = None) -> list[SearchEngineResult]:
        """유료 검색 실행 (Google 단일 엔진, 폴백 없음)

        Raises:
            PaidUsageNotAcceptedException: 사용 동의가 없는 경우
        """
        self.ensure_usage_accepted()

        cached = await self._load_cached(query, target_country)
        if cached:
            logger.info(f"[PAID_SEARCH] Cache hit: service={self.service_name}, results={len(cached)}")
            return cached

        options = SearchOptions(
            proxy_policy=ProxyPolicy.from_settings(usage=PROXY_USAGE_SERP, country_code=target_country),
            force_allow=frozenset({GOOGLE_ENGINE_NAME}),
        )
        logger.info(
            f"[PAID_SEARCH] Searching for string: {sanitize_for_log(query)}, target_country={target_country}, "
            f"proxy_usage={PROXY_USAGE_SERP}, engines={[GOOGLE_ENGINE_NAME]}"
        )

        results = await self.search_service.search(query, [GOOGLE_ENGINE_NAME], options)
        await self._save_cached(results, query, target_country)
        return results

    async def _load_cached(self, query: str, target_country: Optional[str]) -> list[SearchEngineResult]:
        if self.cache is None:
            return []
        try:
            return await self.cache.load(self.service_name, query, target_country)
        except CacheException as e:
            logger.warning(f"[CACHE] Cache read failed for {self.service_name}, treating as miss: {e}")
            return []

    async def _save_cached(self, results: list[SearchEngineResult], query: str, target_country: Optional[str]) -> None:
        if self.cache is None:
            return
        try:
            await self.cache.save(results, self.service_name, query, target_country)
        except CacheException as e:
            logger.warning(f"[CACHE] Cache write failed for {self.service_name}: {e}")
