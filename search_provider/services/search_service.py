"""검색 서비스 - 공개 진입점

엔진 검증 → 엔진별 실행(폴백) → 확장자 필터 순서로 처리합니다.
호출자는 결과 리스트 또는 ConfigurationException만 받습니다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from search_provider.core.config import Settings, settings
from search_provider.core.logging import logger, sanitize_for_log
from search_provider.core.exceptions import ConfigurationException, InvalidQueryException
from search_provider.crawlers.diagnostics import DiagnosticArtifactSink
from search_provider.crawlers.engines.registry import EngineRegistry
from search_provider.crawlers.fetcher import HttpPageFetcher
from search_provider.engine.cache_adapter import EngineResultCache
from search_provider.engine.context import ProxyPolicy
from search_provider.engine.orchestrator import SearchOrchestrator
from search_provider.engine.result import SearchEngineResult
from search_provider.services.cache_service import RedisKeyValueStore
from search_provider.services.result_filter_service import SearchEngineResultFilterService


@dataclass(frozen=True)
class SearchOptions:
    """검색 옵션

    Attributes:
        proxy_policy: 엔진 호출에 사용할 프록시 정책
        excluded_extensions: 결과에서 제외할 파일 확장자 (예: {"pdf"})
        force_allow: 기본 목록에 없어도 허용할 엔진 (예: {"google"})
    """

    proxy_policy: ProxyPolicy = field(default_factory=ProxyPolicy.disabled)
    excluded_extensions: frozenset[str] = frozenset()
    force_allow: frozenset[str] = frozenset()


class SearchService:
    """검색 서비스

    Usage:
        service = build_default_search_service()
        results = await service.search("hp 2700 printer manual pdf", ["bing", "duckduckgo_html"])
    """

    def __init__(
        self,
        registry: EngineRegistry,
        orchestrator: Optional[SearchOrchestrator] = None,
        result_filter: Optional[SearchEngineResultFilterService] = None,
    ):
        if registry is None:
            raise ValueError("registry must not be None")
        self.registry = registry
        self.orchestrator = orchestrator or SearchOrchestrator(registry)
        self.result_filter = result_filter or SearchEngineResultFilterService()

    async def search(
        self,
        query: str,
        engines: Sequence[str],
        options: Optional[SearchOptions] = None,
    ) -> list[SearchEngineResult]:
        """검색 실행

        엔진을 호출자 순서대로 실행하며, 필터 후 결과가 남는 첫 엔진에서 멈춥니다.

        Args:
            query: 검색어
            engines: 우선순위 순서의 엔진 이름
            options: 검색 옵션

        Returns:
            list[SearchEngineResult]: 결과 (모든 엔진이 실패하면 빈 리스트)

        Raises:
            ConfigurationException: 검색어/엔진 목록이 잘못된 경우
        """
        if not query or not isinstance(query, str) or not query.strip():
            raise InvalidQueryException("query must be a non-empty string")

        options = options or SearchOptions()
        state = self.orchestrator.validate(engines, options.force_allow)
        logger.info(f"[SEARCH] Search started: query='{sanitize_for_log(query)}', engines={list(state.candidates)}")

        while self.orchestrator.select_next(state) is not None:
            engine = state.current
            raw_results = await self.orchestrator.run(state, query, options.proxy_policy)
            if not raw_results:
                logger.warning(
                    f"[SEARCH] Could not get any search results for string: {sanitize_for_log(query)}, "
                    f"with engine: {engine}"
                )
                continue

            # 캐시에는 필터 전 결과가 저장되어 있음
            outcome = self.result_filter.filter(raw_results, options.excluded_extensions)
            if outcome.results:
                logger.info(f"[SEARCH] Search completed with engine {engine}: results={len(outcome.results)}")
                return outcome.results

            logger.info(f"[SEARCH] All results of {engine} were filtered out, trying next engine")

        logger.warning(f"[SEARCH] No results found with any engine: query='{sanitize_for_log(query)}'")
        return []

    def get_or_operator(self, engine: str) -> Optional[str]:
        """엔진의 OR 연산자 (미지원이면 None)

        Raises:
            EngineNotSupportedException: 알 수 없는 엔진
        """
        return self.registry.get_or_operator(engine)

    def build_or_query(self, terms: Iterable[str], engine: str) -> str:
        """여러 검색어를 엔진의 OR 연산자로 연결

        Examples:
            >>> service.build_or_query(["hp 2700 manual", "hp 2700 guide"], "bing")
            'hp 2700 manual OR hp 2700 guide'

        Raises:
            ConfigurationException: 엔진이 OR 연산자를 지원하지 않는 경우
        """
        operator = self.get_or_operator(engine)
        if not operator:
            raise ConfigurationException(f"Engine `{engine}` does not support the OR operator")
        parts = [term.strip() for term in terms if term and term.strip()]
        return f" {operator} ".join(parts)


def build_default_search_service(app_settings: Optional[Settings] = None) -> SearchService:
    """설정 기반 기본 구성 (Redis 캐시 + 공유 HTTP 클라이언트)

    Raises:
        CacheConnectionException: Redis 연결 실패
    """
    app_settings = app_settings or settings
    store = RedisKeyValueStore(app_settings.redis_url, app_settings.engine_cache_ttl)
    registry = EngineRegistry(
        fetcher=HttpPageFetcher(),
        raw_fetcher=HttpPageFetcher(expect_html=False),
        cache=EngineResultCache(store),
        diagnostics=DiagnosticArtifactSink(app_settings.engine_result_directory),
        sleep_time_s=app_settings.engine_sleep_time_ms / 1000.0,
        min_expected_results=app_settings.min_expected_search_results,
    )
    return SearchService(registry)
