"""DOM 기반 검색 엔진 어댑터

엔진별 차이는 EngineDefinition(정적 설정 데이터)로만 표현하고,
캐시 → URL 생성 → User-Agent 루프 → 후처리 → 캐시 저장 흐름은 DomEngineAdapter가 공통으로 담당합니다.
"""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional, Protocol, Sequence
from urllib.parse import urlencode

from search_provider.core.config import settings
from search_provider.core.logging import ENGINE_FAILURE_NOTE, logger, sanitize_for_log
from search_provider.core.exceptions import (
    CacheException,
    ConfigurationException,
    ExtractionMismatchException,
    NoSearchResultsException,
    PageContentScrappingException,
)
from search_provider.engine.cache_adapter import EngineResultCache
from search_provider.engine.context import AdapterRequestContext, ProxyPolicy
from search_provider.engine.extraction_plan import ExtractionPlan
from search_provider.engine.result import EngineCrawlResult, SearchEngineResult
from search_provider.engine.strategy import FailureStrategy
from search_provider.utils.url_utils import get_host_from_url, normalize_string_for_url, validate_url_consistency

from ..diagnostics import DiagnosticArtifactSink
from ..extraction import DomExtractionEngine, ExtractionContext
from ..fetcher import PageFetcher
from ..user_agents import DEFAULT_USER_AGENT


NoResultsDetector = Callable[[str], bool]
PostProcessor = Callable[[list[SearchEngineResult]], list[SearchEngineResult]]


def never_no_results(page_content: str) -> bool:
    return False


def keep_results(results: list[SearchEngineResult]) -> list[SearchEngineResult]:
    return results


def regex_no_results(pattern: str) -> NoResultsDetector:
    """페이지에 정규식이 매치되면 '결과 없음'"""
    compiled = re.compile(pattern)

    def detect(page_content: str) -> bool:
        return bool(compiled.search(page_content or ""))

    return detect


def text_no_results(marker: str) -> NoResultsDetector:
    """페이지에 문구가 포함되면 '결과 없음'"""

    def detect(page_content: str) -> bool:
        return marker in (page_content or "")

    return detect


@dataclass(frozen=True)
class EngineDefinition:
    """엔진 정적 설정

    Attributes:
        name: 엔진 식별자 (캐시 키, 로그, 레지스트리에 사용)
        base_url: 검색 URL (http/https)
        query_parameter: 검색어 쿼리 파라미터 이름
        additional_query_parameters: 추가 파라미터 (선언 순서 유지)
        headers: 엔진 헤더 (기본 헤더를 대소문자 무시하고 덮어씀)
        user_agents: 시도할 User-Agent 목록 (비어 있으면 DEFAULT_USER_AGENT 하나)
        plan: DOM 추출 계획
        no_results_detector: 페이지가 '결과 없음' 응답인지 판별
        post_processor: 추출 결과 후처리 (필터/링크 정규화)
        or_operator: OR 연산자 (미지원이면 None)
        locale_sensitive: 결과가 프록시 국가에 따라 달라지는지 여부 (캐시 키에 반영)
    """

    name: str
    base_url: str
    query_parameter: str
    plan: ExtractionPlan
    additional_query_parameters: tuple[tuple[str, str], ...] = ()
    headers: Mapping[str, str] = field(default_factory=dict)
    user_agents: tuple[str, ...] = ()
    no_results_detector: NoResultsDetector = never_no_results
    post_processor: PostProcessor = keep_results
    or_operator: Optional[str] = None
    locale_sensitive: bool = False

    @property
    def effective_user_agents(self) -> tuple[str, ...]:
        return self.user_agents or (DEFAULT_USER_AGENT,)

    @property
    def host(self) -> str:
        return get_host_from_url(self.base_url)

    def validate(self) -> None:
        """등록 시점 검증

        Raises:
            ConfigurationException: 이름/URL/파라미터가 비었거나 추출 계획이 잘못된 경우
        """
        if not self.name:
            raise ConfigurationException("Engine name must not be empty")
        if not self.query_parameter:
            raise ConfigurationException(f"Engine `{self.name}` has no query parameter")
        validate_url_consistency(self.base_url)
        self.plan.validate()


class SearchEngineAdapter(Protocol):
    """검색 엔진 어댑터 프로토콜

    search()는 결과 목록을 반환하며, 결과가 없으면 빈 리스트를 반환합니다.
    """

    name: str

    async def search(
        self,
        query: str,
        proxy_policy: Optional[ProxyPolicy] = None,
    ) -> list[SearchEngineResult]:
        ...


class DomEngineAdapter:
    """EngineDefinition 기반 어댑터

    Usage:
        adapter = DomEngineAdapter(BING, fetcher, cache)
        results = await adapter.search("hp 2700 printer manual pdf")
    """

    def __init__(
        self,
        definition: EngineDefinition,
        fetcher: PageFetcher,
        cache: Optional[EngineResultCache] = None,
        extraction_engine: Optional[DomExtractionEngine] = None,
        diagnostics: Optional[DiagnosticArtifactSink] = None,
        sleep_time_s: Optional[float] = None,
        min_expected_results: Optional[int] = None,
    ):
        """
        Args:
            definition: 엔진 설정 (생성 시 검증)
            fetcher: 페이지 fetcher
            cache: 결과 캐시 (None이면 캐시 미사용)
            extraction_engine: DOM 추출 엔진
            diagnostics: 진단 아티팩트 저장소
            sleep_time_s: 호출 후 대기 시간 (기본값: ENGINE_SLEEP_TIME_MS)
            min_expected_results: 이보다 적으면 경고 로그

        Raises:
            ConfigurationException: 엔진 설정이 잘못된 경우
        """
        if fetcher is None:
            raise ValueError("fetcher must not be None")
        definition.validate()

        self.definition = definition
        self.fetcher = fetcher
        self.cache = cache
        self.extraction_engine = extraction_engine or DomExtractionEngine()
        self.diagnostics = diagnostics or DiagnosticArtifactSink()
        self.sleep_time_s = (
            sleep_time_s if sleep_time_s is not None else settings.engine_sleep_time_ms / 1000.0
        )
        self.min_expected_results = (
            min_expected_results if min_expected_results is not None else settings.min_expected_search_results
        )

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def or_operator(self) -> Optional[str]:
        return self.definition.or_operator

    def generate_url(self, query: str) -> str:
        """검색 URL 생성

        Returns:
            str: `base_url?param=<query>[&extra...]`

        Raises:
            ConfigurationException: base_url이 http/https가 아닌 경우
        """
        validate_url_consistency(self.definition.base_url)
        url = f"{self.definition.base_url}?{self.definition.query_parameter}={normalize_string_for_url(query)}"
        if self.definition.additional_query_parameters:
            url += "&" + urlencode(list(self.definition.additional_query_parameters))
        return url

    def locale_for(self, proxy_policy: ProxyPolicy) -> Optional[str]:
        if not self.definition.locale_sensitive:
            return None
        return proxy_policy.country_code

    async def search(
        self,
        query: str,
        proxy_policy: Optional[ProxyPolicy] = None,
    ) -> list[SearchEngineResult]:
        """검색 실행

        Returns:
            list[SearchEngineResult]: 후처리된 결과, 결과 없음이면 빈 리스트

        Raises:
            ConfigurationException: 엔진 설정 오류
            PageContentScrappingException: 예기치 못한 오류 (오케스트레이터가 흡수)
        """
        policy = proxy_policy or ProxyPolicy.disabled()
        locale = self.locale_for(policy)

        cached = await self._load_cached(query, locale)
        if cached:
            logger.info(f"[ENGINE] Cache hit: engine={self.name}, results={len(cached)}")
            return cached

        url = self.generate_url(query)
        try:
            results = await self._crawl(url, query, policy)
        except NoSearchResultsException as e:
            if not FailureStrategy.is_no_results_message(e):
                raise
            logger.info(f"[ENGINE] {self.name} responded with no results: {sanitize_for_log(query)}")
            return []
        finally:
            # 엔진 차단 방지용 호출 간격
            await asyncio.sleep(self.sleep_time_s)

        if not results:
            return []

        if len(results) < self.min_expected_results:
            logger.warning(
                f"[ENGINE] Too few results from {self.name}, expected min: {self.min_expected_results}, "
                f"got: {len(results)}"
            )

        processed = list(self.definition.post_processor(list(results)))
        await self._save_cached(processed, query, locale)
        return processed

    async def _crawl(self, url: str, query: str, proxy_policy: ProxyPolicy) -> list[SearchEngineResult]:
        """User-Agent 루프 - 결과가 나오는 첫 User-Agent에서 중단"""
        user_agents = self.definition.effective_user_agents
        failed_user_agents: list[str] = []
        last_page = ""
        last_artifact = None

        for user_agent in user_agents:
            try:
                crawl = await self._crawl_for_user_agent(url, query, user_agent, proxy_policy)
            except (ConfigurationException, NoSearchResultsException):
                raise
            except Exception as e:
                if not FailureStrategy.is_failed_attempt(e):
                    raise PageContentScrappingException(url, e) from e
                logger.warning(f"[ENGINE] {self.name} attempt failed for user agent {user_agent}: {e}")
                failed_user_agents.append(user_agent)
                continue

            last_page = crawl.page_content
            if not crawl.failed:
                return crawl.results

            failed_user_agents.append(user_agent)
            last_artifact = self.diagnostics.write(crawl.page_content)
            if crawl.error is not None:
                logger.error(
                    f"[ENGINE] Extraction config of {self.name} no longer matches the page: {crawl.error}, "
                    f"user agent: {user_agent}, page snapshot: {last_artifact}"
                )
            else:
                logger.warning(
                    f"[ENGINE] {ENGINE_FAILURE_NOTE} - no results from {self.name} for user agent: {user_agent}, "
                    f"url: {sanitize_for_log(url, 200)}, page snapshot: {last_artifact}"
                )

        if last_artifact is None:
            last_artifact = self.diagnostics.write(last_page)
        logger.warning(
            f"[ENGINE] {ENGINE_FAILURE_NOTE} - {self.name} failed for all user agents "
            f"({len(failed_user_agents)}/{len(user_agents)}): {failed_user_agents}, "
            f"url: {sanitize_for_log(url, 200)}, last page: {last_artifact}"
        )
        return []

    async def _crawl_for_user_agent(
        self,
        url: str,
        query: str,
        user_agent: str,
        proxy_policy: ProxyPolicy,
    ) -> EngineCrawlResult:
        """User-Agent 하나로 fetch + 추출

        추출 설정 불일치는 받은 페이지와 함께 EngineCrawlResult.error로 반환합니다.

        Raises:
            FetchException: 네트워크/상태 코드 오류
            NoSearchResultsException: 엔진이 '결과 없음' 페이지를 반환
        """
        host = self.definition.host
        context = AdapterRequestContext.build(
            url=url,
            host=host,
            searched_string=query,
            user_agent=user_agent,
            proxy_policy=proxy_policy,
            engine_headers=self.definition.headers,
        )
        page_content = await self.fetcher.fetch(
            context.url, context.headers, context.user_agent, context.proxy_policy
        )

        if self.definition.no_results_detector(page_content):
            raise NoSearchResultsException(
                self.name,
                query,
                NoSearchResultsException.STATUS_ENGINE_RESPONDED_WITH_NO_RESULTS_MESSAGE,
                url,
            )

        try:
            results = self.extraction_engine.extract(
                page_content,
                self.definition.plan,
                ExtractionContext(searched_string=query, engine_url=host, called_url=url),
            )
        except ExtractionMismatchException as e:
            return EngineCrawlResult(results=[], page_content=page_content, error=e)
        return EngineCrawlResult(results=results, page_content=page_content)

    async def _load_cached(self, query: str, locale: Optional[str]) -> list[SearchEngineResult]:
        if self.cache is None:
            return []
        try:
            return await self.cache.load(self.name, query, locale)
        except CacheException as e:
            logger.warning(f"[CACHE] Cache read failed for {self.name}, treating as miss: {e}")
            return []

    async def _save_cached(
        self,
        results: Sequence[SearchEngineResult],
        query: str,
        locale: Optional[str],
    ) -> None:
        if self.cache is None:
            return
        try:
            await self.cache.save(results, self.name, query, locale)
        except CacheException as e:
            logger.warning(f"[CACHE] Cache write failed for {self.name}: {e}")
