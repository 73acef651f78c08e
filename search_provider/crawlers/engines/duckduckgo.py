"""DuckDuckGo (전체 버전) - 2단계 토큰 프로토콜 어댑터

1. 토큰 페이지(`https://duckduckgo.com/?q=...`)에서 세션 토큰(vqd) 추출
2. 토큰으로 결과 스크립트(`https://links.duckduckgo.com/d.js?...`) 요청
3. 스크립트 안의 JSON 배열에서 결과 추출

어댑터는 예외를 밖으로 던지지 않고 항상 리스트를 반환합니다.
"""

from __future__ import annotations

import asyncio
import json
import re
from typing import Any, Optional
from urllib.parse import quote, urlencode

from search_provider.core.config import settings
from search_provider.core.logging import ENGINE_FAILURE_NOTE, logger, sanitize_for_log
from search_provider.core.exceptions import (
    CacheException,
    ExtractionMismatchException,
    NoSearchResultsException,
    TokenNotFoundException,
)
from search_provider.engine.cache_adapter import EngineResultCache
from search_provider.engine.context import AdapterRequestContext, ProxyPolicy
from search_provider.engine.result import SearchEngineResult
from search_provider.engine.strategy import FailureStrategy
from search_provider.utils.url_utils import get_host_from_url

from ..dom import DomQueryEngine
from ..extraction import ExtractionContext, assemble_result
from ..fetcher import HttpPageFetcher, PageFetcher
from ..user_agents import CHROME_101, CHROME_101_CLIENT_HINTS


DUCKDUCKGO_ENGINE_NAME = "duckduckgo"

DUCKDUCK_USER_AGENT = CHROME_101


class DuckDuckUrlBuilder:
    """토큰/결과 URL 생성

    결과 URL의 파라미터 순서는 엔진이 엄격하게 검사하므로 바꾸지 마세요.
    """

    BASE_URL = "https://duckduckgo.com/"
    LINKS_BASE_URL = "https://links.duckduckgo.com/"
    RESULTS_URI = "d.js"

    def __init__(self, language: str = "pl-pl", short_language: str = "pl", country: str = "PL"):
        self.language = language
        self.short_language = short_language
        self.country = country

    def build_token_url(self, query: str) -> str:
        # kp=-1이 없으면 "No results found"가 자주 반환됨
        params = [("q", query), ("kp", "-1")]
        return f"{self.BASE_URL}?{urlencode(params)}"

    def build_results_url(self, query: str, token: str) -> str:
        """결과 스크립트 URL (RFC3986 인코딩, 공백은 %20)"""
        params = [
            ("q", query),
            ("l", self.language),
            ("p", "1"),
            ("s", "0"),
            ("a", "h_"),
            ("dl", self.short_language),
            ("ct", self.country),
            ("vqd", token),
            ("p_ent", ""),
        ]
        return f"{self.LINKS_BASE_URL}{self.RESULTS_URI}?{urlencode(params, safe='', quote_via=quote)}"


class DuckDuckTokenExtractor:
    TOKEN_PATTERN = re.compile(r"vqd=['\"](?P<token>[^'\"]+)['\"],safe_ddg")

    def extract_token(self, page_content: str) -> str:
        """토큰 페이지에서 vqd 토큰 추출

        Raises:
            TokenNotFoundException: 토큰이 없는 경우 (프로토콜 변경 신호)
        """
        match = self.TOKEN_PATTERN.search(page_content or "")
        if not match:
            raise TokenNotFoundException("vqd")
        return match.group("token")


class DuckDuckResultsParser:
    """d.js 응답 파서

    응답 형식:
        DDG.pageLayout.load('d',[{"a":"...","t":"...","u":"https://..."}, ..., {"n":"/d.js?..."}]);
    """

    PAYLOAD_PATTERN = re.compile(r"DDG\.pageLayout\.load\(\s*['\"]d['\"]\s*,\s*(\[.*\])\s*\)", re.DOTALL)

    def __init__(self, dom: Optional[DomQueryEngine] = None):
        self.dom = dom or DomQueryEngine()

    def parse(self, payload: str, context: ExtractionContext) -> list[SearchEngineResult]:
        """
        Raises:
            ExtractionMismatchException: 결과 배열을 찾거나 해석할 수 없는 경우
            NoSearchResultsException: 결과 배열이 비어 있는 경우
        """
        entries = self._load_entries(payload)

        # 링크(u)가 없는 항목은 페이지네이션 표시
        result_entries = [entry for entry in entries if isinstance(entry, dict) and entry.get("u")]
        if not result_entries:
            raise NoSearchResultsException(
                DUCKDUCKGO_ENGINE_NAME,
                context.searched_string,
                NoSearchResultsException.STATUS_ENGINE_RESPONDED_WITH_NO_RESULTS_MESSAGE,
                context.called_url,
            )

        results = []
        for entry in result_entries:
            result = assemble_result(
                link=str(entry["u"]),
                title=self.dom.html_to_text(str(entry.get("t") or "")),
                description=self.dom.html_to_text(str(entry.get("a") or "")),
                context=context,
            )
            if result is not None:
                results.append(result)
        return results

    def _load_entries(self, payload: str) -> list[Any]:
        match = self.PAYLOAD_PATTERN.search(payload or "")
        if not match:
            raise ExtractionMismatchException("DDG.pageLayout.load('d')", "results payload not found")
        try:
            entries = json.loads(match.group(1))
        except json.JSONDecodeError as e:
            raise ExtractionMismatchException("DDG.pageLayout.load('d')", f"invalid JSON: {e}") from e
        if not isinstance(entries, list):
            raise ExtractionMismatchException("DDG.pageLayout.load('d')", "payload is not a list")
        return entries


class DuckDuckEngineAdapter:
    """DuckDuckGo 토큰 프로토콜 어댑터

    Usage:
        adapter = DuckDuckEngineAdapter(HttpPageFetcher(), HttpPageFetcher(expect_html=False), cache)
        results = await adapter.search("hp 2700 printer manual pdf")
    """

    name = DUCKDUCKGO_ENGINE_NAME
    or_operator: Optional[str] = None

    def __init__(
        self,
        fetcher: PageFetcher,
        raw_fetcher: Optional[PageFetcher] = None,
        cache: Optional[EngineResultCache] = None,
        url_builder: Optional[DuckDuckUrlBuilder] = None,
        token_extractor: Optional[DuckDuckTokenExtractor] = None,
        results_parser: Optional[DuckDuckResultsParser] = None,
        sleep_time_s: Optional[float] = None,
        min_expected_results: Optional[int] = None,
    ):
        """
        Args:
            fetcher: 토큰 페이지(HTML)용 fetcher
            raw_fetcher: 결과 스크립트(JS)용 fetcher (기본값: HTML 검사 없는 HttpPageFetcher)
        """
        if fetcher is None:
            raise ValueError("fetcher must not be None")
        self.fetcher = fetcher
        self.raw_fetcher = raw_fetcher or HttpPageFetcher(expect_html=False)
        self.cache = cache
        self.url_builder = url_builder or DuckDuckUrlBuilder()
        self.token_extractor = token_extractor or DuckDuckTokenExtractor()
        self.results_parser = results_parser or DuckDuckResultsParser()
        self.sleep_time_s = (
            sleep_time_s if sleep_time_s is not None else settings.engine_sleep_time_ms / 1000.0
        )
        self.min_expected_results = (
            min_expected_results if min_expected_results is not None else settings.min_expected_search_results
        )

    async def search(
        self,
        query: str,
        proxy_policy: Optional[ProxyPolicy] = None,
    ) -> list[SearchEngineResult]:
        policy = proxy_policy or ProxyPolicy.disabled()

        cached = await self._load_cached(query)
        if cached:
            logger.info(f"[DUCKDUCK] Cache hit: results={len(cached)}")
            return cached

        results: list[SearchEngineResult] = []
        try:
            token_page = await self._get_token_page(query, policy)
            token = self.token_extractor.extract_token(token_page)
            results = await self._get_results(query, token, policy)
        except NoSearchResultsException as e:
            if FailureStrategy.is_no_results_message(e):
                logger.info(f"[DUCKDUCK] Engine responded with no results: {sanitize_for_log(query)}")
                return []
            self._log_failure(e)
        except Exception as e:
            self._log_failure(e)
        finally:
            # 엔진 차단 방지용 호출 간격
            await asyncio.sleep(self.sleep_time_s)

        if not results:
            return []

        if len(results) < self.min_expected_results:
            logger.warning(
                f"[DUCKDUCK] Too few results, expected min: {self.min_expected_results}, got: {len(results)}"
            )

        await self._save_cached(results, query)
        return results

    async def _get_token_page(self, query: str, policy: ProxyPolicy) -> str:
        url = self.url_builder.build_token_url(query)
        context = AdapterRequestContext.build(
            url=url,
            host=get_host_from_url(url),
            searched_string=query,
            user_agent=DUCKDUCK_USER_AGENT,
            proxy_policy=policy,
            engine_headers={},
        )
        return await self.fetcher.fetch(context.url, context.headers, context.user_agent, context.proxy_policy)

    async def _get_results(self, query: str, token: str, policy: ProxyPolicy) -> list[SearchEngineResult]:
        url = self.url_builder.build_results_url(query, token)
        host = get_host_from_url(url)
        context = AdapterRequestContext.build(
            url=url,
            host=host,
            searched_string=query,
            user_agent=DUCKDUCK_USER_AGENT,
            proxy_policy=policy,
            engine_headers=self._results_headers(),
        )
        payload = await self.raw_fetcher.fetch(context.url, context.headers, context.user_agent, context.proxy_policy)
        return self.results_parser.parse(
            payload,
            ExtractionContext(
                searched_string=query,
                engine_url=get_host_from_url(self.url_builder.BASE_URL),
                called_url=url,
            ),
        )

    @staticmethod
    def _results_headers() -> dict[str, str]:
        # Sec-ch-ua가 User-Agent와 다르면 빈 결과가 반환됩니다.
        return {
            "Accept": (
                "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,"
                "image/apng,*/*;q=0.8,application/signed-exchange;v=b3;q=0.9"
            ),
            "Accept-language": "pl-PL,pl;q=0.9,en-US;q=0.8,en;q=0.7,de;q=0.6,fi;q=0.5",
            "Cache-control": "no-cache",
            "Pragma": "no-cache",
            "Sec-ch-ua": CHROME_101_CLIENT_HINTS["sec-ch-ua"],
            "Sec-ch-ua-mobile": CHROME_101_CLIENT_HINTS["sec-ch-ua-mobile"],
            "Sec-ch-ua-platform": CHROME_101_CLIENT_HINTS["sec-ch-ua-platform"],
            "Sec-fetch-dest": "document",
            "Sec-fetch-mode": "navigate",
            "Sec-fetch-site": "none",
            "Sec-fetch-user": "?1",
            "Upgrade-insecure-requests": "1",
        }

    def _log_failure(self, error: Exception) -> None:
        # 모니터링이 이 문구와 엔진 이름으로 집계
        logger.warning(
            f"[DUCKDUCK] {ENGINE_FAILURE_NOTE} - engine={self.name}, "
            f"error={type(error).__name__}: {sanitize_for_log(str(error), 300)}"
        )

    async def _load_cached(self, query: str) -> list[SearchEngineResult]:
        if self.cache is None:
            return []
        try:
            return await self.cache.load(self.name, query)
        except CacheException as e:
            logger.warning(f"[CACHE] Cache read failed for {self.name}, treating as miss: {e}")
            return []

    async def _save_cached(self, results: list[SearchEngineResult], query: str) -> None:
        if self.cache is None:
            return
        try:
            await self.cache.save(results, self.name, query)
        except CacheException as e:
            logger.warning(f"[CACHE] Cache write failed for {self.name}: {e}")
