"""Engine Registry - 엔진 이름 → 어댑터 팩토리

기본 엔진 목록(available)과 강제 허용 시에만 쓰는 엔진(known)을 구분합니다.
"""

from __future__ import annotations

from typing import Callable, Optional

from search_provider.core.logging import logger
from search_provider.core.exceptions import EngineNotSupportedException
from search_provider.engine.cache_adapter import EngineResultCache

from ..diagnostics import DiagnosticArtifactSink
from ..extraction import DomExtractionEngine
from ..fetcher import HttpPageFetcher, PageFetcher
from .base import DomEngineAdapter, EngineDefinition, SearchEngineAdapter
from .bing import BING
from .duckduckgo import DUCKDUCKGO_ENGINE_NAME, DuckDuckEngineAdapter
from .duckduckgo_html import DUCKDUCKGO_HTML
from .google import GOOGLE
from .yahoo import YAHOO


AdapterFactory = Callable[[], SearchEngineAdapter]


class EngineRegistry:
    """엔진 레지스트리

    Usage:
        registry = EngineRegistry(cache=EngineResultCache(RedisKeyValueStore()))
        registry.available_engines()  # ['bing', 'duckduckgo_html', 'yahoo', 'duckduckgo']
        adapter = registry.create("bing")
    """

    def __init__(
        self,
        fetcher: Optional[PageFetcher] = None,
        raw_fetcher: Optional[PageFetcher] = None,
        cache: Optional[EngineResultCache] = None,
        diagnostics: Optional[DiagnosticArtifactSink] = None,
        sleep_time_s: Optional[float] = None,
        min_expected_results: Optional[int] = None,
        register_defaults: bool = True,
    ):
        """
        Args:
            fetcher: HTML 페이지용 fetcher (모든 어댑터가 공유)
            raw_fetcher: 스크립트 응답용 fetcher (토큰 프로토콜 어댑터)
            cache: 결과 캐시 (모든 어댑터가 공유)
            sleep_time_s: 엔진 호출 간격 (기본값: ENGINE_SLEEP_TIME_MS)
            register_defaults: 기본 엔진 등록 여부
        """
        self.fetcher = fetcher or HttpPageFetcher()
        self.raw_fetcher = raw_fetcher or HttpPageFetcher(expect_html=False)
        self.cache = cache
        self.diagnostics = diagnostics or DiagnosticArtifactSink()
        self.extraction_engine = DomExtractionEngine()
        self.sleep_time_s = sleep_time_s
        self.min_expected_results = min_expected_results

        self._factories: dict[str, AdapterFactory] = {}
        self._available: list[str] = []
        self._adapters: dict[str, SearchEngineAdapter] = {}

        if register_defaults:
            self._register_defaults()

    def _register_defaults(self) -> None:
        self.register_definition(BING)
        self.register_definition(DUCKDUCKGO_HTML)
        self.register_definition(YAHOO)
        self.register(DUCKDUCKGO_ENGINE_NAME, self._create_duckduck_adapter)
        # 차단 위험 - 강제 허용 시에만 사용
        self.register_definition(GOOGLE, available=False)

    @staticmethod
    def validate_definition(definition: EngineDefinition) -> None:
        """등록 시점 설정 검증

        Raises:
            ConfigurationException: 설정이 잘못된 경우
        """
        definition.validate()

    def register(self, name: str, factory: AdapterFactory, available: bool = True) -> None:
        """어댑터 팩토리 등록 (같은 이름은 덮어씀)"""
        self._factories[name] = factory
        self._adapters.pop(name, None)
        if available and name not in self._available:
            self._available.append(name)
        elif not available and name in self._available:
            self._available.remove(name)
        logger.debug(f"[ENGINE] Registered engine: {name} (available={available})")

    def register_definition(self, definition: EngineDefinition, available: bool = True) -> None:
        self.validate_definition(definition)
        self.register(definition.name, lambda: self._create_dom_adapter(definition), available)

    def available_engines(self) -> list[str]:
        """기본적으로 사용 가능한 엔진 (등록 순서)"""
        return list(self._available)

    def known_engines(self) -> list[str]:
        """강제 허용 대상까지 포함한 모든 엔진"""
        return list(self._factories)

    def create(self, name: str) -> SearchEngineAdapter:
        """어댑터 반환 (이름별로 한 번만 생성)

        Raises:
            EngineNotSupportedException: 등록되지 않은 엔진
        """
        if name not in self._factories:
            raise EngineNotSupportedException([name], self.known_engines())
        if name not in self._adapters:
            self._adapters[name] = self._factories[name]()
        return self._adapters[name]

    def get_or_operator(self, name: str) -> Optional[str]:
        return getattr(self.create(name), "or_operator", None)

    def _create_dom_adapter(self, definition: EngineDefinition) -> DomEngineAdapter:
        return DomEngineAdapter(
            definition,
            fetcher=self.fetcher,
            cache=self.cache,
            extraction_engine=self.extraction_engine,
            diagnostics=self.diagnostics,
            sleep_time_s=self.sleep_time_s,
            min_expected_results=self.min_expected_results,
        )

    def _create_duckduck_adapter(self) -> DuckDuckEngineAdapter:
        return DuckDuckEngineAdapter(
            fetcher=self.fetcher,
            raw_fetcher=self.raw_fetcher,
            cache=self.cache,
            sleep_time_s=self.sleep_time_s,
            min_expected_results=self.min_expected_results,
        )
