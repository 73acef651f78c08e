"""Search Orchestrator - Engine fallback

호출자가 지정한 엔진 목록을 검증하고, 결과가 나올 때까지 순서대로 엔진을 실행합니다.

1. validate: 엔진 목록 검증 → FallbackState
2. select_next: 아직 시도하지 않은 첫 엔진 선택 (선택 시점에 tried로 표시)
3. run: 선택된 엔진 실행, 실패는 빈 결과로 흡수
"""

from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from search_provider.core.logging import ENGINE_FAILURE_NOTE, logger, sanitize_for_log
from search_provider.core.exceptions import EngineNotSupportedException, NoUsedEngineDefinedException

from .context import ProxyPolicy
from .fallback import FallbackState, OrchestratorState
from .result import SearchEngineResult
from .strategy import FailureStrategy


class AdapterRegistry(Protocol):
    """오케스트레이터가 사용하는 레지스트리 인터페이스"""

    def available_engines(self) -> list[str]:
        ...

    def create(self, name: str):
        ...


class SearchOrchestrator:
    """엔진 폴백 오케스트레이터

    상태는 호출마다 만드는 FallbackState에만 저장되므로
    하나의 오케스트레이터를 여러 검색이 동시에 사용해도 됩니다.

    Usage:
        state = orchestrator.validate(["bing", "yahoo"])
        while (engine := orchestrator.select_next(state)) is not None:
            results = await orchestrator.run(state, query, proxy_policy)
            if results:
                break
    """

    def __init__(self, registry: AdapterRegistry):
        """
        Args:
            registry: 엔진 레지스트리 (available_engines / create)
        """
        if registry is None:
            raise ValueError("registry must not be None")
        self.registry = registry

    def validate(self, engines: Sequence[str], force_allow: Iterable[str] = ()) -> FallbackState:
        """엔진 목록 검증

        Args:
            engines: 호출자 우선순위 순서의 엔진 이름
            force_allow: 기본 목록에 없어도 허용할 엔진

        Returns:
            FallbackState: 새 폴백 상태 (중복 제거, 순서 유지)

        Raises:
            NoUsedEngineDefinedException: 엔진 목록이 비어 있는 경우
            EngineNotSupportedException: 지원되지 않고 강제 허용되지도 않은 엔진이 있는 경우
        """
        if not engines:
            raise NoUsedEngineDefinedException()

        forced = set(force_allow)
        available = self.registry.available_engines()
        candidates = tuple(dict.fromkeys(engines))

        unsupported = [
            name for name in candidates
            if name not in available and name not in forced
        ]
        if unsupported:
            raise EngineNotSupportedException(unsupported, available)

        logger.debug(f"[ORCHESTRATOR] Validated engines: {list(candidates)}")
        state = FallbackState(candidates=candidates)
        state.status = OrchestratorState.VALIDATED
        return state

    def select_next(self, state: FallbackState) -> Optional[str]:
        """아직 시도하지 않은 첫 엔진 선택

        선택 즉시 tried로 표시하므로 같은 호출에서 같은 엔진이 다시 선택되지 않습니다.

        Returns:
            엔진 이름, 남은 엔진이 없으면 None (상태: EXHAUSTED)

        Raises:
            ValueError: validate()를 거치지 않은 상태인 경우
        """
        if state.status == OrchestratorState.IDLE:
            raise ValueError("Engines were not validated, call validate() first")
        state.status = OrchestratorState.SELECTING
        remaining = state.remaining()
        if not remaining:
            state.current = None
            state.status = OrchestratorState.EXHAUSTED
            return None

        engine = remaining[0]
        state.mark_tried(engine)
        state.current = engine
        return engine

    async def run(
        self,
        state: FallbackState,
        query: str,
        proxy_policy: Optional[ProxyPolicy] = None,
    ) -> list[SearchEngineResult]:
        """선택된 엔진 실행

        엔진 오류는 로그로 남기고 빈 결과로 처리합니다. 같은 엔진을 재시도하지 않습니다.

        Raises:
            ConfigurationException: 설정 오류 (호출자에게 전달)
            ValueError: 선택된 엔진이 없는 경우
        """
        engine = state.current
        if engine is None:
            raise ValueError("No engine selected, call select_next() first")

        state.status = OrchestratorState.RUNNING
        logger.info(f"[ORCHESTRATOR] Running engine: {engine}, query='{sanitize_for_log(query)}'")

        try:
            adapter = self.registry.create(engine)
            results = list(await adapter.search(query, proxy_policy) or [])
        except Exception as e:
            if not FailureStrategy.should_try_next_engine(e):
                raise
            logger.warning(
                f"[ORCHESTRATOR] {ENGINE_FAILURE_NOTE} - exception was thrown, will try with next one. "
                f"engine={engine}, error={type(e).__name__}: {e}",
                exc_info=True,
            )
            results = []

        if results:
            state.status = OrchestratorState.DONE
        elif not state.has_next():
            state.status = OrchestratorState.EXHAUSTED
        logger.info(f"[ORCHESTRATOR] Engine {engine} returned {len(results)} results")
        return results

    def reset(self, state: FallbackState) -> None:
        """이미 시도한 엔진 초기화"""
        state.reset()
