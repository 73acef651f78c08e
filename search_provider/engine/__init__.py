"""Engine Layer - Orchestration, result model and cache

- SearchOrchestrator: 엔진 검증/선택/실행 (폴백)
- FallbackState: 호출 단위 폴백 상태
- FailureStrategy: 오류 분류
- EngineResultCache: (engine, query, locale) 결과 캐시
- ExtractionPlan / ExtractionTarget: DOM 추출 설정
- SearchEngineResult: 표준 결과 포맷
"""

from .cache_adapter import EngineResultCache
from .context import AdapterRequestContext, ProxyPolicy, merge_headers
from .extraction_plan import ExtractionPlan, ExtractionTarget
from .fallback import FallbackState, OrchestratorState
from .orchestrator import SearchOrchestrator
from .result import EngineCrawlResult, SearchEngineResult
from .strategy import FailureStrategy

__all__ = [
    "SearchOrchestrator",
    "FallbackState",
    "OrchestratorState",
    "FailureStrategy",
    "EngineResultCache",
    "ExtractionPlan",
    "ExtractionTarget",
    "SearchEngineResult",
    "EngineCrawlResult",
    "ProxyPolicy",
    "AdapterRequestContext",
    "merge_headers",
]
