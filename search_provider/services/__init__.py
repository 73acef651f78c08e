"""비즈니스 로직 서비스 - export only.

SearchService / BrightDataSearchService는 각 모듈에서 직접 import합니다.
"""

from .cache_service import KeyValueStore, RedisKeyValueStore
from .result_filter_service import FilterOutcome, SearchEngineResultFilterService

__all__ = ["KeyValueStore", "RedisKeyValueStore", "FilterOutcome", "SearchEngineResultFilterService"]
