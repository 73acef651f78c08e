"""Engine Result Cache - (engine, query, locale) → ordered result list

KeyValueStore 위에서 캐시 키 생성과 직렬화를 담당합니다.
필터링 전 원본 결과를 저장하므로 다른 필터 설정에서도 재사용할 수 있습니다.
"""

from __future__ import annotations

import json
from typing import Optional, Sequence

from pydantic import ValidationError

from search_provider.core.logging import logger
from search_provider.core.exceptions import CacheSerializationException
from search_provider.schemas.search_schema import CachedSearchResult
from search_provider.services.cache_service import KeyValueStore
from search_provider.utils.hash_utils import canonicalize_query, hash_string

from .result import SearchEngineResult


CACHE_KEY_PREFIX = "engine_results"


class EngineResultCache:
    """엔진 결과 캐시

    Usage:
        cache = EngineResultCache(RedisKeyValueStore())
        await cache.save(results, "bing", "hp printer manual")
        cached = await cache.load("bing", "hp printer manual")
    """

    def __init__(self, store: KeyValueStore):
        """
        Args:
            store: get/set/delete를 제공하는 저장소

        Raises:
            ValueError: store가 None인 경우
        """
        if store is None:
            raise ValueError("store must not be None")
        self.store = store

    @staticmethod
    def build_key(engine: str, query: str, locale: Optional[str] = None) -> str:
        """캐시 키 생성

        같은 (engine, query, locale)은 항상 같은 키를 갖습니다.
        검색어의 공백은 정규화되어 서식 차이로 캐시가 쪼개지지 않습니다.

        Args:
            engine: 엔진 식별자
            query: 검색어
            locale: 국가/언어 코드 (엔진이 지역 의존적일 때만)

        Returns:
            str: 캐시 키
        """
        canonical = canonicalize_query(query)
        digest = hash_string(f"{canonical}|{locale or ''}")
        return f"{CACHE_KEY_PREFIX}:{engine}:{digest}"

    async def load(self, engine: str, query: str, locale: Optional[str] = None) -> list[SearchEngineResult]:
        """캐시된 결과 조회

        Returns:
            list[SearchEngineResult]: 저장된 결과, 미스 시 빈 리스트

        Raises:
            CacheSerializationException: 저장된 값을 해석할 수 없는 경우 (해당 키는 삭제됨)
        """
        key = self.build_key(engine, query, locale)
        raw = self.store.get(key)
        if not raw:
            return []

        if isinstance(raw, bytes):
            raw = raw.decode("utf-8", errors="replace")

        try:
            records = json.loads(raw)
            if not isinstance(records, list):
                raise ValueError(f"expected a list, got {type(records).__name__}")
            validated = [CachedSearchResult.model_validate(record) for record in records]
        except (json.JSONDecodeError, ValueError, ValidationError) as e:
            # 손상된 값은 계속 미스를 유발하지 않도록 제거
            self.store.delete(key)
            raise CacheSerializationException(
                "deserialize",
                f"Could not decode search results from cache: {e}",
                details={"key": key},
            ) from e

        return [SearchEngineResult.from_dict(item.model_dump()) for item in validated]

    async def save(
        self,
        results: Sequence[SearchEngineResult],
        engine: str,
        query: str,
        locale: Optional[str] = None,
    ) -> None:
        """결과 저장 (빈 결과는 저장하지 않음)

        Raises:
            CacheSerializationException: 직렬화 실패
        """
        if not results:
            logger.debug(f"[CACHE] Skipping empty result set: engine={engine}")
            return

        key = self.build_key(engine, query, locale)
        try:
            payload = json.dumps([r.to_dict() for r in results], ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise CacheSerializationException("serialize", str(e), details={"key": key}) from e

        self.store.set(key, payload)

    async def delete(self, engine: str, query: str, locale: Optional[str] = None) -> None:
        self.store.delete(self.build_key(engine, query, locale))
