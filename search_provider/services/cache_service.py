"""Redis 키-값 저장소 - 저장/조회/삭제만 담당"""
from typing import Optional, Protocol, Union

from redis import Redis

from search_provider.core.config import settings
from search_provider.core.logging import logger
from search_provider.core.exceptions import CacheConnectionException


class KeyValueStore(Protocol):
    """엔진 결과 캐시가 사용하는 저장소 인터페이스

    TTL 의미는 이 계층에서 가정하지 않습니다 (eviction은 저장소의 관심사).
    """

    def get(self, key: str) -> Optional[Union[str, bytes]]:
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class RedisKeyValueStore:
    """Redis 기반 KeyValueStore"""

    def __init__(self, redis_url: Optional[str] = None, ttl_seconds: Optional[int] = None):
        """Redis 클라이언트 초기화

        Args:
            redis_url: 접속 URL (기본값: settings.redis_url)
            ttl_seconds: 0 또는 None이면 만료 없이 저장

        Raises:
            CacheConnectionException: 연결 실패
        """
        self.ttl_seconds = settings.engine_cache_ttl if ttl_seconds is None else ttl_seconds
        try:
            self.redis_client = Redis.from_url(
                redis_url or settings.redis_url,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5
            )
            # 연결 테스트
            self.redis_client.ping()
            logger.info("[CACHE] Redis connection established")
        except Exception as e:
            logger.error(f"[CACHE] Failed to connect to Redis: {e}")
            raise CacheConnectionException(reason=str(e)) from e

    def get(self, key: str) -> Optional[str]:
        """
        값 조회

        Args:
            key: 캐시 키

        Returns:
            저장된 문자열 또는 None

        Raises:
            CacheConnectionException: 읽기 실패
        """
        try:
            value = self.redis_client.get(key)
        except Exception as e:
            logger.error(f"[CACHE] Cache read error: {e}")
            raise CacheConnectionException(reason=f"read failed: {e}", details={"key": key}) from e

        logger.debug(f"[CACHE] {'hit' if value else 'miss'} for key: {key}")
        return value

    def set(self, key: str, value: str) -> None:
        """
        값 저장 (ttl_seconds > 0이면 setex)

        Raises:
            CacheConnectionException: 쓰기 실패
        """
        try:
            if self.ttl_seconds and self.ttl_seconds > 0:
                self.redis_client.setex(key, self.ttl_seconds, value)
            else:
                self.redis_client.set(key, value)
            logger.info(f"[CACHE] Cache set for key: {key}, TTL: {self.ttl_seconds or 'none'}")
        except Exception as e:
            logger.error(f"[CACHE] Cache write error: {e}")
            raise CacheConnectionException(reason=f"write failed: {e}", details={"key": key}) from e

    def delete(self, key: str) -> None:
        """값 삭제 (실패는 로깅만)"""
        try:
            self.redis_client.delete(key)
            logger.info(f"[CACHE] Cache deleted for key: {key}")
        except Exception as e:
            logger.error(f"[CACHE] Cache delete error: {e}")

    def health_check(self) -> bool:
        """Redis 연결 상태 확인"""
        try:
            self.redis_client.ping()
            return True
        except Exception:
            return False
