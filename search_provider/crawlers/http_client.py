"""공유 HTTP 클라이언트 (curl_cffi)

- 엔진 호출마다 AsyncSession을 만들면 TLS/커넥션 오버헤드가 커지므로
  프로세스 단위로 세션을 재사용합니다.
- User-Agent / 헤더 / 프록시는 요청마다 전달합니다 (세션 기본 헤더 없음).
- 앱 종료 시 close()로 정리합니다.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Mapping, Optional

from curl_cffi.requests import AsyncSession

from search_provider.core.config import settings
from search_provider.core.logging import logger, mask_credentials, sanitize_for_log
from search_provider.core.exceptions import FetchException
from search_provider.engine.context import ProxyPolicy


ProxyResolver = Callable[[ProxyPolicy], Optional[str]]


def default_proxy_resolver(policy: ProxyPolicy) -> Optional[str]:
    """정책이 활성화된 경우 설정된 프록시 게이트웨이 URL 반환"""
    if not policy or not policy.enabled:
        return None
    if not settings.proxy_url:
        logger.warning(
            f"[HTTP_CLIENT] Proxy requested (usage={policy.usage}, country={policy.country_code}) "
            f"but PROXY_URL is not configured, calling directly"
        )
        return None
    return settings.proxy_url


class SharedHttpClient:
    def __init__(self, proxy_resolver: ProxyResolver = default_proxy_resolver) -> None:
        self._lock = asyncio.Lock()
        self._session: Optional[AsyncSession] = None
        self._proxy_resolver = proxy_resolver

    async def _ensure_session(self) -> AsyncSession:
        async with self._lock:
            if self._session is not None:
                return self._session
            self._session = AsyncSession(
                impersonate=settings.crawler_http_impersonate,
                allow_redirects=True,
                max_clients=settings.crawler_http_max_clients,
                trust_env=False,
            )
            return self._session

    async def get_text(
        self,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        proxy_policy: Optional[ProxyPolicy] = None,
        timeout_s: Optional[float] = None,
    ) -> tuple[int, str]:
        """GET 요청 후 (status, body) 반환

        Raises:
            FetchException: 네트워크 오류 / 타임아웃
        """
        sess = await self._ensure_session()
        proxy = self._proxy_resolver(proxy_policy) if proxy_policy else None
        if proxy:
            logger.debug(f"[HTTP_CLIENT] Using proxy {mask_credentials(proxy)}")
        timeout = timeout_s if timeout_s is not None else settings.crawler_http_request_timeout_ms / 1000.0
        try:
            resp = await sess.get(
                url,
                headers=dict(headers or {}),
                timeout=timeout,
                allow_redirects=True,
                proxy=proxy,
            )
        except Exception as e:
            logger.info(f"[HTTP_CLIENT] GET failed: {type(e).__name__}: {repr(e)}")
            raise FetchException(url, f"{type(e).__name__}: {e}") from e

        status = getattr(resp, "status_code", 0) or 0
        text = getattr(resp, "text", "") or ""
        logger.info(f"[HTTP_CLIENT] GET {sanitize_for_log(url, 120)} -> {status} (len={len(text)})")
        return status, text

    async def close(self) -> None:
        async with self._lock:
            if self._session is None:
                return
            try:
                await self._session.close()
            except Exception as e:
                logger.debug(f"[HTTP_CLIENT] Session close failed: {type(e).__name__}: {e}")
            self._session = None


_shared_http_client = SharedHttpClient()


def get_shared_http_client() -> SharedHttpClient:
    return _shared_http_client


async def shutdown_shared_http_client() -> None:
    await _shared_http_client.close()
