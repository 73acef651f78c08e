"""Page Fetcher - Interface and HTTP implementation

URL + 헤더 + User-Agent + 프록시 정책을 받아 원본 페이지 내용을 반환하거나 실패합니다.
HTML 페이지와 스크립트(JS) 응답 모두를 지원해야 합니다.
"""

from __future__ import annotations

from typing import Mapping, Optional, Protocol

from search_provider.core.logging import logger, sanitize_for_log
from search_provider.core.exceptions import FetchException
from search_provider.engine.context import ProxyPolicy

from .http_client import SharedHttpClient, get_shared_http_client


class PageFetcher(Protocol):
    """페이지 fetcher 프로토콜

    구현 예시:
        class StaticFetcher:
            async def fetch(self, url, headers, user_agent, proxy_policy) -> str:
                return "<html>...</html>"
    """

    async def fetch(
        self,
        url: str,
        headers: Mapping[str, str],
        user_agent: str,
        proxy_policy: ProxyPolicy,
    ) -> str:
        """페이지 내용 반환

        Raises:
            FetchException: 네트워크 오류, 타임아웃, 2xx 이외의 응답
        """
        ...


class HttpPageFetcher:
    """curl_cffi 공유 세션 기반 fetcher

    Args:
        client: 공유 HTTP 클라이언트 (없으면 프로세스 공유 인스턴스)
        expect_html: True면 HTML이 아닌 응답을 실패로 처리 (DOM 추출용),
            False면 본문을 그대로 반환 (JS 등 raw 응답용)
    """

    def __init__(self, client: Optional[SharedHttpClient] = None, expect_html: bool = True):
        self.client = client or get_shared_http_client()
        self.expect_html = expect_html

    async def fetch(
        self,
        url: str,
        headers: Mapping[str, str],
        user_agent: str,
        proxy_policy: ProxyPolicy,
    ) -> str:
        request_headers = dict(headers)
        if not any(k.lower() == "user-agent" for k in request_headers):
            request_headers["User-Agent"] = user_agent

        status, body = await self.client.get_text(
            url,
            headers=request_headers,
            proxy_policy=proxy_policy,
        )

        if not 200 <= status < 300:
            logger.info(f"[HTTP_CLIENT] Non-2xx status {status} for {sanitize_for_log(url, 120)}")
            raise FetchException(url, f"unexpected status code {status}", status_code=status)

        if not body:
            raise FetchException(url, "empty response body", status_code=status)

        if self.expect_html and "<" not in body:
            raise FetchException(url, "response is not an HTML document", status_code=status)

        return body
