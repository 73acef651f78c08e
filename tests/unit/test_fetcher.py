"""HTTP fetcher / 공유 클라이언트 테스트 (curl_cffi 세션 모의)"""
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from search_provider.core.exceptions import FetchException
from search_provider.crawlers.fetcher import HttpPageFetcher
from search_provider.crawlers.http_client import SharedHttpClient, default_proxy_resolver
from search_provider.engine.context import ProxyPolicy


def _client(status: int = 200, body: str = "<html></html>") -> MagicMock:
    client = MagicMock()
    client.get_text = AsyncMock(return_value=(status, body))
    return client


class TestHttpPageFetcher:
    @pytest.mark.asyncio
    async def test_returns_body(self):
        client = _client(body="<html>ok</html>")

        body = await HttpPageFetcher(client).fetch("https://a.com", {"Host": "a.com"}, "agent", ProxyPolicy())

        assert body == "<html>ok</html>"
        headers = client.get_text.await_args.kwargs["headers"]
        assert headers == {"Host": "a.com", "User-Agent": "agent"}

    @pytest.mark.asyncio
    async def test_user_agent_header_kept(self):
        client = _client()

        await HttpPageFetcher(client).fetch("https://a.com", {"user-agent": "custom"}, "agent", ProxyPolicy())

        assert client.get_text.await_args.kwargs["headers"] == {"user-agent": "custom"}

    @pytest.mark.asyncio
    async def test_non_2xx(self):
        with pytest.raises(FetchException) as exc_info:
            await HttpPageFetcher(_client(status=429)).fetch("https://a.com", {}, "agent", ProxyPolicy())

        assert exc_info.value.status_code == 429

    @pytest.mark.asyncio
    async def test_empty_body(self):
        with pytest.raises(FetchException):
            await HttpPageFetcher(_client(body="")).fetch("https://a.com", {}, "agent", ProxyPolicy())

    @pytest.mark.asyncio
    async def test_non_html_rejected_in_html_mode(self):
        with pytest.raises(FetchException):
            await HttpPageFetcher(_client(body="DDG.load('d',[])")).fetch("https://a.com", {}, "agent", ProxyPolicy())

    @pytest.mark.asyncio
    async def test_raw_mode_returns_script(self):
        fetcher = HttpPageFetcher(_client(body="DDG.load('d',[])"), expect_html=False)

        assert await fetcher.fetch("https://a.com", {}, "agent", ProxyPolicy()) == "DDG.load('d',[])"


class TestSharedHttpClient:
    @pytest.mark.asyncio
    @patch("search_provider.crawlers.http_client.AsyncSession")
    async def test_get_text_with_proxy(self, mock_session_cls):
        session = MagicMock()
        session.get = AsyncMock(return_value=MagicMock(status_code=200, text="<html></html>"))
        mock_session_cls.return_value = session
        client = SharedHttpClient(proxy_resolver=lambda policy: "http://proxy:8080" if policy.enabled else None)

        status, text = await client.get_text(
            "https://a.com", headers={"Host": "a.com"}, proxy_policy=ProxyPolicy(enabled=True)
        )

        assert (status, text) == (200, "<html></html>")
        assert session.get.await_args.kwargs["proxy"] == "http://proxy:8080"
        assert session.get.await_args.kwargs["headers"] == {"Host": "a.com"}

    @pytest.mark.asyncio
    @patch("search_provider.crawlers.http_client.AsyncSession")
    async def test_session_reused(self, mock_session_cls):
        session = MagicMock()
        session.get = AsyncMock(return_value=MagicMock(status_code=200, text="x"))
        mock_session_cls.return_value = session
        client = SharedHttpClient()

        await client.get_text("https://a.com")
        await client.get_text("https://b.com")

        assert mock_session_cls.call_count == 1

    @pytest.mark.asyncio
    @patch("search_provider.crawlers.http_client.AsyncSession")
    async def test_network_error_wrapped(self, mock_session_cls):
        session = MagicMock()
        session.get = AsyncMock(side_effect=ConnectionError("reset"))
        mock_session_cls.return_value = session

        with pytest.raises(FetchException):
            await SharedHttpClient().get_text("https://a.com")

    @pytest.mark.asyncio
    @patch("search_provider.crawlers.http_client.AsyncSession")
    async def test_close(self, mock_session_cls):
        session = MagicMock()
        session.get = AsyncMock(return_value=MagicMock(status_code=200, text="x"))
        session.close = AsyncMock()
        mock_session_cls.return_value = session
        client = SharedHttpClient()
        await client.get_text("https://a.com")

        await client.close()

        session.close.assert_awaited_once()


class TestDefaultProxyResolver:
    def test_disabled_policy(self):
        assert default_proxy_resolver(ProxyPolicy()) is None

    def test_enabled_policy_uses_settings(self, monkeypatch):
        from search_provider.core.config import settings

        monkeypatch.setattr(settings, "proxy_url", "http://gateway:22225")

        assert default_proxy_resolver(ProxyPolicy(enabled=True, usage="serp")) == "http://gateway:22225"

    def test_enabled_without_url(self, monkeypatch):
        from search_provider.core.config import settings

        monkeypatch.setattr(settings, "proxy_url", "")

        assert default_proxy_resolver(ProxyPolicy(enabled=True)) is None
