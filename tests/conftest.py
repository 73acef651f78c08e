"""전역 테스트 설정

역할:
- 테스트 환경 구성
- 공통 Dummy/Fake 주입 (메모리 저장소, 페이지 fetcher)
- 결과 페이지 HTML 생성 헬퍼

금지:
- 실제 네트워크 호출
- 실제 Redis 연결
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, Union

import pytest


# 프로젝트 루트를 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture(scope="session", autouse=True)
def test_env() -> None:
    """테스트 환경 변수 설정 (세션 전역)"""
    os.environ["ENVIRONMENT"] = "test"
    os.environ["LOG_LEVEL"] = "INFO"


@dataclass
class DummyStore:
    """메모리 KeyValueStore

    - get/set/delete 호출 횟수 기록
    """

    data: dict[str, Any] = field(default_factory=dict)
    get_calls: int = 0
    set_calls: int = 0
    delete_calls: int = 0

    def get(self, key: str) -> Optional[Any]:
        self.get_calls += 1
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.set_calls += 1
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.delete_calls += 1
        self.data.pop(key, None)


@dataclass
class FetchCall:
    url: str
    headers: dict[str, str]
    user_agent: str
    proxy_policy: Any


class FakeFetcher:
    """순서대로 응답을 돌려주는 fetcher

    응답이 Exception 인스턴스면 raise합니다. 응답이 다 떨어지면 마지막 응답을 반복합니다.
    """

    def __init__(self, responses: Sequence[Union[str, Exception]]):
        self.responses = list(responses)
        self.calls: list[FetchCall] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def fetch(self, url: str, headers: Mapping[str, str], user_agent: str, proxy_policy: Any) -> str:
        self.calls.append(FetchCall(url, dict(headers), user_agent, proxy_policy))
        index = min(len(self.calls) - 1, len(self.responses) - 1)
        response = self.responses[index]
        if isinstance(response, Exception):
            raise response
        return response


def build_result_block(link: Optional[str], title: str = "", description: str = "") -> str:
    """Bing 형식의 결과 블록 하나"""
    link_html = f'<h2><a href="{link}">{title}</a></h2>' if link is not None else f"<h2>{title}</h2>"
    description_html = f'<div class="b_caption"><p>{description}</p></div>' if description else ""
    return f'<li class="b_algo">{link_html}{description_html}</li>'


def build_results_page(*blocks: str) -> str:
    """Bing 형식의 결과 페이지"""
    return f'<html><body><ol id="b_results">{"".join(blocks)}</ol></body></html>'


@pytest.fixture
def dummy_store() -> DummyStore:
    return DummyStore()


@pytest.fixture
def engine_cache(dummy_store):
    from search_provider.engine.cache_adapter import EngineResultCache

    return EngineResultCache(dummy_store)


@pytest.fixture
def diagnostics(tmp_path):
    from search_provider.crawlers.diagnostics import DiagnosticArtifactSink

    return DiagnosticArtifactSink(tmp_path / "engine_results")


@pytest.fixture
def make_block():
    return build_result_block


@pytest.fixture
def make_page():
    return build_results_page


@pytest.fixture
def make_fetcher():
    """FakeFetcher 생성 함수"""
    return FakeFetcher


@pytest.fixture(autouse=True)
def isolated_result_directory(tmp_path, monkeypatch):
    """진단 아티팩트가 작업 디렉터리에 쌓이지 않도록 임시 디렉터리 사용"""
    from search_provider.core.config import settings

    monkeypatch.setattr(settings, "engine_result_directory", str(tmp_path / "default_engine_results"))
