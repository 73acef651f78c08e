"""Search Engine Result - Standardized Result Format

모든 엔진(DOM 추출 / 토큰 프로토콜)이 반환하는 통일된 결과 형식입니다.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Optional

from search_provider.core.exceptions import CacheSerializationException


@dataclass(frozen=True)
class SearchEngineResult:
    """검색 결과 표준 포맷

    Attributes:
        searched_string: 검색어
        engine_url: 결과를 제공한 엔진의 공개 host
        link: 결과 링크 (절대 URL)
        title: 제목 (빈 문자열 허용)
        description: 설명 (선택)
    """

    searched_string: str
    engine_url: str
    link: str
    title: str
    description: Optional[str] = None

    def with_link(self, link: str) -> "SearchEngineResult":
        """링크만 바꾼 복사본 반환 (후처리에서 원본을 변경하지 않음)"""
        return replace(self, link=link)

    def to_dict(self) -> dict[str, Optional[str]]:
        """평면 텍스트 레코드로 변환 (캐시 저장용)"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SearchEngineResult":
        """평면 레코드에서 생성

        Raises:
            CacheSerializationException: 알 수 없는 키가 포함된 경우
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise CacheSerializationException(
                "deserialize", f"Object: {cls.__name__} has no key named: {sorted(unknown)}"
            )
        return cls(
            searched_string=data.get("searched_string") or "",
            engine_url=data.get("engine_url") or "",
            link=data.get("link") or "",
            title=data.get("title") or "",
            description=data.get("description"),
        )


@dataclass
class EngineCrawlResult:
    """한 번의 시도(User-Agent 1개) 결과

    Attributes:
        results: 추출된 결과 목록
        page_content: 결과를 얻은 원본 페이지 (진단 아티팩트용)
        error: 페이지는 받았지만 추출 설정이 맞지 않은 경우의 오류
    """

    results: list[SearchEngineResult]
    page_content: str = ""
    error: Optional[Exception] = None

    @property
    def failed(self) -> bool:
        return self.error is not None or not self.results
