"""검색 결과 후처리 필터 - 확장자 기반 제외"""
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from search_provider.core.logging import logger
from search_provider.engine.result import SearchEngineResult
from search_provider.utils.url_utils import get_link_extension


@dataclass
class FilterOutcome:
    results: list[SearchEngineResult] = field(default_factory=list)
    removed_count: int = 0


class SearchEngineResultFilterService:
    """결과 필터 (순수 함수, 입력 목록을 변경하지 않음)"""

    def filter(
        self,
        results: Sequence[SearchEngineResult],
        excluded_extensions: Iterable[str] = (),
    ) -> FilterOutcome:
        """제외 확장자에 해당하는 결과 제거

        Args:
            results: 엔진 결과
            excluded_extensions: 제외할 확장자 (대소문자 무시, 점 유무 무관)

        Returns:
            FilterOutcome: 남은 결과와 제거된 개수
        """
        excluded = {ext.lower().lstrip(".") for ext in excluded_extensions if ext}
        if not excluded:
            return FilterOutcome(results=list(results))

        kept = [r for r in results if get_link_extension(r.link) not in excluded]
        removed_count = len(results) - len(kept)

        if removed_count:
            logger.info(
                f"[FILTER] Some search engine results were filtered out due to extension filter: "
                f"original={len(results)}, after_filtering={len(kept)}"
            )

        return FilterOutcome(results=kept, removed_count=removed_count)
