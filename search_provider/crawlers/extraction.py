"""DOM 추출 엔진 - 페이지 + ExtractionPlan → SearchEngineResult 목록.

네트워크(fetch)와 분리된 순수 파싱/검증 로직입니다.
같은 페이지와 계획에 대해 항상 같은 결과를 문서 순서대로 반환합니다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

from search_provider.core.logging import logger, sanitize_for_log
from search_provider.core.exceptions import ExtractionMismatchException
from search_provider.engine.extraction_plan import ExtractionPlan, ExtractionTarget
from search_provider.engine.result import SearchEngineResult
from search_provider.utils.url_utils import is_valid_absolute_url

from .dom import DomNode, DomQueryEngine


@dataclass(frozen=True)
class ExtractionContext:
    searched_string: str
    engine_url: str
    called_url: str = ""


def resolve_network_path(link: Optional[str], called_url: str) -> str:
    """`//host/path` 형태의 링크에 호출 URL의 스킴을 붙임

    Examples:
        >>> resolve_network_path("//duckduckgo.com/l/?uddg=x", "https://html.duckduckgo.com/html?q=a")
        'https://duckduckgo.com/l/?uddg=x'
    """
    link = (link or "").strip()
    if link.startswith("//") and called_url:
        scheme = urlparse(called_url).scheme
        if scheme:
            return f"{scheme}:{link}"
    return link


def assemble_result(
    link: str,
    title: str,
    description: Optional[str],
    context: ExtractionContext,
) -> Optional[SearchEngineResult]:
    """추출된 값으로 결과 생성. 링크가 절대 URL이 아니면 None (건너뜀).

    DOM 추출과 토큰 프로토콜 결과 파서가 공통으로 사용합니다.
    """
    link = resolve_network_path(link, context.called_url)
    if not is_valid_absolute_url(link):
        # 결과 페이지에는 깨진 조각이 흔하므로 중단하지 않고 건너뜁니다.
        logger.warning(f"[EXTRACTION] Not a valid link for search results (skipping): {sanitize_for_log(link)}")
        return None

    return SearchEngineResult(
        searched_string=context.searched_string,
        engine_url=context.engine_url,
        link=link,
        title=(title or "").strip(),
        description=description,
    )


class DomExtractionEngine:
    """ExtractionPlan 기반 결과 추출기

    Usage:
        engine = DomExtractionEngine()
        results = engine.extract(html, plan, ExtractionContext("hp printer", "www.bing.com"))
    """

    def __init__(self, dom: Optional[DomQueryEngine] = None):
        self.dom = dom or DomQueryEngine()

    def extract(
        self,
        page_content: str,
        plan: ExtractionPlan,
        context: ExtractionContext,
    ) -> list[SearchEngineResult]:
        """결과 추출

        Returns:
            list[SearchEngineResult]: 블록이 하나도 없으면 빈 리스트 (오류 아님)

        Raises:
            ExtractionMismatchException: 속성 모드 링크의 속성이 없거나 비어 있는 경우
        """
        blocks = self.dom.query(page_content or "", plan.block.selector)
        if not blocks:
            logger.debug(f"[EXTRACTION] No result blocks for selector: {plan.block.selector}")
            return []

        results: list[SearchEngineResult] = []
        for block in blocks:
            link = self._extract_link(block, plan.link)
            title = self._extract_text(block, plan.title)
            description = self._extract_description(block, plan)

            result = assemble_result(link, title, description, context)
            if result is not None:
                results.append(result)

        logger.debug(f"[EXTRACTION] blocks={len(blocks)}, results={len(results)}")
        return results

    def _extract_link(self, block: DomNode, target: ExtractionTarget) -> str:
        nodes = self.dom.query(block, target.selector)

        if not target.reads_attribute:
            return nodes[0].text() if nodes else ""

        value = nodes[0].attribute(target.attribute) if nodes else None
        if not value:
            # 데이터 부재가 아니라 셀렉터/설정 불일치 신호
            raise ExtractionMismatchException(
                target,
                "attribute missing or empty" if nodes else "no node matched the link selector",
            )
        return value

    def _extract_text(self, block: DomNode, target: ExtractionTarget) -> str:
        nodes = self.dom.query(block, target.selector)
        if not nodes:
            return ""
        if target.reads_attribute:
            return nodes[0].attribute(target.attribute) or ""
        return nodes[0].text()

    def _extract_description(self, block: DomNode, plan: ExtractionPlan) -> str:
        # 설명이 없는 결과도 있으므로 없으면 빈 문자열
        for target in (plan.description, *plan.description_alternates):
            description = self._extract_text(block, target)
            if description:
                return description
        return ""
