"""DuckDuckGo (HTML 버전) 검색 엔진 설정"""

import re
from urllib.parse import unquote_plus

from search_provider.engine.extraction_plan import ExtractionPlan, ExtractionTarget
from search_provider.engine.result import SearchEngineResult

from .base import EngineDefinition, regex_no_results


DUCKDUCKGO_HTML_ENGINE_NAME = "duckduckgo_html"

REDIRECT_PREFIX = re.compile(r"^(?:https?:)?//duckduckgo\.com/l/\?uddg=")
TRACKING_SUFFIX = re.compile(r"&rut.*|%26rut.*")
AD_MARKER = "ad_provider"


def normalize_link(link: str) -> str:
    """리다이렉트 링크(`//duckduckgo.com/l/?uddg=...`)를 실제 대상 URL로 변환

    Examples:
        >>> normalize_link("//duckduckgo.com/l/?uddg=https%3A%2F%2Fexample.com%2Fa.pdf&rut=abc")
        'https://example.com/a.pdf'
    """
    normalized = REDIRECT_PREFIX.sub("", link)
    normalized = TRACKING_SUFFIX.sub("", normalized)
    return unquote_plus(normalized)


def process_results(results: list[SearchEngineResult]) -> list[SearchEngineResult]:
    """광고 결과 제거 후 링크 정규화 (원본은 변경하지 않음)"""
    return [
        result.with_link(normalize_link(result.link))
        for result in results
        if AD_MARKER not in result.link
    ]


DUCKDUCKGO_HTML = EngineDefinition(
    name=DUCKDUCKGO_HTML_ENGINE_NAME,
    base_url="https://html.duckduckgo.com/html",
    query_parameter="q",
    # kp=-1이 없으면 "No results found"가 자주 반환됨
    additional_query_parameters=(("dc", "0"), ("kp", "-1")),
    plan=ExtractionPlan(
        block=ExtractionTarget("#links .results_links > .links_deep"),
        link=ExtractionTarget.from_attribute("h2.result__title a", "href"),
        title=ExtractionTarget(".result__title"),
        description=ExtractionTarget(".result__snippet"),
    ),
    no_results_detector=regex_no_results(r"class=[\"']no-results[\"']"),
    post_processor=process_results,
    or_operator="OR",
)
