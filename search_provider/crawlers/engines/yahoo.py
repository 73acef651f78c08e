"""Yahoo 검색 엔진 설정"""

from search_provider.engine.extraction_plan import ExtractionPlan, ExtractionTarget

from .base import EngineDefinition, text_no_results


YAHOO_ENGINE_NAME = "yahoo"

NO_RESULTS_MARKER = "We did not find results for"

YAHOO = EngineDefinition(
    name=YAHOO_ENGINE_NAME,
    base_url="https://search.yahoo.com/search",
    query_parameter="p",
    plan=ExtractionPlan(
        block=ExtractionTarget("ol.searchCenterMiddle > li .algo"),
        link=ExtractionTarget.from_attribute("h3.title a", "href"),
        title=ExtractionTarget("h3.title a"),
        description=ExtractionTarget("div.compText p"),
    ),
    no_results_detector=text_no_results(NO_RESULTS_MARKER),
    or_operator="OR",
)
