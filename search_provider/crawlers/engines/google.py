"""Google 검색 엔진 설정

차단 위험 때문에 기본 엔진 목록에서 제외되며, 강제 허용(force_allow)된 경우에만 사용합니다.
"""

from search_provider.engine.extraction_plan import ExtractionPlan, ExtractionTarget

from .base import EngineDefinition, text_no_results
from .yahoo import NO_RESULTS_MARKER


GOOGLE_ENGINE_NAME = "google"

GOOGLE = EngineDefinition(
    name=GOOGLE_ENGINE_NAME,
    base_url="https://www.google.com/search",
    query_parameter="q",
    plan=ExtractionPlan(
        block=ExtractionTarget("#search div[data-hveid][data-ved] > div[data-snc]"),
        link=ExtractionTarget.from_attribute("div a", "href"),
        title=ExtractionTarget("div a > h3"),
        description=ExtractionTarget('div:nth-of-type(2)[data-sncf="1"]'),
        # 결과 유형에 따라 설명 위치가 다름
        description_alternates=(
            ExtractionTarget("div:nth-of-type(3)[data-snf]"),
            ExtractionTarget('div:nth-of-type(2)[data-sncf="0,1,2,3"] + div[data-sncf="2"]'),
        ),
    ),
    no_results_detector=text_no_results(NO_RESULTS_MARKER),
    or_operator="OR",
    locale_sensitive=True,
)
