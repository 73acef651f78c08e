"""Bing 검색 엔진 설정"""

from search_provider.engine.extraction_plan import ExtractionPlan, ExtractionTarget

from ..user_agents import CHROME_101
from .base import EngineDefinition, regex_no_results


BING_ENGINE_NAME = "bing"

# sec-ch-ua 값은 CHROME_101 User-Agent와 반드시 일치해야 합니다.
BING_HEADERS = {
    "cookie": (
        "MUIDB=26276020566B621D079871B157C16326; SRCHHPGUSR=SRCHLANG=de; SRCHUSR=DOB=20220425; "
        "SRCHUID=V=2&GUID=4C1D140C2BFF4B0484988B229AC1FD6E&dmnchg=1; _EDGE_V=1; "
        "_EDGE_S=F=1&SID=062C1E644EAB67DD00BA0FF54F016606; SRCHD=AF=NOFORM; "
        "MUID=26276020566B621D079871B157C16326; SUID=M; _SS=SID=062C1E644EAB67DD00BA0FF54F016606"
    ),
    "accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,"
        "image/apng,*/*;q=0.8,application/signed-exchange;v=b3;q=0.9"
    ),
    "cache-control": "no-cache",
    "sec-ch-ua": '" Not A;Brand";v="99", "Chromium";v="101", "Google Chrome";v="101"',
    "referer": "https://www.bing.com/",
    "sec-ch-ua-arch": "x86",
    "sec-ch-ua-bitness": "64",
    "sec-ch-ua-full-version": "101.0.4951.64",
    "sec-ch-ua-mobile": "?0",
    "sec-ch-ua-model": "",
    "sec-ch-ua-platform": '"Linux"',
    "sec-ch-ua-platform-version": '"5.13.0"',
    "sec-fetch-dest": "document",
    "sec-fetch-mode": "navigate",
    "sec-fetch-site": "same-origin",
    "sec-fetch-user": "?1",
    "upgrade-insecure-requests": "1",
}

BING_PLAN = ExtractionPlan(
    block=ExtractionTarget("ol#b_results li.b_algo"),
    link=ExtractionTarget.from_attribute("h2 a", "href"),
    title=ExtractionTarget("h2, h2 > a"),
    description=ExtractionTarget(
        """
        .b_caption p,
        .b_imgcap_altitle p,
        .tab-content > div[data-priority=""],
        .b_caption .b_richcard .b_mText .b_divsec span,
        .b_snippetBigText
        """
    ),
)

BING = EngineDefinition(
    name=BING_ENGINE_NAME,
    base_url="https://www.bing.com/search",
    query_parameter="q",
    additional_query_parameters=(("count", "8"),),
    headers=BING_HEADERS,
    user_agents=(CHROME_101,),
    plan=BING_PLAN,
    no_results_detector=regex_no_results(r"class=[\"']b_no[\"']"),
    or_operator="OR",
)
