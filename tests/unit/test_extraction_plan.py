"""ExtractionTarget / ExtractionPlan 검증 테스트"""
import pytest

from search_provider.core.exceptions import ConfigurationException, InvalidExtractionTargetException
from search_provider.engine.extraction_plan import ExtractionPlan, ExtractionTarget


def _plan(**overrides) -> ExtractionPlan:
    params = dict(
        block=ExtractionTarget("li.result"),
        link=ExtractionTarget.from_attribute("a", "href"),
        title=ExtractionTarget("h2"),
        description=ExtractionTarget("p"),
    )
    params.update(overrides)
    return ExtractionPlan(**params)


class TestExtractionTarget:
    def test_text_target_valid(self):
        ExtractionTarget("h2").validate()

    def test_attribute_target_valid(self):
        target = ExtractionTarget.from_attribute("h2 a", "href")
        target.validate()
        assert target.reads_attribute
        assert target.prefer_text is False

    def test_empty_selector(self):
        with pytest.raises(InvalidExtractionTargetException):
            ExtractionTarget("   ").validate()

    def test_attribute_and_prefer_text(self):
        """속성과 텍스트 모드를 동시에 지정하면 오류"""
        with pytest.raises(InvalidExtractionTargetException):
            ExtractionTarget("a", attribute="href", prefer_text=True).validate()

    def test_neither_attribute_nor_text(self):
        with pytest.raises(InvalidExtractionTargetException):
            ExtractionTarget("a", attribute=None, prefer_text=False).validate()

    def test_blank_attribute(self):
        with pytest.raises(InvalidExtractionTargetException):
            ExtractionTarget("a", attribute=" ", prefer_text=False).validate()

    def test_is_configuration_error(self):
        with pytest.raises(ConfigurationException):
            ExtractionTarget("").validate()

    def test_multiline_selector_normalized(self):
        target = ExtractionTarget(
            """
            .b_caption p,
            .b_snippetBigText
            """
        )
        assert target.selector == ".b_caption p, .b_snippetBigText"

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("ol.searchCenterMiddle>li .algo", "ol.searchCenterMiddle > li .algo"),
            ("#links .results_links>.links_deep", "#links .results_links > .links_deep"),
            ("h2+p", "h2 + p"),
            ("h2 > a", "h2 > a"),
        ],
    )
    def test_combinators_spaced(self, raw, expected):
        assert ExtractionTarget(raw).selector == expected

    @pytest.mark.parametrize(
        "selector",
        [
            'div[data-sncf="0,1,2,3"]',
            'a[class~="title"]',
            "li:nth-child(2n+1)",
            'div[title="a>b"]',
        ],
    )
    def test_brackets_and_quotes_untouched(self, selector):
        assert ExtractionTarget(selector).selector == selector


class TestExtractionPlan:
    def test_valid_plan(self):
        _plan().validate()

    def test_invalid_alternate_detected(self):
        plan = _plan(description_alternates=[ExtractionTarget("")])
        with pytest.raises(InvalidExtractionTargetException):
            plan.validate()

    def test_alternates_stored_as_tuple(self):
        plan = _plan(description_alternates=[ExtractionTarget("div.a"), ExtractionTarget("div.b")])
        assert isinstance(plan.description_alternates, tuple)
        assert len(plan.targets()) == 6
