"""Extraction Plan - Declarative DOM extraction configuration

검색 결과 페이지에서 값을 어디서 읽을지 기술하는 불변 설정 객체입니다.
엔진 정의 시점에 생성되며 이후 변경되지 않습니다.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

from search_provider.core.exceptions import InvalidExtractionTargetException


_WHITESPACE_RUN = re.compile(r"\s+")


_COMBINATORS = ">+~"


def normalize_selector(selector: str) -> str:
    """여러 줄로 선언된 셀렉터 목록을 한 줄로 정리

    selectolax(Modest)는 공백 없는 결합자(`a>b`)를 거부하므로
    속성/괄호 바깥의 `>`, `+`, `~` 양옆에 공백을 넣습니다.

    Examples:
        >>> normalize_selector("ol.searchCenterMiddle>li .algo")
        'ol.searchCenterMiddle > li .algo'
        >>> normalize_selector('a[href~="x"]:nth-child(2n+1)')
        'a[href~="x"]:nth-child(2n+1)'
    """
    chars: list[str] = []
    depth = 0
    quote = None
    for ch in selector or "":
        if quote:
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch in "[(":
            depth += 1
        elif ch in "])":
            depth = max(depth - 1, 0)
        elif depth == 0 and ch in _COMBINATORS:
            chars.append(f" {ch} ")
            continue
        chars.append(ch)
    return _WHITESPACE_RUN.sub(" ", "".join(chars)).strip()


@dataclass(frozen=True)
class ExtractionTarget:
    """단일 값 추출 대상

    Attributes:
        selector: CSS 셀렉터 (블록 노드 기준 상대 경로)
        attribute: 값을 읽을 속성명. 지정되면 텍스트 대신 속성을 읽습니다.
        prefer_text: 텍스트 내용을 읽을지 여부. attribute와 동시에 쓸 수 없습니다.
    """

    selector: str
    attribute: Optional[str] = None
    prefer_text: bool = True

    def __post_init__(self) -> None:
        # frozen이므로 object.__setattr__로 정규화
        object.__setattr__(self, "selector", normalize_selector(self.selector))

    @classmethod
    def from_attribute(cls, selector: str, attribute: str) -> "ExtractionTarget":
        """속성 기반 추출 대상 생성 (예: 링크의 href)"""
        return cls(selector=selector, attribute=attribute, prefer_text=False)

    @property
    def reads_attribute(self) -> bool:
        return self.attribute is not None

    def validate(self) -> None:
        """설정 검증 - 엔진 등록 시점에 호출됩니다.

        Raises:
            InvalidExtractionTargetException: 셀렉터가 비었거나 attribute/text 모드가 모순되는 경우
        """
        if not self.selector:
            raise InvalidExtractionTargetException(self, "selector must not be empty")

        if self.attribute is not None and not self.attribute.strip():
            raise InvalidExtractionTargetException(self, "attribute name must not be blank")

        if self.attribute is not None and self.prefer_text:
            raise InvalidExtractionTargetException(
                self, "attribute and prefer_text are mutually exclusive"
            )

        if self.attribute is None and not self.prefer_text:
            raise InvalidExtractionTargetException(
                self, "either attribute or prefer_text must be set"
            )


@dataclass(frozen=True)
class ExtractionPlan:
    """검색 결과 블록 단위 추출 계획

    - block: 페이지에서 반복되는 결과 블록
    - link / title / description: 블록 기준 상대 대상
    - description_alternates: description이 비었을 때 순서대로 시도할 대안들
      (CSS의 ","는 OR로 동작하지 않아 대안 목록이 필요합니다)
    """

    block: ExtractionTarget
    link: ExtractionTarget
    title: ExtractionTarget
    description: ExtractionTarget
    description_alternates: tuple[ExtractionTarget, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "description_alternates", tuple(self.description_alternates))

    def targets(self) -> tuple[ExtractionTarget, ...]:
        return (self.block, self.link, self.title, self.description, *self.description_alternates)

    def validate(self) -> None:
        """모든 대상 검증

        Raises:
            InvalidExtractionTargetException: 잘못된 대상이 하나라도 있는 경우
        """
        for target in self.targets():
            target.validate()
