"""DOM 질의 엔진 (selectolax)

페이지 내용 + CSS 셀렉터 → 문서 순서의 노드 목록.
각 노드는 text() / attribute(name)만 노출합니다.
"""

from __future__ import annotations

from typing import Optional, Union

from selectolax.parser import HTMLParser, Node


def normalize_text(value: Optional[str]) -> str:
    """연속 공백/개행을 공백 하나로"""
    if not value:
        return ""
    return " ".join(value.split())


class DomNode:
    """selectolax Node 래퍼"""

    __slots__ = ("_node",)

    def __init__(self, node: Node):
        self._node = node

    def text(self) -> str:
        return normalize_text(self._node.text(deep=True, separator=" "))

    def attribute(self, name: str) -> Optional[str]:
        value = self._node.attributes.get(name)
        return value.strip() if isinstance(value, str) else None

    def query(self, selector: str) -> list["DomNode"]:
        return [DomNode(n) for n in self._node.css(selector)]


class DomQueryEngine:
    """selectolax 기반 질의 엔진

    Usage:
        engine = DomQueryEngine()
        blocks = engine.query(html, "ol#b_results li.b_algo")
        links = engine.query(blocks[0], "h2 a")
    """

    def parse(self, content: str) -> HTMLParser:
        return HTMLParser(content or "")

    def query(self, source: Union[str, HTMLParser, DomNode], selector: str) -> list[DomNode]:
        """셀렉터에 맞는 노드를 문서 순서대로 반환

        Args:
            source: 페이지 내용, 파싱된 문서, 또는 기준 노드
            selector: CSS 셀렉터
        """
        if isinstance(source, DomNode):
            return source.query(selector)
        tree = source if isinstance(source, HTMLParser) else self.parse(source)
        return [DomNode(n) for n in tree.css(selector)]

    def html_to_text(self, fragment: str) -> str:
        """HTML 조각에서 텍스트만 추출 (예: <b> 강조 태그 제거)"""
        if not fragment:
            return ""
        tree = HTMLParser(f"<div>{fragment}</div>")
        node = tree.css_first("div")
        if node is None:
            return normalize_text(fragment)
        return normalize_text(node.text(deep=True, separator=""))
