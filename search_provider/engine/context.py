"""Request Context - Proxy policy and per-attempt request context"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from search_provider.core.config import settings


@dataclass(frozen=True)
class ProxyPolicy:
    """프록시 사용 정책 (불투명 값 객체)

    선택/자격증명 정책은 외부 관심사이며, 여기서는 fetcher로 그대로 전달만 합니다.
    """

    enabled: bool = False
    identifier: Optional[str] = None
    usage: Optional[str] = None
    country_code: Optional[str] = None

    @classmethod
    def disabled(cls) -> "ProxyPolicy":
        return cls()

    @classmethod
    def from_settings(
        cls,
        usage: Optional[str] = None,
        country_code: Optional[str] = None,
        identifier: Optional[str] = None,
    ) -> "ProxyPolicy":
        """환경 설정(IS_PROXY_ENABLED) 기반 정책 생성"""
        return cls(
            enabled=settings.is_proxy_enabled,
            identifier=identifier,
            usage=usage,
            country_code=country_code,
        )


def merge_headers(defaults: Mapping[str, str], overrides: Mapping[str, str]) -> dict[str, str]:
    """기본 헤더에 엔진 헤더를 덮어씀

    HTTP 헤더 키는 대소문자를 구분하지 않으므로 같은 키(예: `accept`/`Accept`)는
    엔진 쪽 값과 표기가 우선합니다. 순서는 기본 헤더 순서를 유지하고 새 키는 뒤에 붙입니다.
    """
    pending = {k.lower(): (k, v) for k, v in overrides.items()}
    merged: dict[str, str] = {}
    for key, value in defaults.items():
        if key.lower() in pending:
            override_key, override_value = pending.pop(key.lower())
            merged[override_key] = override_value
        else:
            merged[key] = value
    for override_key, override_value in pending.values():
        merged[override_key] = override_value
    return merged


@dataclass
class AdapterRequestContext:
    """시도 1회분 요청 컨텍스트 - 시도마다 새로 생성하며 엔진 간 재사용하지 않습니다."""

    url: str
    host: str
    searched_string: str
    user_agent: str
    proxy_policy: ProxyPolicy = field(default_factory=ProxyPolicy.disabled)
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        url: str,
        host: str,
        searched_string: str,
        user_agent: str,
        proxy_policy: ProxyPolicy,
        engine_headers: Mapping[str, str],
    ) -> "AdapterRequestContext":
        # 대부분의 엔진은 이 헤더가 없으면 오류나 빈 결과를 반환합니다.
        default_headers = {
            "User-Agent": user_agent,
            "Accept": "*/*",
            "Host": host,
        }
        return cls(
            url=url,
            host=host,
            searched_string=searched_string,
            user_agent=user_agent,
            proxy_policy=proxy_policy,
            headers=merge_headers(default_headers, engine_headers),
        )
