"""Pydantic 스키마 정의 (캐시 레코드 검증)"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CachedSearchResult(BaseModel):
    """캐시에 저장되는 검색 결과 레코드 (평면 텍스트 필드만)"""

    model_config = ConfigDict(extra="forbid")

    searched_string: str = Field(..., description="검색어")
    engine_url: str = Field(..., description="결과를 제공한 엔진 host")
    link: str = Field(..., min_length=1, description="결과 링크")
    title: str = Field("", description="제목")
    description: Optional[str] = Field(None, description="설명")

    @field_validator("link")
    @classmethod
    def validate_link(cls, v: str) -> str:
        """링크 검증: 절대 URL만 허용"""
        if not v.startswith(("http://", "https://")):
            raise ValueError("link must start with http:// or https://")
        return v
