"""URL 파싱 유틸리티"""
from posixpath import splitext
from urllib.parse import quote_plus, urlparse

from search_provider.core.exceptions import ConfigurationException


SUPPORTED_SCHEMES = ("http", "https")


def get_host_from_url(url: str) -> str:
    """
    URL에서 host 추출

    Examples:
        >>> get_host_from_url("https://www.bing.com/search?q=test")
        'www.bing.com'
        >>> get_host_from_url("invalid")
        ''
    """
    if not url:
        return ""
    try:
        return urlparse(url).hostname or ""
    except ValueError:
        return ""


def normalize_string_for_url(value: str) -> str:
    """검색어를 URL 쿼리 값으로 인코딩 (공백은 `+`)"""
    return quote_plus(value or "")


def validate_url_consistency(url: str) -> None:
    """
    URL 구조 검증 (스킴 필수, http/https만 허용)

    Raises:
        ConfigurationException: 스킴이 없거나 지원하지 않는 경우
    """
    scheme = urlparse(url or "").scheme
    if not scheme:
        raise ConfigurationException(f"Scheme is missing in provided url: {url}")

    if scheme not in SUPPORTED_SCHEMES:
        raise ConfigurationException(
            f"Incorrect scheme provided. Got {scheme}, expected one of: {list(SUPPORTED_SCHEMES)}"
        )


def is_valid_absolute_url(link: str) -> bool:
    """
    검색 결과 링크가 절대 URL인지 확인

    - http/https 스킴
    - host 존재
    - 공백 없음

    Examples:
        >>> is_valid_absolute_url("https://example.com/manual.pdf")
        True
        >>> is_valid_absolute_url("/relative/path")
        False
        >>> is_valid_absolute_url("javascript:void(0)")
        False
    """
    if not link or not isinstance(link, str):
        return False
    if any(ch.isspace() for ch in link):
        return False
    try:
        parsed = urlparse(link)
    except ValueError:
        return False
    return parsed.scheme in SUPPORTED_SCHEMES and bool(parsed.hostname)


def get_link_extension(link: str) -> str:
    """
    링크 경로의 파일 확장자 (점 제외, 소문자)

    Examples:
        >>> get_link_extension("https://example.com/files/Manual.PDF")
        'pdf'
        >>> get_link_extension("https://example.com/page.html?x=1")
        'html'
        >>> get_link_extension("https://example.com/")
        ''
    """
    if not link:
        return ""
    try:
        path = urlparse(link).path
    except ValueError:
        return ""
    _, ext = splitext(path)
    return ext[1:].lower() if ext else ""
