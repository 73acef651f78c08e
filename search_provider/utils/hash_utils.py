"""해싱 유틸리티"""
import hashlib
import re


_WHITESPACE_RUN = re.compile(r"\s+")


def hash_string(text: str) -> str:
    """
    문자열을 MD5 해시로 변환

    Args:
        text: 해시할 문자열

    Returns:
        MD5 해시 문자열
    """
    return hashlib.md5(text.encode()).hexdigest()


def canonicalize_query(query: str) -> str:
    """
    캐시 키용 검색어 정규화

    공백 덩어리를 모두 `_` 하나로 바꿔 "hp printer"와 "hp  printer"가
    같은 키를 갖도록 합니다. 대소문자는 유지합니다.

    Examples:
        >>> canonicalize_query("hp  printer manual")
        'hp_printer_manual'
        >>> canonicalize_query("  hp printer ")
        'hp_printer'
    """
    if not query:
        return ""
    return _WHITESPACE_RUN.sub("_", query.strip())
