"""커스텀 예외 정의 (Structured Exception Hierarchy)"""
import json
from typing import Any, Optional, Sequence


# 기본 예외 클래스
class SearchProviderException(Exception):
    """기본 예외 클래스 - 모든 커스텀 예외의 부모"""
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


# 설정 관련 예외 - 호출자에게 그대로 전달되며 재시도하지 않습니다.
class ConfigurationException(SearchProviderException):
    """잘못된 엔진 선택 / 추출 설정"""
    def __init__(self, message: str, error_code: str = "CONFIGURATION_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "CONFIGURATION_ERROR", details)


class NoUsedEngineDefinedException(ConfigurationException):
    """사용할 엔진이 하나도 지정되지 않음"""
    def __init__(self, details: Optional[dict[str, Any]] = None):
        super().__init__(
            "No used engine was selected. Cannot make the searching.",
            "NO_ENGINE_DEFINED",
            details,
        )


class EngineNotSupportedException(ConfigurationException):
    """지원되지 않거나 강제 허용되지 않은 엔진"""
    def __init__(self, provided: Sequence[str], supported: Sequence[str], details: Optional[dict[str, Any]] = None):
        self.provided = list(provided)
        self.supported = list(supported)
        message = f"Expected one of given engines: {json.dumps(self.supported)}, got: {json.dumps(self.provided)}"
        super().__init__(message, "ENGINE_NOT_SUPPORTED",
                         details or {"provided": self.provided, "supported": self.supported})


class InvalidExtractionTargetException(ConfigurationException):
    """추출 대상(ExtractionTarget) 설정 오류"""
    def __init__(self, target: Any, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Invalid extraction target {target!r}: {reason}"
        super().__init__(message, "INVALID_EXTRACTION_TARGET",
                         details or {"target": repr(target), "reason": reason})


class InvalidQueryException(ConfigurationException):
    """유효하지 않은 검색어"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        super().__init__(f"Invalid query: {reason}", "INVALID_QUERY", details or {"reason": reason})


class PaidUsageNotAcceptedException(ConfigurationException):
    """유료 검색 사용 미동의"""
    def __init__(self, service: str, details: Optional[dict[str, Any]] = None):
        message = (
            f"{service} can generate high costs for using their search engine proxy, "
            f"thus it's required that it's understood / accepted."
        )
        super().__init__(message, "PAID_USAGE_NOT_ACCEPTED", details or {"service": service})


# 검색 결과 없음 신호 - 오류가 아니라 빈 결과로 수렴합니다.
class NoSearchResultsException(SearchProviderException):
    """검색 엔진이 '결과 없음'을 반환함"""

    STATUS_NO_SEARCH_RESULTS_RETURNED = "NO_SEARCH_RESULTS_RETURNED"
    STATUS_ENGINE_RESPONDED_WITH_NO_RESULTS_MESSAGE = "ENGINE_RESPONDED_WITH_NO_RESULTS_MESSAGE"

    def __init__(
        self,
        engine: str,
        query: str,
        status: str = STATUS_NO_SEARCH_RESULTS_RETURNED,
        called_url: str = "",
    ):
        self.engine = engine
        self.query = query
        self.status = status
        self.called_url = called_url

        if status == self.STATUS_ENGINE_RESPONDED_WITH_NO_RESULTS_MESSAGE:
            message = f"Engine: `{engine}` responded with `no results found`, for string: {query}"
        else:
            message = f"No results were returned by the engine: `{engine}`, for string: `{query}`"
        if called_url:
            message += f" Called url: {called_url}"

        super().__init__(message, "NO_SEARCH_RESULTS",
                         {"engine": engine, "query": query, "status": status, "called_url": called_url})

    @property
    def no_results_message_found(self) -> bool:
        """엔진이 명시적으로 '결과 없음' 페이지를 반환했는지 여부"""
        return self.status == self.STATUS_ENGINE_RESPONDED_WITH_NO_RESULTS_MESSAGE


# 크롤러 관련 예외
class CrawlerException(SearchProviderException):
    """크롤러 관련 예외의 기본 클래스"""
    def __init__(self, message: str, error_code: str = "CRAWLER_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "CRAWLER_ERROR", details)


class FetchException(CrawlerException):
    """네트워크/타임아웃/비정상 상태 코드 - 다음 User-Agent 또는 다음 엔진으로 복구"""
    def __init__(self, url: str, reason: str, status_code: Optional[int] = None, details: Optional[dict[str, Any]] = None):
        self.url = url
        self.status_code = status_code
        message = f"Failed to fetch {url}: {reason}"
        super().__init__(message, "FETCH_FAILED",
                         details or {"url": url, "reason": reason, "status_code": status_code})


class ExtractionMismatchException(CrawlerException):
    """셀렉터 설정이 사이트 구조와 더 이상 맞지 않음"""
    def __init__(self, target: Any, reason: str, details: Optional[dict[str, Any]] = None):
        self.target = target
        message = f"Could not retrieve the value for target {target!r}: {reason}"
        super().__init__(message, "EXTRACTION_MISMATCH", details or {"target": repr(target), "reason": reason})


class TokenNotFoundException(CrawlerException):
    """토큰 페이지에서 세션 토큰을 찾지 못함 (프로토콜 변경 신호)"""
    def __init__(self, token_name: str, details: Optional[dict[str, Any]] = None):
        message = f"Could not extract the `{token_name}` token from page content"
        super().__init__(message, "TOKEN_NOT_FOUND", details or {"token": token_name})


class PageContentScrappingException(CrawlerException):
    """검색 결과 페이지 처리 중 예기치 못한 오류"""
    def __init__(self, url: str, previous: BaseException):
        message = (
            f"Something went wrong while trying to obtain search result for page: {url}. "
            f"Message: {previous}"
        )
        super().__init__(message, "PAGE_SCRAPPING_FAILED",
                         {"url": url, "class": type(previous).__name__})


# 캐시 관련 예외
class CacheException(SearchProviderException):
    """캐시 관련 예외"""
    def __init__(self, message: str, error_code: str = "CACHE_ERROR", details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code or "CACHE_ERROR", details)


class CacheConnectionException(CacheException):
    """캐시 연결 실패"""
    def __init__(self, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Failed to connect to cache: {reason}"
        super().__init__(message, "CACHE_CONNECTION_ERROR", details or {"reason": reason})


class CacheSerializationException(CacheException):
    """캐시 직렬화/역직렬화 오류"""
    def __init__(self, operation: str, reason: str, details: Optional[dict[str, Any]] = None):
        message = f"Cache {operation} failed: {reason}"
        super().__init__(message, "CACHE_SERIALIZATION_ERROR",
                         details or {"operation": operation, "reason": reason})
