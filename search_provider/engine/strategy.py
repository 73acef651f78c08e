"""Failure Strategy - Error classification for retry/fallback decisions

오류 유형에 따라 User-Agent 재시도 / 다음 엔진 폴백 여부를 결정합니다.
"""

from search_provider.core.exceptions import (
    ConfigurationException,
    ExtractionMismatchException,
    FetchException,
    NoSearchResultsException,
    TokenNotFoundException,
)


class FailureStrategy:
    """실패 분류 전략

    Usage:
        try:
            crawl = await adapter.crawl_for_user_agent(...)
        except Exception as e:
            if FailureStrategy.is_no_results_message(e):
                return []
            if FailureStrategy.is_failed_attempt(e):
                continue
            raise
    """

    @staticmethod
    def is_no_results_message(error: Exception) -> bool:
        """엔진이 명시적으로 '결과 없음'을 응답했는지 여부

        이 경우 다른 User-Agent로 재시도해도 의미가 없으므로 즉시 빈 결과로 수렴합니다.
        """
        return isinstance(error, NoSearchResultsException) and error.no_results_message_found

    @staticmethod
    def is_failed_attempt(error: Exception) -> bool:
        """해당 User-Agent 시도만 실패로 처리할 오류인지 여부

        - FetchException: 네트워크/타임아웃/비정상 상태 코드
        - ExtractionMismatchException: 셀렉터가 구조와 불일치
        - TokenNotFoundException: 토큰 프로토콜 변경
        """
        return isinstance(error, (FetchException, ExtractionMismatchException, TokenNotFoundException))

    @staticmethod
    def should_try_next_engine(error: Exception) -> bool:
        """오케스트레이터가 다음 엔진으로 넘어가야 하는지 여부

        설정 오류만 호출자에게 전달하고, 그 외 엔진 오류는 모두 흡수합니다.
        """
        return not isinstance(error, ConfigurationException)
