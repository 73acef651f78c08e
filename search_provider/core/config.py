"""설정 관리 - 환경 변수 로드 및 검증"""
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """애플리케이션 설정"""

    # Redis (엔진 결과 캐시)
    redis_url: str = "redis://localhost:6379/0"
    # 0이면 만료 없음: eviction 정책은 스토어가 결정합니다.
    engine_cache_ttl: int = 0

    # 엔진 호출 간 고정 대기 (검색 엔진을 과도하게 호출하지 않기 위함)
    engine_sleep_time_ms: int = 1500

    # 모든 User-Agent 시도가 실패했을 때 마지막 페이지를 저장할 디렉터리
    engine_result_directory: str = "var/engine_results"

    # 이보다 결과가 적으면 추출 설정 이상 가능성이 있어 경고만 남깁니다.
    min_expected_search_results: int = 4

    # HTTP (curl_cffi)
    crawler_http_impersonate: str = "chrome110"
    crawler_http_request_timeout_ms: int = 8000
    crawler_http_max_clients: int = 20

    # 프록시 - 선택 정책 자체는 외부 관심사이며 여기서는 게이트웨이 URL만 받습니다.
    is_proxy_enabled: bool = False
    proxy_url: str = ""

    # 로깅
    log_level: str = "INFO"

    @field_validator("engine_cache_ttl", "engine_sleep_time_ms")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("engine_cache_ttl and engine_sleep_time_ms must be >= 0")
        return v

    @field_validator("min_expected_search_results")
    @classmethod
    def validate_min_expected_search_results(cls, v: int) -> int:
        if v < 0:
            raise ValueError("min_expected_search_results must be >= 0")
        return v

    @field_validator("crawler_http_request_timeout_ms", "crawler_http_max_clients")
    @classmethod
    def validate_http_limits(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("crawler http limits must be positive")
        return v

    @field_validator("engine_result_directory")
    @classmethod
    def validate_result_directory(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("engine_result_directory must not be empty")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
