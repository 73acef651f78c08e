"""URL 파싱 유틸 테스트"""
import pytest

from search_provider.core.exceptions import ConfigurationException
from search_provider.utils.url_utils import (
    get_host_from_url,
    get_link_extension,
    is_valid_absolute_url,
    normalize_string_for_url,
    validate_url_consistency,
)


class TestGetHostFromUrl:
    def test_host(self):
        assert get_host_from_url("https://www.bing.com/search?q=test") == "www.bing.com"

    def test_invalid(self):
        assert get_host_from_url("invalid") == ""

    def test_empty(self):
        assert get_host_from_url("") == ""


class TestIsValidAbsoluteUrl:
    """검색 결과 링크 검증"""

    def test_https(self):
        assert is_valid_absolute_url("https://example.com/manual.pdf")

    def test_http(self):
        assert is_valid_absolute_url("http://example.com")

    def test_relative_path(self):
        assert not is_valid_absolute_url("/relative/path")

    def test_javascript(self):
        assert not is_valid_absolute_url("javascript:void(0)")

    def test_no_host(self):
        assert not is_valid_absolute_url("https://")

    def test_whitespace(self):
        assert not is_valid_absolute_url("https://exa mple.com")

    def test_ftp_rejected(self):
        assert not is_valid_absolute_url("ftp://example.com/file.pdf")


class TestGetLinkExtension:
    def test_pdf(self):
        assert get_link_extension("https://example.com/files/manual.pdf") == "pdf"

    def test_uppercase(self):
        assert get_link_extension("https://example.com/files/Manual.PDF") == "pdf"

    def test_query_string_ignored(self):
        assert get_link_extension("https://example.com/page.html?x=1.pdf") == "html"

    def test_no_extension(self):
        assert get_link_extension("https://example.com/") == ""

    def test_host_dot_is_not_extension(self):
        assert get_link_extension("https://example.com") == ""


class TestValidateUrlConsistency:
    def test_https_ok(self):
        validate_url_consistency("https://www.bing.com/search")

    def test_missing_scheme(self):
        with pytest.raises(ConfigurationException):
            validate_url_consistency("www.bing.com/search")

    def test_unsupported_scheme(self):
        with pytest.raises(ConfigurationException):
            validate_url_consistency("ftp://www.bing.com/search")


def test_normalize_string_for_url():
    assert normalize_string_for_url("hp 2700 manual") == "hp+2700+manual"
