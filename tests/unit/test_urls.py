import pytest

from httpchain_interceptors import RequestConfig, build_url, combine_urls
from httpchain_interceptors.urls import is_absolute_url, resolve_url


class TestBuildUrl:
    def test_no_params_returns_url_unchanged(self):
        assert build_url("https://example.com/users") == "https://example.com/users"
        assert build_url("https://example.com/users", {}) == "https://example.com/users"

    def test_params_are_appended(self):
        assert build_url("https://example.com/users", {"page": 2, "q": "abc"}) == "https://example.com/users?page=2&q=abc"

    def test_existing_query_is_kept(self):
        assert build_url("https://example.com/users?sort=name", {"page": 2}) == "https://example.com/users?sort=name&page=2"

    def test_none_values_are_dropped(self):
        assert build_url("https://example.com/users", {"page": None}) == "https://example.com/users"

    def test_list_values_repeat_the_key(self):
        assert build_url("https://example.com/users", {"id": [1, 2]}) == "https://example.com/users?id=1&id=2"

    def test_relative_url(self):
        assert build_url("/users", {"page": 1}) == "/users?page=1"


class TestCombineUrls:
    @pytest.mark.parametrize(
        "base_url, relative_url, expected",
        [
            ("https://api.example.com", "users", "https://api.example.com/users"),
            ("https://api.example.com/", "/users", "https://api.example.com/users"),
            ("https://api.example.com/v1", "/users/1", "https://api.example.com/v1/users/1"),
            ("https://api.example.com", "", "https://api.example.com"),
        ],
    )
    def test_combine(self, base_url, relative_url, expected):
        assert combine_urls(base_url, relative_url) == expected


class TestResolveUrl:
    @pytest.mark.parametrize("url", ["https://example.com", "http://example.com/a", "//example.com/a", "custom-scheme://x"])
    def test_absolute(self, url):
        assert is_absolute_url(url)

    @pytest.mark.parametrize("url", ["/users", "users", "example.com/a", ""])
    def test_relative(self, url):
        assert not is_absolute_url(url)

    def test_base_url_applies_to_relative_urls_only(self):
        assert resolve_url(RequestConfig(base_url="https://api.example.com", url="/users")) == "https://api.example.com/users"
        assert resolve_url(RequestConfig(base_url="https://api.example.com", url="https://other.example.com/x")) == "https://other.example.com/x"
        assert resolve_url(RequestConfig(url="/users")) == "/users"
