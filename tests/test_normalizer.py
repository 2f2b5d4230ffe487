"""normalize_domain tests: prevent semantic drift."""

import pytest

from exclusion_sync.domain.normalizer import normalize_domain


class TestNormalizeDomainBasics:
    """Scheme, www., trailing slash, case and whitespace."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("example.com", "example.com"),
            ("  Example.COM  ", "example.com"),
            ("http://example.com", "example.com"),
            ("https://example.com", "example.com"),
            ("www.example.com", "example.com"),
            ("https://www.example.com/", "example.com"),
            ("HTTP://WWW.Example.com/", "example.com"),
            ("example.com/", "example.com"),
            ("com.example.app", "com.example.app"),
        ],
    )
    def test_canonical_form(self, raw, expected):
        assert normalize_domain(raw) == expected

    def test_empty_input_returns_empty(self):
        assert normalize_domain("") == ""
        assert normalize_domain("   ") == ""

    def test_scheme_inside_string_is_kept(self):
        assert normalize_domain("redirect.ru/?u=http://example.com") == "redirect.ru/?u=http://example.com"

    def test_www_inside_string_is_kept(self):
        assert normalize_domain("news.www.example.com") == "news.www.example.com"

    def test_path_is_kept_apart_from_trailing_slash(self):
        assert normalize_domain("https://example.com/section/") == "example.com/section"


class TestNormalizeDomainIdempotence:
    """normalize(normalize(x)) == normalize(x)."""

    @pytest.mark.parametrize(
        "raw",
        [
            "https://www.example.com/",
            "https://www.http://example.com//",
            "http:// www.example.com /",
            "www.www.example.com",
            "example.com///",
            "HTTPS://",
            "/",
            "",
            "Straße.de",
        ],
    )
    def test_idempotent(self, raw):
        once = normalize_domain(raw)
        assert normalize_domain(once) == once
