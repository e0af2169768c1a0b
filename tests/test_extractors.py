"""
Tests for authority extractors.
"""

import pytest

from scopebridge.auth.exceptions import ConfigurationError
from scopebridge.auth.extractors import DefaultAuthoritiesExtractor, LocalAuthoritiesExtractor
from scopebridge.auth.token import Token


class TestDefaultAuthoritiesExtractor:
    """Tests for global (fully qualified) extraction."""

    def test_returns_all_scopes(self, sample_token):
        authorities = DefaultAuthoritiesExtractor().get_authorities(sample_token)

        assert authorities == ["xsapp!t0.Read", "xsapp!t0.Write", "other!t1.Admin"]

    def test_keeps_unqualified_scopes(self):
        token = Token({"scope": ["openid", "xsapp!t0.Read"]})

        assert DefaultAuthoritiesExtractor().get_authorities(token) == ["openid", "xsapp!t0.Read"]

    def test_duplicates_keep_first_occurrence(self):
        token = Token({"scope": ["b.Write", "a.Read", "b.Write"]})

        assert DefaultAuthoritiesExtractor().get_authorities(token) == ["b.Write", "a.Read"]

    def test_empty_scopes(self):
        assert DefaultAuthoritiesExtractor().get_authorities(Token({"scope": []})) == []
        assert DefaultAuthoritiesExtractor().get_authorities(Token({})) == []


class TestLocalAuthoritiesExtractor:
    """Tests for local extraction."""

    def test_keeps_own_scopes_stripped(self, sample_token, app_id):
        authorities = LocalAuthoritiesExtractor(app_id).get_authorities(sample_token)

        assert authorities == ["Read", "Write"]

    def test_foreign_app_dropped(self):
        token = Token({"scope": ["app1!t1.Display", "app2!t2.Edit"]})

        assert LocalAuthoritiesExtractor("app1!t1").get_authorities(token) == ["Display"]

    @pytest.mark.parametrize("app_id", ["app1!t1", "Display", "x"])
    def test_scope_without_separator_excluded(self, app_id):
        token = Token({"scope": ["Display"]})

        assert LocalAuthoritiesExtractor(app_id).get_authorities(token) == []

    def test_app_id_prefix_must_be_followed_by_separator(self):
        token = Token({"scope": ["app1!t10.Display", "app1!t1Display", "app1!t1.", "app1!t1"]})

        assert LocalAuthoritiesExtractor("app1!t1").get_authorities(token) == []

    def test_only_prefix_is_stripped(self):
        token = Token({"scope": ["app1!t1.Orders.Read"]})

        assert LocalAuthoritiesExtractor("app1!t1").get_authorities(token) == ["Orders.Read"]

    def test_custom_separator(self):
        token = Token({"scope": ["app1:Display", "app1.Edit"]})

        extractor = LocalAuthoritiesExtractor("app1", separator=":")

        assert extractor.get_authorities(token) == ["Display"]
        assert extractor.separator == ":"

    def test_duplicates_after_stripping(self):
        token = Token({"scope": ["a!t1.Read", "a!t1.Read", "a!t1.Write"]})

        assert LocalAuthoritiesExtractor("a!t1").get_authorities(token) == ["Read", "Write"]

    def test_empty_scopes(self, app_id):
        assert LocalAuthoritiesExtractor(app_id).get_authorities(Token({})) == []

    def test_does_not_mutate_token(self, sample_token, sample_claims, app_id):
        LocalAuthoritiesExtractor(app_id).get_authorities(sample_token)

        assert sample_token.scopes == sample_claims["scope"]

    @pytest.mark.parametrize("app_id", [None, ""])
    def test_requires_app_id(self, app_id):
        with pytest.raises(ConfigurationError):
            LocalAuthoritiesExtractor(app_id)

    def test_requires_separator(self):
        with pytest.raises(ConfigurationError):
            LocalAuthoritiesExtractor("app1", separator="")

    def test_app_id_shape_not_validated(self):
        extractor = LocalAuthoritiesExtractor("any thing at all")

        assert extractor.app_id == "any thing at all"
