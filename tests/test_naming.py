"""Tests for destination naming and exclusion rules."""
import pytest

from k8s_secret_migrator.migration.domains.errors import InvalidSecretNameError
from k8s_secret_migrator.migration.domains.naming import (
    build_exclusion_set,
    destination_name,
    is_excluded,
    is_reserved_key,
    sanitize,
)


class TestSanitize:
    """Test suite for sanitize()."""

    def test_periods_become_hyphens(self):
        assert sanitize("my.secret", "tls.crt") == "my-secret-tls-crt"

    def test_punctuation_and_underscores_removed(self):
        assert sanitize("app_secret!", "key#1") == "appsecret-key1"

    def test_spaces_removed(self):
        assert sanitize("my secret", "api key") == "mysecret-apikey"

    def test_every_period_replaced(self):
        assert sanitize("a.b.c", "d.e.f") == "a-b-c-d-e-f"

    def test_case_preserved(self):
        assert sanitize("App", "API_KEY") == "App-APIKEY"

    def test_deterministic(self):
        assert sanitize("app-cfg", "config.json") == sanitize("app-cfg", "config.json")

    def test_result_never_contains_periods(self):
        assert "." not in sanitize("...", "x.y")


class TestDestinationName:
    """Test suite for destination_name()."""

    def test_returns_sanitized_name(self):
        assert destination_name("app-cfg", "config.json") == "app-cfg-config-json"

    def test_rejects_name_with_nothing_left(self):
        with pytest.raises(InvalidSecretNameError) as exc_info:
            destination_name("!!!", "###")

        assert "!!!" in str(exc_info.value)

    def test_rejects_hyphen_only_name(self):
        with pytest.raises(InvalidSecretNameError):
            destination_name("_", "_")


class TestExclusion:
    """Test suite for exclusion set and reserved keys."""

    def test_build_exclusion_set_splits_on_commas(self):
        assert build_exclusion_set("a,b,c") == frozenset({"a", "b", "c"})

    def test_build_exclusion_set_does_not_trim(self):
        exclusions = build_exclusion_set("db-creds, app-cfg")

        assert " app-cfg" in exclusions
        assert not is_excluded("app-cfg", exclusions)

    def test_empty_exclude_excludes_nothing_real(self):
        exclusions = build_exclusion_set("")

        assert not is_excluded("app-cfg", exclusions)

    def test_none_exclude_treated_as_empty(self):
        assert build_exclusion_set(None) == frozenset({""})

    def test_service_account_token_always_excluded(self):
        assert is_excluded("default-token-abc123", frozenset())
        assert is_excluded("default-token-abc123", build_exclusion_set("other"))

    def test_named_secret_excluded(self):
        exclusions = build_exclusion_set("db-creds")

        assert is_excluded("db-creds", exclusions)
        assert not is_excluded("api-creds", exclusions)

    def test_matching_is_case_sensitive(self):
        assert not is_excluded("DB-CREDS", build_exclusion_set("db-creds"))

    @pytest.mark.parametrize("key", ["namespace", "token", "ca.crt"])
    def test_reserved_keys(self, key):
        assert is_reserved_key(key)

    @pytest.mark.parametrize("key", ["password", "tls.crt", "Token"])
    def test_regular_keys(self, key):
        assert not is_reserved_key(key)
