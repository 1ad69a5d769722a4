"""Tests for environment selection, hosts and token precedence."""

from __future__ import annotations

import os

import pytest

from railway_cli.config.environment import (
    EnvSnapshot,
    Environment,
    backboard_url,
    config_relative_path,
    host_for,
    is_ci,
    relay_host_path,
    resolve_auth_token,
    resolve_environment,
)

# ── resolve_environment ─────────────────────────────────────────────────


class TestResolveEnvironment:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("production", Environment.PRODUCTION),
            ("staging", Environment.STAGING),
            ("STAGING", Environment.STAGING),
            ("dev", Environment.DEV),
            ("develop", Environment.DEV),
            ("Develop", Environment.DEV),
            ("qa", Environment.PRODUCTION),
            ("", Environment.PRODUCTION),
        ],
    )
    def test_values(self, value: str, expected: Environment) -> None:
        assert resolve_environment(EnvSnapshot(environment=value)) is expected

    def test_missing_defaults_to_production(self) -> None:
        assert resolve_environment(EnvSnapshot()) is Environment.PRODUCTION

    def test_from_mapping_reads_known_variables(self) -> None:
        env = EnvSnapshot.from_mapping(
            {
                "RAILWAY_ENV": "staging",
                "RAILWAY_TOKEN": "proj",
                "RAILWAY_API_TOKEN": "api",
                "CI": "true",
                "UNRELATED": "x",
            }
        )
        assert env == EnvSnapshot(
            api_token="api", project_token="proj", environment="staging", ci="true"
        )


# ── hosts and paths ─────────────────────────────────────────────────────


class TestHosts:
    def test_hosts_are_distinct(self) -> None:
        assert host_for(Environment.PRODUCTION) == "railway.com"
        assert host_for(Environment.STAGING) == "railway-staging.com"
        assert host_for(Environment.DEV) == "railway-develop.com"

    def test_backboard_url(self) -> None:
        assert backboard_url("railway.com") == "https://backboard.railway.com/graphql/v2"

    def test_relay_host_path_has_no_scheme(self) -> None:
        assert relay_host_path("railway-staging.com") == "backboard.railway-staging.com/relay"

    def test_config_file_per_environment(self) -> None:
        assert config_relative_path(Environment.PRODUCTION) == os.path.join(".railway", "config.json")
        assert config_relative_path(Environment.STAGING) == os.path.join(
            ".railway", "config-staging.json"
        )
        assert config_relative_path(Environment.DEV) == os.path.join(".railway", "config-dev.json")


# ── CI detection ────────────────────────────────────────────────────────


class TestIsCi:
    def test_true_values(self) -> None:
        assert is_ci(EnvSnapshot(ci="true"))
        assert is_ci(EnvSnapshot(ci=" TRUE "))

    def test_false_values(self) -> None:
        assert not is_ci(EnvSnapshot())
        assert not is_ci(EnvSnapshot(ci="1"))
        assert not is_ci(EnvSnapshot(ci="false"))


# ── token precedence ────────────────────────────────────────────────────


class TestResolveAuthToken:
    def test_env_token_wins_over_stored(self) -> None:
        assert resolve_auth_token(EnvSnapshot(api_token="env-tok"), "stored-tok") == "env-tok"

    def test_stored_token_used_without_env(self) -> None:
        assert resolve_auth_token(EnvSnapshot(), "stored-tok") == "stored-tok"

    def test_blank_stored_token_is_absent(self) -> None:
        assert resolve_auth_token(EnvSnapshot(), "") is None
        assert resolve_auth_token(EnvSnapshot(), "   ") is None

    def test_no_token(self) -> None:
        assert resolve_auth_token(EnvSnapshot(), None) is None

    def test_project_token_is_not_an_auth_token(self) -> None:
        assert resolve_auth_token(EnvSnapshot(project_token="proj"), None) is None
