"""Unit tests for ConnectionConfig."""

import pytest
from pydantic import ValidationError

from stackquery.models.connection_config import (
    DEFAULT_IGNORE_ERROR_SUBSTRINGS,
    ConnectionConfig,
)


class TestConnectionConfig:
    def test_password_auth_defaults(self):
        config = ConnectionConfig(
            auth_url="https://keystone.example.com/v3",
            username="admin",
            password="secret",
        )

        assert config.name == "openstack"
        assert config.auth_type == "password"
        assert config.interface == "public"
        assert config.region == ""
        assert config.password.get_secret_value() == "secret"
        assert config.ignore_error_substrings == DEFAULT_IGNORE_ERROR_SUBSTRINGS

    def test_password_auth_requires_username(self):
        with pytest.raises(ValidationError, match="username is required"):
            ConnectionConfig(auth_url="https://keystone.example.com/v3", password="x")

    def test_password_auth_requires_password(self):
        with pytest.raises(ValidationError, match="password is required"):
            ConnectionConfig(auth_url="https://keystone.example.com/v3", username="admin")

    def test_token_auth_requires_token(self):
        with pytest.raises(ValidationError, match="token is required"):
            ConnectionConfig(auth_url="https://keystone.example.com/v3", auth_type="token")

    def test_token_auth(self):
        config = ConnectionConfig(
            auth_url="https://keystone.example.com/v3", auth_type="token", token="abc"
        )
        assert config.token.get_secret_value() == "abc"

    def test_invalid_interface(self):
        with pytest.raises(ValidationError):
            ConnectionConfig(
                auth_url="https://keystone.example.com/v3",
                username="admin",
                password="secret",
                interface="private",
            )

    def test_ignore_errors_for_table(self):
        config = ConnectionConfig(
            auth_url="https://keystone.example.com/v3",
            username="admin",
            password="secret",
            table_ignore_errors={"openstack_pool": ["PoolNotFound"]},
        )

        assert config.ignore_errors_for("openstack_pool") == [
            *DEFAULT_IGNORE_ERROR_SUBSTRINGS,
            "PoolNotFound",
        ]
        assert config.ignore_errors_for("openstack_network") == DEFAULT_IGNORE_ERROR_SUBSTRINGS

    def test_default_ignore_list_is_not_shared(self):
        config = ConnectionConfig(
            auth_url="https://keystone.example.com/v3", username="a", password="b"
        )
        config.ignore_error_substrings.append("extra")

        assert "extra" not in DEFAULT_IGNORE_ERROR_SUBSTRINGS


class TestFromEnv:
    def test_password_from_env(self, env_vars):
        config = ConnectionConfig.from_env()

        assert config.auth_url == env_vars["OS_AUTH_URL"]
        assert config.username == "admin"
        assert config.project_name == "admin"
        assert config.region == "RegionOne"
        assert config.auth_type == "password"

    def test_token_from_env(self, env_vars, monkeypatch):
        monkeypatch.setenv("OS_TOKEN", "gAAAA")

        config = ConnectionConfig.from_env(name="ci")

        assert config.name == "ci"
        assert config.auth_type == "token"
        assert config.token.get_secret_value() == "gAAAA"

    def test_missing_credentials(self, monkeypatch):
        for key in ("OS_AUTH_URL", "OS_USERNAME", "OS_PASSWORD", "OS_TOKEN"):
            monkeypatch.delenv(key, raising=False)

        with pytest.raises(ValidationError):
            ConnectionConfig.from_env()
