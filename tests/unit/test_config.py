"""Unit tests for application settings."""

import pytest

from src.vehicle_registry.domain.exceptions import ConfigurationError
from src.vehicle_registry.presentation.api.config import Settings, get_settings


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run without a .env file or JWT variables."""
    monkeypatch.chdir(tmp_path)
    for name in ("JWT_SECRET_KEY", "JWT_ISSUER", "ACCESS_TOKEN_EXPIRE_MINUTES", "ALLOWED_ORIGINS"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


class TestSettings:
    """Test cases for Settings loading."""

    def test_missing_signing_key_is_fatal(self, clean_env):
        """Test startup fails without key and issuer."""
        with pytest.raises(ConfigurationError):
            get_settings()

    def test_blank_issuer_is_fatal(self, clean_env):
        clean_env.setenv("JWT_SECRET_KEY", "secret")
        clean_env.setenv("JWT_ISSUER", "   ")

        with pytest.raises(ConfigurationError):
            get_settings()

    def test_settings_from_environment(self, clean_env):
        """Test settings are read from the environment."""
        clean_env.setenv("JWT_SECRET_KEY", "secret")
        clean_env.setenv("JWT_ISSUER", "registry")

        settings = get_settings()

        assert settings.jwt_secret_key == "secret"
        assert settings.jwt_issuer == "registry"
        assert settings.jwt_algorithm == "HS256"
        assert settings.access_token_expire_minutes == 60
        assert settings.api_prefix == "/api/v1"
        assert get_settings() is settings

    def test_settings_from_env_file(self, clean_env, tmp_path):
        """Test a .env file in the working directory is honoured."""
        (tmp_path / ".env").write_text("JWT_SECRET_KEY=file-secret\nJWT_ISSUER=file-issuer\n")

        settings = get_settings()

        assert settings.jwt_secret_key == "file-secret"
        assert settings.jwt_issuer == "file-issuer"

    def test_non_positive_lifetime_is_fatal(self, clean_env):
        clean_env.setenv("JWT_SECRET_KEY", "secret")
        clean_env.setenv("JWT_ISSUER", "registry")
        clean_env.setenv("ACCESS_TOKEN_EXPIRE_MINUTES", "0")

        with pytest.raises(ConfigurationError):
            get_settings()

    def test_cors_lists_are_split(self, clean_env):
        settings = Settings(
            _env_file=None,
            jwt_secret_key="secret",
            jwt_issuer="registry",
            allowed_origins="http://a.test, http://b.test,,",
            allowed_methods="GET,POST"
        )

        assert settings.cors_origins == ["http://a.test", "http://b.test"]
        assert settings.cors_methods == ["GET", "POST"]
        assert settings.cors_headers == ["*"]
