"""Tests for environment-driven settings."""

from datetime import timedelta

import pytest
from pydantic import ValidationError

from tokensign.config import Settings, get_settings
from tokensign.errors import InvalidKey


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in (
        "TOKENSIGN_SECRET_KEY",
        "TOKENSIGN_DIGEST",
        "TOKENSIGN_SEPARATOR",
        "TOKENSIGN_MAX_AGE_SECONDS",
        "TOKENSIGN_API_TOKEN",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.secret_key is None
        assert settings.digest == "sha256"
        assert settings.separator == ":"
        assert settings.max_age == timedelta(0)
        assert settings.api_port == 8899

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("TOKENSIGN_SECRET_KEY", "env-secret")
        monkeypatch.setenv("TOKENSIGN_DIGEST", "sha1")
        monkeypatch.setenv("TOKENSIGN_MAX_AGE_SECONDS", "90")
        settings = Settings()
        assert settings.secret_key.get_secret_value() == "env-secret"
        assert settings.digest == "sha1"
        assert settings.max_age == timedelta(seconds=90)

    def test_reads_dotenv(self, tmp_path):
        (tmp_path / ".env").write_text("TOKENSIGN_SECRET_KEY=from-dotenv\n")
        assert Settings().secret_key.get_secret_value() == "from-dotenv"

    def test_secret_not_in_repr(self):
        settings = Settings(secret_key="hunter2")
        assert "hunter2" not in repr(settings)

    @pytest.mark.parametrize("value", ["-1", "1e13", "1e300"])
    def test_max_age_bounds(self, monkeypatch, value):
        monkeypatch.setenv("TOKENSIGN_MAX_AGE_SECONDS", value)
        with pytest.raises(ValidationError):
            Settings()

    def test_max_age_upper_bound_fits_timedelta(self):
        assert Settings(max_age_seconds=1e12).max_age == timedelta(seconds=1e12)

    def test_api_token_is_secret(self, monkeypatch):
        monkeypatch.setenv("TOKENSIGN_API_TOKEN", "bearer-value")
        settings = Settings()
        assert settings.api_token.get_secret_value() == "bearer-value"
        assert "bearer-value" not in repr(settings)

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestBuildSigner:
    def test_builds_from_secret(self):
        settings = Settings(secret_key="k", digest="sha512", separator=".")
        signer = settings.build_signer()
        assert signer.digest == "sha512"
        assert signer.separator == "."
        assert signer.verify(signer.sign("x")) == "x"

    def test_override_key(self):
        settings = Settings(secret_key="configured")
        token = settings.build_signer("override").sign("x")
        assert Settings(secret_key="override").build_signer().verify(token) == "x"

    def test_missing_secret(self):
        with pytest.raises(InvalidKey):
            Settings().build_signer()

    def test_each_call_builds_a_new_signer(self):
        settings = Settings(secret_key="k")
        assert settings.build_signer() is not settings.build_signer()
