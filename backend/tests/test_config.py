"""Tests for settings, security helpers, logging and entry points."""

from __future__ import annotations

import importlib
import logging
from unittest.mock import patch

import pytest

from mywallet.core.config import LOCALHOST_ORIGINS, Settings
from mywallet.core.exceptions import ConfigurationError
from mywallet.core.logging import setup_logging
from mywallet.core.security import generate_token, hash_password, is_well_formed_token, verify_password


class TestSettingsFromEnv:
    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.database_url == "file://./data"
        assert settings.port == 5000
        assert settings.session_ttl_minutes is None
        assert settings.bcrypt_rounds == 10
        assert settings.cors_origins == LOCALHOST_ORIGINS

    def test_reads_environment(self):
        settings = Settings.from_env(
            {
                "DATABASE_URL": "firestore://wallet-prod",
                "PORT": "8080",
                "CORS_ORIGINS": "https://wallet.example.com, https://admin.example.com",
                "SESSION_TTL_MINUTES": "60",
                "LOG_LEVEL": "DEBUG",
            }
        )
        assert settings.database_url == "firestore://wallet-prod"
        assert settings.port == 8080
        assert settings.cors_origins == ["https://wallet.example.com", "https://admin.example.com"]
        assert settings.session_ttl_minutes == 60
        assert settings.log_level == "DEBUG"

    def test_zero_ttl_means_no_expiry(self):
        assert Settings.from_env({"SESSION_TTL_MINUTES": "0"}).session_ttl_minutes is None

    def test_bad_port(self):
        with pytest.raises(ConfigurationError):
            Settings.from_env({"PORT": "http"})


class TestPasswordHashing:
    def test_hash_verifies(self):
        hashed = hash_password("abc", rounds=4)
        assert hashed != "abc"
        assert verify_password("abc", hashed)
        assert not verify_password("abd", hashed)

    def test_same_password_different_salts(self):
        assert hash_password("abc", rounds=4) != hash_password("abc", rounds=4)

    def test_garbage_hash_does_not_verify(self):
        assert not verify_password("abc", "plaintext")


class TestTokens:
    def test_generated_tokens_are_well_formed(self):
        token = generate_token()
        assert is_well_formed_token(token)
        assert len(token) == 43

    @pytest.mark.parametrize("token", [None, "", "abc", "a b c d e f g h i j", "x" * 200, "../../etc/passwd"])
    def test_malformed_tokens(self, token):
        assert not is_well_formed_token(token)


class TestLogging:
    def test_setup_is_idempotent(self):
        logger = setup_logging("DEBUG")
        handlers = list(logger.handlers)
        again = setup_logging("WARNING")
        assert again is logger
        assert again.handlers == handlers
        assert again.level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        assert setup_logging("chatty").level == logging.INFO


class TestEntryPoints:
    def test_importing_main_has_no_side_effects(self):
        import mywallet.main

        with patch("mywallet.core.config.load_dotenv") as mock_load_dotenv:
            module = importlib.reload(mywallet.main)

        mock_load_dotenv.assert_not_called()
        assert not hasattr(module, "app")

    def test_server_builds_app_through_factory(self, monkeypatch):
        from mywallet import server

        monkeypatch.setenv("PORT", "8123")
        with patch("mywallet.server.load_env_file"), patch("mywallet.server.uvicorn.run") as mock_run:
            server.run()

        args, kwargs = mock_run.call_args
        assert args == ("mywallet.main:create_app",)
        assert kwargs["factory"] is True
        assert kwargs["port"] == 8123

    def test_module_entry_point_delegates_to_server(self):
        from mywallet import __main__ as entry
        from mywallet import server

        assert entry.run is server.run
