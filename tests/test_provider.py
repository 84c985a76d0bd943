"""
test_provider.py — Unit Tests for Configuration and Encrypter Construction
============================================================================
"""

import logging

import pytest

from encrypter.config import Settings
from encrypter.core.encryption import Cipher, Encrypter
from encrypter.core.errors import InvalidKeyLength, UnsupportedAlgorithm
from encrypter.provider import build_encrypter, format_key, parse_key


@pytest.fixture
def clean_env(monkeypatch):
    monkeypatch.delenv("APP_KEY", raising=False)
    monkeypatch.delenv("APP_CIPHER", raising=False)
    return monkeypatch


class TestSettings:
    """Tests for environment configuration."""

    def test_defaults(self, clean_env):
        """AES-256-CBC with no key when nothing is set."""
        settings = Settings()
        assert settings.CIPHER == "AES-256-CBC"
        assert settings.KEY == ""

    def test_from_environment(self, clean_env):
        clean_env.setenv("APP_CIPHER", "AES-128-CBC")
        clean_env.setenv("APP_KEY", "0123456789abcdef")
        settings = Settings()
        assert settings.CIPHER == "AES-128-CBC"
        assert settings.KEY == "0123456789abcdef"


class TestKeyFormat:
    """Tests for APP_KEY encoding."""

    def test_format_and_parse(self):
        """A formatted binary key parses back to the same bytes."""
        key = bytes(range(32))
        assert format_key(key).startswith("base64:")
        assert parse_key(format_key(key)) == key

    def test_plain_text_key(self):
        assert parse_key("0123456789abcdef") == b"0123456789abcdef"

    def test_invalid_base64_key(self):
        with pytest.raises(InvalidKeyLength, match="not valid base64"):
            parse_key("base64:***")


class TestBuildEncrypter:
    """Tests for building an Encrypter from configuration."""

    def test_configured_key(self, clean_env):
        """The configured key and cipher are used."""
        key = Encrypter.generate_key(Cipher.AES_128_CBC)
        clean_env.setenv("APP_CIPHER", "AES-128-CBC")
        clean_env.setenv("APP_KEY", format_key(key))

        encrypter = build_encrypter()
        assert encrypter.cipher is Cipher.AES_128_CBC
        assert Encrypter(key, "AES-128-CBC").decrypt(encrypter.encrypt(b"shared")) == b"shared"

    def test_generated_key(self, clean_env, caplog):
        """Without APP_KEY a key is generated and a warning logged."""
        with caplog.at_level(logging.WARNING, logger="encrypter.provider"):
            encrypter = build_encrypter()
        assert encrypter.cipher is Cipher.AES_256_CBC
        assert encrypter.decrypt(encrypter.encrypt(b"data")) == b"data"
        assert "APP_KEY is not set" in caplog.text

    def test_explicit_settings(self, clean_env):
        """Settings passed in take precedence over the environment."""
        settings = Settings()
        settings.CIPHER = "AES-128-CBC"
        settings.KEY = "0123456789abcdef"
        assert build_encrypter(settings).cipher is Cipher.AES_128_CBC

    def test_wrong_key_length(self, clean_env):
        clean_env.setenv("APP_KEY", "too-short")
        with pytest.raises(InvalidKeyLength):
            build_encrypter()

    def test_unsupported_cipher(self, clean_env):
        clean_env.setenv("APP_CIPHER", "AES-256-GCM")
        with pytest.raises(UnsupportedAlgorithm):
            build_encrypter()

    def test_key_not_logged(self, clean_env, caplog):
        """Key bytes never reach the log."""
        clean_env.setenv("APP_KEY", "0123456789abcdef0123456789abcdef")
        with caplog.at_level(logging.DEBUG):
            encrypter = build_encrypter()
            encrypter.decrypt(encrypter.encrypt(b"payload"))
        assert "0123456789abcdef" not in caplog.text
