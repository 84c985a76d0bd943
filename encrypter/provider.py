"""
provider.py — Encrypter Construction from Configuration
==========================================================
Builds an Encrypter from Settings. If no key is configured a random
one is generated; values encrypted with it cannot be decrypted after
the process exits, so a warning is logged.

Keys in APP_KEY may be plain text or "base64:" followed by the
standard base64 encoding of the key bytes (see format_key()).
"""

import binascii
import logging
from typing import Optional

from encrypter.config import Settings
from encrypter.core.encryption import Cipher, Encrypter, generate_key
from encrypter.core.errors import InvalidKeyLength
from encrypter.core.payload import b64decode_strict, b64encode

logger = logging.getLogger(__name__)

KEY_PREFIX = "base64:"


def format_key(key: bytes) -> str:
    """Render a key in the form accepted by APP_KEY."""
    return KEY_PREFIX + b64encode(key)


def parse_key(value: str) -> bytes:
    """
    Turn an APP_KEY value into key bytes.

    Raises:
        InvalidKeyLength: If a "base64:" key is not valid base64.
    """
    if value.startswith(KEY_PREFIX):
        try:
            return b64decode_strict(value[len(KEY_PREFIX):])
        except binascii.Error as exc:
            raise InvalidKeyLength("APP_KEY has a base64: prefix but is not valid base64") from exc
    return value.encode("utf-8")


def build_encrypter(settings: Optional[Settings] = None) -> Encrypter:
    """
    Create an Encrypter from configuration.

    Args:
        settings: Configuration to use; read from the environment if omitted.

    Returns:
        An Encrypter bound to the configured key and cipher.

    Raises:
        UnsupportedAlgorithm: If APP_CIPHER is not supported.
        InvalidKeyLength: If APP_KEY does not match the cipher.
    """
    if settings is None:
        settings = Settings()

    cipher = Cipher.from_value(settings.CIPHER)
    if settings.KEY:
        key = parse_key(settings.KEY)
    else:
        key = generate_key(cipher)
        logger.warning(
            "APP_KEY is not set; using a generated %s key. "
            "Encrypted values will not be readable after restart.",
            cipher.value,
        )

    encrypter = Encrypter(key, cipher)
    logger.info("Encrypter ready (%s)", cipher.value)
    return encrypter
