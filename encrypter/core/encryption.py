"""
encryption.py — AES-CBC Authenticated Encryption
===================================================
Encrypts plaintext into a tamper-evident hash string and back.

Encrypt:  random IV → AES-CBC (PKCS7) → HMAC-SHA256 → JSON → base64
Decrypt:  base64 → JSON → validate → verify MAC → AES-CBC (PKCS7)

The MAC is always checked before any decryption is attempted.

Uses PyCryptodome for cryptographic operations.
"""

import logging
import os
from enum import Enum
from typing import Union

from Crypto.Cipher import AES
from Crypto.Util.Padding import pad, unpad

from encrypter.core.errors import (
    DecryptionFailed,
    EncryptionFailed,
    InvalidKeyLength,
    InvalidPayloadShape,
    IVGenerationFailed,
    KeyGenerationFailed,
    MacMismatch,
    UnsupportedAlgorithm,
)
from encrypter.core.hashing import compute_mac, macs_equal
from encrypter.core.payload import (
    Payload,
    b64decode_strict,
    b64encode,
    decode_payload,
    encode_payload,
)

logger = logging.getLogger(__name__)

# AES block size in bytes
BLOCK_SIZE = AES.block_size  # 16 bytes

# IV size in bytes (same for both CBC variants)
IV_SIZE = 16


class Cipher(str, Enum):
    """Supported cipher tags."""

    AES_128_CBC = "AES-128-CBC"
    AES_256_CBC = "AES-256-CBC"

    @property
    def key_size(self) -> int:
        """Required key length in bytes."""
        return 16 if self is Cipher.AES_128_CBC else 32

    @property
    def iv_size(self) -> int:
        return IV_SIZE

    @classmethod
    def from_value(cls, cipher: Union["Cipher", str]) -> "Cipher":
        """
        Normalise a cipher tag.

        Raises:
            UnsupportedAlgorithm: If the tag is not a supported cipher.
        """
        if isinstance(cipher, cls):
            return cipher
        try:
            return cls(cipher)
        except (ValueError, TypeError) as exc:
            raise UnsupportedAlgorithm(
                "Only AES-128-CBC and AES-256-CBC are supported"
            ) from exc


def _as_bytes(data: Union[bytes, bytearray, str]) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def supported(key: Union[bytes, str], cipher: Union[Cipher, str]) -> bool:
    """
    Check whether a key has the right length for a cipher.

    Args:
        key: Candidate key (text keys are measured as UTF-8 bytes).
        cipher: Cipher tag.

    Returns:
        True if the key length matches the cipher's key size.

    Raises:
        UnsupportedAlgorithm: If the cipher is not supported.
    """
    return len(_as_bytes(key)) == Cipher.from_value(cipher).key_size


def generate_key(cipher: Union[Cipher, str] = Cipher.AES_256_CBC) -> bytes:
    """
    Generate a cryptographically secure random key for a cipher.

    Returns:
        16 bytes for AES-128-CBC, 32 bytes for AES-256-CBC.

    Raises:
        UnsupportedAlgorithm: If the cipher is not supported.
        KeyGenerationFailed: If the OS random source is unavailable.
    """
    cipher = Cipher.from_value(cipher)
    try:
        key = os.urandom(cipher.key_size)
    except (OSError, NotImplementedError) as exc:
        raise KeyGenerationFailed("Unable to generate encryption key") from exc
    logger.info("Generated new %s encryption key", cipher.value)
    return key


class Encrypter:
    """
    Encrypts and decrypts hash strings with one key and cipher.

    Instances are immutable and hold no per-call state, so one
    Encrypter can be shared between threads.
    """

    __slots__ = ("_key", "_cipher")

    generate_key = staticmethod(generate_key)
    supported = staticmethod(supported)

    def __init__(
        self,
        key: Union[bytes, str],
        cipher: Union[Cipher, str] = Cipher.AES_128_CBC,
    ):
        """
        Args:
            key: Secret key; 16 bytes for AES-128-CBC, 32 for AES-256-CBC.
            cipher: Cipher tag.

        Raises:
            UnsupportedAlgorithm: If the cipher is not supported.
            InvalidKeyLength: If the key length does not match the cipher.
        """
        cipher = Cipher.from_value(cipher)
        key = _as_bytes(key)
        if len(key) != cipher.key_size:
            raise InvalidKeyLength(
                f"{cipher.value} requires a {cipher.key_size}-byte key, got {len(key)}"
            )
        object.__setattr__(self, "_key", key)
        object.__setattr__(self, "_cipher", cipher)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def cipher(self) -> Cipher:
        return self._cipher

    def __repr__(self) -> str:
        return f"Encrypter(cipher={self._cipher.value!r})"

    def encrypt(self, plaintext: Union[bytes, str]) -> str:
        """
        Encrypt plaintext into a hash string.

        Args:
            plaintext: Raw bytes to encrypt; text is encoded as UTF-8.

        Returns:
            Base64 hash string carrying the IV, ciphertext and MAC.

        Raises:
            IVGenerationFailed: If the OS random source is unavailable.
            EncryptionFailed: If the block cipher fails.
            SerializationFailed: If the payload cannot be encoded.
        """
        data = _as_bytes(plaintext)

        try:
            iv = os.urandom(IV_SIZE)
        except (OSError, NotImplementedError) as exc:
            raise IVGenerationFailed("Could not create an initialization vector") from exc

        try:
            cipher = AES.new(self._key, AES.MODE_CBC, iv)
            ciphertext = cipher.encrypt(pad(data, BLOCK_SIZE))
        except (ValueError, TypeError) as exc:
            raise EncryptionFailed("Unable to encrypt the data") from exc

        iv_text = b64encode(iv)
        value_text = b64encode(ciphertext)
        payload = Payload(
            iv=iv_text,
            value=value_text,
            mac=compute_mac(self._key, iv_text, value_text),
        )
        result = encode_payload(payload)
        logger.debug(
            "Encrypted %d bytes -> %d byte hash (%s)",
            len(data),
            len(result),
            self._cipher.value,
        )
        return result

    def decrypt(self, hash: Union[str, bytes]) -> bytes:
        """
        Verify and decrypt a hash string.

        Args:
            hash: Value previously returned by encrypt().

        Returns:
            The original plaintext bytes.

        Raises:
            MalformedPayload: If the hash is not base64-encoded JSON.
            InvalidPayloadShape: If fields are missing or the IV length is wrong.
            MacMismatch: If the payload was tampered with or uses another key.
            DecryptionFailed: If the ciphertext cannot be decrypted.
        """
        payload = decode_payload(hash)

        try:
            iv = b64decode_strict(payload.iv)
        except ValueError as exc:
            logger.warning("Rejected payload: IV is not valid base64")
            raise InvalidPayloadShape("The payload is invalid") from exc
        if len(iv) != self._cipher.iv_size:
            logger.warning(
                "Rejected payload: IV is %d bytes, expected %d",
                len(iv),
                self._cipher.iv_size,
            )
            raise InvalidPayloadShape("The payload is invalid")

        expected = compute_mac(self._key, payload.iv, payload.value)
        if not macs_equal(expected, payload.mac):
            logger.warning("Rejected payload: MAC verification failed")
            raise MacMismatch("The MAC of the payload is invalid")

        try:
            ciphertext = b64decode_strict(payload.value)
            cipher = AES.new(self._key, AES.MODE_CBC, iv)
            plaintext = unpad(cipher.decrypt(ciphertext), BLOCK_SIZE)
        except ValueError as exc:
            raise DecryptionFailed("Unable to decrypt the data") from exc

        logger.debug(
            "Decrypted %d byte hash -> %d bytes (%s)",
            len(hash),
            len(plaintext),
            self._cipher.value,
        )
        return plaintext

    def encrypt_string(self, text: str) -> str:
        """Encrypt a text value (UTF-8)."""
        return self.encrypt(text.encode("utf-8"))

    def decrypt_string(self, hash: Union[str, bytes]) -> str:
        """
        Decrypt a hash produced from text.

        Raises:
            DecryptionFailed: If the plaintext is not valid UTF-8.
        """
        plaintext = self.decrypt(hash)
        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecryptionFailed("Decrypted data is not valid UTF-8") from exc
