"""
errors.py — Encryption Error Types
=====================================
Every failure raised by the encrypter derives from EncryptionError,
so callers can catch one type when they want uniform handling.

Messages never carry key material or plaintext.
"""


class EncryptionError(Exception):
    """Base exception for all encrypter failures."""


class UnsupportedAlgorithm(EncryptionError, ValueError):
    """Raised when the cipher tag is not AES-128-CBC or AES-256-CBC."""


class InvalidKeyLength(EncryptionError, ValueError):
    """Raised when the key length does not match the cipher."""


class KeyGenerationFailed(EncryptionError):
    """Raised when the secure random source cannot produce a key."""


class IVGenerationFailed(EncryptionError):
    """Raised when the secure random source cannot produce an IV."""


class EncryptionFailed(EncryptionError):
    """Raised when the block cipher fails to encrypt."""


class DecryptionFailed(EncryptionError):
    """Raised when the block cipher fails to decrypt or unpad."""


class SerializationFailed(EncryptionError):
    """Raised when a payload cannot be encoded to the wire format."""


class MalformedPayload(EncryptionError):
    """Raised when a hash is not valid base64 or not a JSON object."""


class InvalidPayloadShape(EncryptionError):
    """Raised when payload fields are missing, mistyped, or the IV has the wrong length."""


class MacMismatch(EncryptionError):
    """Raised when the payload MAC does not verify."""


class NoInstanceAvailable(EncryptionError):
    """Raised when a registry lookup finds no encrypter."""
