"""
hashing.py — HMAC-SHA256 Payload Authentication
==================================================
Computes and verifies the MAC that binds a payload's IV and
ciphertext to the encryption key.

The MAC covers the base64 *strings* of the IV and ciphertext,
concatenated as iv || value, not their decoded bytes. Stored
payloads depend on this exact input.
"""

import hashlib
import hmac


def compute_mac(key: bytes, iv: str, value: str) -> str:
    """
    Compute the payload MAC.

    Args:
        key: Encryption key, also used as the HMAC key.
        iv: Base64-encoded IV, exactly as it appears in the payload.
        value: Base64-encoded ciphertext, exactly as it appears in the payload.

    Returns:
        Hexadecimal HMAC-SHA256 digest (64 characters).
    """
    message = (iv + value).encode("utf-8")
    return hmac.new(key, message, hashlib.sha256).hexdigest()


def macs_equal(expected: str, given: str) -> bool:
    """Constant-time comparison of two MAC strings; unencodable input never matches."""
    try:
        return hmac.compare_digest(expected.encode("utf-8"), given.encode("utf-8"))
    except UnicodeEncodeError:
        return False
