"""
interface.py — Encrypter Capability
======================================
Anything that can turn plaintext into a hash string and back.
Callers should depend on this rather than on Encrypter, so another
implementation can be passed in without touching them.
"""

from typing import Protocol, Union, runtime_checkable


@runtime_checkable
class EncrypterInterface(Protocol):
    """Symmetric encrypt/decrypt over opaque hash strings."""

    def encrypt(self, plaintext: Union[bytes, str]) -> str:
        """Encrypt plaintext into a hash string."""
        ...

    def decrypt(self, hash: Union[str, bytes]) -> bytes:
        """Decrypt a hash string back into plaintext bytes."""
        ...
