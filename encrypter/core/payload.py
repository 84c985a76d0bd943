"""
payload.py — Encrypted Payload Wire Format
=============================================
Encodes and decodes the self-describing payload string ("hash")
returned by Encrypter.encrypt().

Wire format:
    base64( {"iv":"<base64 IV>","value":"<base64 ciphertext>","mac":"<hex HMAC>"} )

The JSON is compact, keeps the key order iv, value, mac, and never
escapes forward slashes.
"""

import base64
import binascii
import json
import logging
from typing import Union

from pydantic import BaseModel, StrictStr, ValidationError, field_validator

from encrypter.core.errors import InvalidPayloadShape, MalformedPayload, SerializationFailed

logger = logging.getLogger(__name__)


class Payload(BaseModel):
    """One encrypted message. Unknown keys are ignored on input."""

    iv: StrictStr                # Base64-encoded IV
    value: StrictStr             # Base64-encoded AES-CBC ciphertext
    mac: StrictStr               # Hex HMAC-SHA256 over iv || value

    @field_validator("iv", "value", "mac")
    @classmethod
    def _utf8_encodable(cls, text: str) -> str:
        # JSON escapes can produce lone surrogates, which cannot be MACed
        try:
            text.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise ValueError("field is not encodable as UTF-8") from exc
        return text


def b64encode(data: bytes) -> str:
    """Standard base64 with padding, as text."""
    return base64.b64encode(data).decode("ascii")


def b64decode_strict(text: Union[str, bytes]) -> bytes:
    """
    Decode standard base64, rejecting any character outside the alphabet.

    Raises:
        binascii.Error: If the input is not valid base64.
    """
    if isinstance(text, str):
        try:
            text = text.encode("ascii")
        except UnicodeEncodeError as exc:
            raise binascii.Error("Non-ASCII character in base64 input") from exc
    return base64.b64decode(text, validate=True)


def encode_payload(payload: Payload) -> str:
    """
    Serialize a payload to its external hash string.

    Raises:
        SerializationFailed: If the payload cannot be rendered as JSON.
    """
    try:
        document = payload.model_dump_json()
    except ValueError as exc:
        raise SerializationFailed("Could not serialize the encrypted payload") from exc
    return b64encode(document.encode("utf-8"))


def decode_payload(hash: Union[str, bytes]) -> Payload:
    """
    Parse a hash string back into a Payload.

    Only the structure is checked here; IV length and MAC are
    verified by the Encrypter, which knows the cipher and key.

    Raises:
        MalformedPayload: If the hash is not base64 or not a JSON object.
        InvalidPayloadShape: If iv, value or mac is missing or not a string.
    """
    try:
        document = b64decode_strict(hash)
    except (binascii.Error, TypeError) as exc:
        logger.warning("Rejected payload: not valid base64")
        raise MalformedPayload("Could not resolve the payload") from exc

    try:
        data = json.loads(document.decode("utf-8"))
    except (ValueError, RecursionError) as exc:
        logger.warning("Rejected payload: not valid JSON")
        raise MalformedPayload("Could not resolve the payload") from exc

    if not isinstance(data, dict):
        logger.warning("Rejected payload: JSON is a %s, not an object", type(data).__name__)
        raise MalformedPayload("Could not resolve the payload")

    try:
        return Payload.model_validate(data)
    except ValidationError as exc:
        logger.warning("Rejected payload: %d invalid field(s)", exc.error_count())
        raise InvalidPayloadShape("The payload is invalid") from exc
