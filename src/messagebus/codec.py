"""
Envelope codec: JSON serialization with optional symmetric encryption.

Without a key the envelope is plain canonical JSON. With a key the JSON bytes
are sealed with AES-256-GCM under a fresh random nonce; the key itself is
derived from the passphrase with PBKDF2-HMAC-SHA256, so the same passphrase
always yields the same key.

Encrypted envelope layout::

    +---------+-------------+---------------------------+
    | version | nonce (12B) | ciphertext || tag (16B)   |
    +---------+-------------+---------------------------+

Example:
    >>> codec = EnvelopeCodec("s3cret")
    >>> data = codec.encrypt({"a": 1})
    >>> codec.decrypt(data)
    {'a': 1}
"""

from __future__ import annotations

import functools
import json
import os
from typing import Any

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from messagebus.exceptions import CodecError
from messagebus.serialization import json_dumps, json_loads

ENVELOPE_VERSION = b"\x01"
NONCE_SIZE = 12
TAG_SIZE = 16
KEY_SIZE = 32
KDF_ITERATIONS = 200_000
KDF_SALT = b"messagebus.envelope.v1"

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_ENCRYPTED = "application/octet-stream"


@functools.lru_cache(maxsize=32)
def derive_key(passphrase: str) -> bytes:
    """
    Derive a 256-bit AES key from a passphrase.

    Args:
        passphrase: Configured encryption key

    Returns:
        32 raw key bytes, identical for identical passphrases
    """
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_SIZE,
        salt=KDF_SALT,
        iterations=KDF_ITERATIONS,
    )
    return kdf.derive(passphrase.encode("utf-8"))


class EnvelopeCodec:
    """
    Encodes payloads to envelope bytes and back.

    ``decrypt(encrypt(m)) == m`` holds for every JSON-native payload,
    with or without a key.

    Attributes:
        encrypted: Whether a key is configured
        content_type: AMQP content type matching the envelope format
    """

    def __init__(self, encryption_key: str | None = None) -> None:
        """
        Initialize the codec.

        Args:
            encryption_key: Passphrase enabling encryption, or None for plaintext
        """
        self._aead: AESGCM | None = None
        if encryption_key is not None:
            self._aead = AESGCM(derive_key(encryption_key))

    @property
    def encrypted(self) -> bool:
        return self._aead is not None

    @property
    def content_type(self) -> str:
        return CONTENT_TYPE_ENCRYPTED if self.encrypted else CONTENT_TYPE_JSON

    def encrypt(self, payload: Any) -> bytes:
        """
        Serialize and, when a key is configured, encrypt a payload.

        Args:
            payload: JSON-serializable value (None included)

        Returns:
            Envelope bytes

        Raises:
            CodecError: If the payload cannot be serialized
        """
        try:
            plaintext = json_dumps(payload)
        except (TypeError, ValueError) as e:
            raise CodecError("encode", str(e)) from e

        if self._aead is None:
            return plaintext

        nonce = os.urandom(NONCE_SIZE)
        return ENVELOPE_VERSION + nonce + self._aead.encrypt(nonce, plaintext, ENVELOPE_VERSION)

    def decrypt(self, data: bytes) -> Any:
        """
        Decrypt (when a key is configured) and parse envelope bytes.

        Args:
            data: Envelope bytes as received from the broker

        Returns:
            The decoded payload

        Raises:
            CodecError: If the bytes are not a valid envelope for the
                configured key, or do not contain valid JSON
        """
        data = bytes(data)

        if self._aead is not None:
            if len(data) < len(ENVELOPE_VERSION) + NONCE_SIZE + TAG_SIZE:
                raise CodecError("decode", f"envelope too short ({len(data)} bytes)")
            version = data[:1]
            if version != ENVELOPE_VERSION:
                raise CodecError("decode", f"unsupported envelope version {version!r}")
            nonce = data[1 : 1 + NONCE_SIZE]
            try:
                data = self._aead.decrypt(nonce, data[1 + NONCE_SIZE :], version)
            except InvalidTag as e:
                raise CodecError("decode", "authentication failed; wrong key or tampered data") from e

        try:
            return json_loads(data)
        except UnicodeDecodeError as e:
            raise CodecError("decode", f"invalid UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise CodecError("decode", f"invalid JSON: {e}") from e

    def __repr__(self) -> str:
        return f"EnvelopeCodec(encrypted={self.encrypted})"


__all__ = [
    "EnvelopeCodec",
    "derive_key",
    "CONTENT_TYPE_JSON",
    "CONTENT_TYPE_ENCRYPTED",
]
