"""Unit tests for the envelope codec."""

from __future__ import annotations

import json
from typing import Any

import pytest

from messagebus import CodecError, EnvelopeCodec
from messagebus.codec import (
    CONTENT_TYPE_ENCRYPTED,
    CONTENT_TYPE_JSON,
    ENVELOPE_VERSION,
    NONCE_SIZE,
    TAG_SIZE,
    derive_key,
)

PAYLOADS: list[Any] = [
    None,
    0,
    "text",
    [1, "two", None],
    {"a": 1, "nested": {"list": [True, False], "unicode": "café"}},
]


class TestPlaintextCodec:
    def test_encodes_canonical_json(self) -> None:
        codec = EnvelopeCodec()

        assert codec.encrypt({"b": 1, "a": 2}) == b'{"a":2,"b":1}'
        assert codec.encrypted is False
        assert codec.content_type == CONTENT_TYPE_JSON

    @pytest.mark.parametrize("payload", PAYLOADS)
    def test_decrypt_inverts_encrypt(self, payload: Any) -> None:
        codec = EnvelopeCodec()
        assert codec.decrypt(codec.encrypt(payload)) == payload

    def test_null_payload_is_json_null(self) -> None:
        assert EnvelopeCodec().encrypt(None) == b"null"

    def test_invalid_json_raises_codec_error(self) -> None:
        with pytest.raises(CodecError, match="Cannot decode payload: invalid JSON") as exc_info:
            EnvelopeCodec().decrypt(b"{not json")

        assert exc_info.value.operation == "decode"
        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)

    def test_invalid_utf8_raises_codec_error(self) -> None:
        with pytest.raises(CodecError, match="invalid UTF-8"):
            EnvelopeCodec().decrypt(b"\xff\xfe\x00")

    @pytest.mark.parametrize("payload", [object(), {"x": {1, 2}}, float("nan")])
    def test_unserializable_payload_raises_codec_error(self, payload: Any) -> None:
        with pytest.raises(CodecError, match="Cannot encode payload") as exc_info:
            EnvelopeCodec().encrypt(payload)

        assert exc_info.value.operation == "encode"


class TestEncryptedCodec:
    @pytest.mark.parametrize("payload", PAYLOADS)
    def test_decrypt_inverts_encrypt(self, payload: Any) -> None:
        codec = EnvelopeCodec("s3cret")
        assert codec.decrypt(codec.encrypt(payload)) == payload

    def test_envelope_layout(self) -> None:
        codec = EnvelopeCodec("s3cret")
        plaintext = EnvelopeCodec().encrypt({"a": 1})

        data = codec.encrypt({"a": 1})

        assert codec.encrypted is True
        assert codec.content_type == CONTENT_TYPE_ENCRYPTED
        assert data[:1] == ENVELOPE_VERSION
        assert len(data) == 1 + NONCE_SIZE + len(plaintext) + TAG_SIZE
        assert plaintext not in data

    def test_same_payload_encrypts_differently(self) -> None:
        codec = EnvelopeCodec("s3cret")
        assert codec.encrypt({"a": 1}) != codec.encrypt({"a": 1})

    def test_same_passphrase_interoperates(self) -> None:
        sender = EnvelopeCodec("s3cret")
        receiver = EnvelopeCodec("s3cret")

        assert receiver.decrypt(sender.encrypt({"order": 42})) == {"order": 42}

    def test_wrong_key_fails_authentication(self) -> None:
        data = EnvelopeCodec("s3cret").encrypt({"a": 1})

        with pytest.raises(CodecError, match="authentication failed"):
            EnvelopeCodec("other").decrypt(data)

    def test_tampered_data_fails_authentication(self) -> None:
        codec = EnvelopeCodec("s3cret")
        data = bytearray(codec.encrypt({"a": 1}))
        data[-1] ^= 0x01

        with pytest.raises(CodecError, match="authentication failed"):
            codec.decrypt(bytes(data))

    def test_plaintext_is_rejected(self) -> None:
        with pytest.raises(CodecError):
            EnvelopeCodec("s3cret").decrypt(b'{"a":1}')

    def test_short_envelope_is_rejected(self) -> None:
        with pytest.raises(CodecError, match="envelope too short"):
            EnvelopeCodec("s3cret").decrypt(b"\x01abc")

    def test_unknown_version_is_rejected(self) -> None:
        data = b"\x02" + bytes(NONCE_SIZE + TAG_SIZE + 4)

        with pytest.raises(CodecError, match="unsupported envelope version"):
            EnvelopeCodec("s3cret").decrypt(data)


class TestDeriveKey:
    def test_is_deterministic_and_256_bit(self) -> None:
        assert derive_key("s3cret") == derive_key("s3cret")
        assert len(derive_key("s3cret")) == 32

    def test_differs_per_passphrase(self) -> None:
        assert derive_key("a") != derive_key("b")
