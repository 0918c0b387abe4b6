"""AES-256-GCM Token Cipher.

TokenCipher 포트의 구현체입니다.

암호문 형식: ``<iv_hex>:<tag_hex>:<data_hex>`` (IV 16 bytes, tag 16 bytes).
기존 저장 데이터와 호환되는 형식입니다.
"""

from __future__ import annotations

import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from apps.social_auth.application.common.exceptions import (
    DecryptionError,
    EncryptionConfigError,
)

IV_LENGTH = 16
TAG_LENGTH = 16
KEY_LENGTH = 32


def parse_encryption_key(raw_key: str | None) -> bytes:
    """hex 인코딩된 32 bytes 키를 파싱합니다 (`0x` 접두사 허용).

    Raises:
        EncryptionConfigError: 키 누락, hex 형식 오류, 길이 불일치
    """
    if not raw_key or not raw_key.strip():
        raise EncryptionConfigError("ENCRYPTION_KEY is not configured")

    value = raw_key.strip()
    if value[:2].lower() == "0x":
        value = value[2:]

    try:
        key = bytes.fromhex(value)
    except ValueError:
        raise EncryptionConfigError("ENCRYPTION_KEY must be hex encoded") from None

    if len(key) != KEY_LENGTH:
        raise EncryptionConfigError("ENCRYPTION_KEY must be 32 bytes (64 hex chars)")
    return key


class AesGcmTokenCipher:
    """AES-256-GCM 토큰 암호화.

    키는 호출 시점에 검증하므로 키 설정 오류는 서비스 기동이 아니라
    첫 암호화/복호화 호출에서 EncryptionConfigError 로 드러납니다.
    """

    def __init__(self, raw_key: str | None) -> None:
        self._raw_key = raw_key

    def _aead(self) -> AESGCM:
        return AESGCM(parse_encryption_key(self._raw_key))

    def encrypt(self, plaintext: str) -> str:
        aead = self._aead()
        iv = os.urandom(IV_LENGTH)
        sealed = aead.encrypt(iv, plaintext.encode("utf-8"), None)
        data, tag = sealed[:-TAG_LENGTH], sealed[-TAG_LENGTH:]
        return f"{iv.hex()}:{tag.hex()}:{data.hex()}"

    def decrypt(self, ciphertext: str) -> str:
        aead = self._aead()
        parts = ciphertext.split(":") if isinstance(ciphertext, str) else []
        if len(parts) != 3:
            raise DecryptionError("Invalid encrypted data format")

        try:
            iv, tag, data = (bytes.fromhex(part) for part in parts)
        except ValueError:
            raise DecryptionError("Invalid encrypted data format") from None

        if len(iv) != IV_LENGTH or len(tag) != TAG_LENGTH:
            raise DecryptionError("Invalid encrypted data format")

        try:
            plaintext = aead.decrypt(iv, data + tag, None)
        except InvalidTag:
            raise DecryptionError("Encrypted data failed integrity check") from None
        return plaintext.decode("utf-8")
