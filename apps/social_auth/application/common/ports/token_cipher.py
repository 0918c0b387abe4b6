"""Token Cipher Port."""

from __future__ import annotations

from typing import Protocol


class TokenCipher(Protocol):
    """토큰 대칭 암호화 인터페이스.

    암호문은 nonce 와 인증 태그를 포함한 자기 기술(self-describing) 문자열입니다.
    """

    def encrypt(self, plaintext: str) -> str:
        ...

    def decrypt(self, ciphertext: str) -> str:
        ...
