"""Token Cipher Exceptions.

TokenCipher 구현체가 발생시키는 예외입니다.
"""

from apps.social_auth.application.common.exceptions.base import ApplicationError


class EncryptionConfigError(ApplicationError):
    """암호화 키 설정 오류 (누락 또는 길이 불일치)."""


class DecryptionError(ApplicationError):
    """암호문 형식 오류 또는 무결성 검증 실패."""
