"""Application Exceptions.

공통 예외만 포함합니다. 기능별 예외는 각 패키지에서 직접 import하세요:
  - apps.social_auth.application.oauth.exceptions.*
  - apps.social_auth.application.token.exceptions.*
  - apps.social_auth.application.playback.exceptions.*
"""

from apps.social_auth.application.common.exceptions.base import ApplicationError
from apps.social_auth.application.common.exceptions.crypto import (
    DecryptionError,
    EncryptionConfigError,
)

__all__ = ["ApplicationError", "DecryptionError", "EncryptionConfigError"]
