"""JWT Session Token Issuer.

SessionTokenIssuer 포트의 구현체입니다. 앱 세션 토큰은 ``{"id": user_id}`` 를 담은
HS256 JWT 이며 기본 30일간 유효합니다.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from apps.social_auth.application.common.exceptions import ApplicationError


class InvalidSessionTokenError(ApplicationError):
    """세션 토큰 검증 실패."""


class JwtSessionTokenIssuer:
    """python-jose 기반 세션 토큰 발급기."""

    def __init__(
        self,
        *,
        secret_key: str,
        algorithm: str = "HS256",
        expire_days: int = 30,
    ) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_days = expire_days

    def issue(self, user_id: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "id": user_id,
            "sub": user_id,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(days=self.expire_days)).timestamp()),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> str:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError as exc:
            raise InvalidSessionTokenError("Session token expired") from exc
        except JWTError as exc:
            raise InvalidSessionTokenError("Invalid session token") from exc

        user_id = payload.get("id") or payload.get("sub")
        if not user_id:
            raise InvalidSessionTokenError("Session token has no subject")
        return str(user_id)
