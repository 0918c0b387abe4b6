"""Auth Schemas.

필드명은 모바일/웹 클라이언트와 맞추기 위해 camelCase alias 를 사용합니다.
"""

from pydantic import BaseModel, ConfigDict, Field


class IssueStateBody(BaseModel):
    """state 발급 요청."""

    model_config = ConfigDict(populate_by_name=True)

    provider: str = Field(..., description="OAuth 프로바이더 (kakao, naver)")
    redirect_uri: str | None = Field(None, alias="redirectUri", description="앱 redirect URI")


class IssueStateResponse(BaseModel):
    """state 발급 응답."""

    model_config = ConfigDict(populate_by_name=True)

    state: str = Field(..., description="OAuth state")
    expires_in_ms: int = Field(..., alias="expiresInMs", description="만료까지 남은 시간 (ms)")


class CompleteLoginBody(BaseModel):
    """일회용 코드 교환 요청."""

    code: str | None = Field(None, description="딥링크로 전달된 일회용 코드")


class CompleteLoginResponse(BaseModel):
    """일회용 코드 교환 응답."""

    success: bool = True
    token: str = Field(..., description="세션 토큰")
    provider: str = Field(..., description="로그인한 프로바이더")
