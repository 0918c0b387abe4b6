"""Social Account Schemas."""

from pydantic import BaseModel, ConfigDict, Field


class SocialTokenBody(BaseModel):
    """소셜 계정 연동 요청."""

    model_config = ConfigDict(populate_by_name=True)

    code: str = Field(..., min_length=1, description="OAuth 인증 코드")
    state: str = Field(..., min_length=1, description="발급받은 state")
    redirect_uri: str | None = Field(None, alias="redirectUri", description="앱 redirect URI")


class ProviderUser(BaseModel):
    """프로바이더 사용자 정보."""

    id: str
    email: str | None = None
    name: str | None = None
    profile_image: str | None = None


class SocialTokenResponse(BaseModel):
    """소셜 계정 연동 응답."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    provider: str
    access_token: str = Field(..., alias="accessToken")
    expires_in: int = Field(..., alias="expiresIn")
    provider_user: ProviderUser | None = Field(None, alias="providerUser")


class SocialRefreshResponse(BaseModel):
    """access token 갱신 응답."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    access_token: str = Field(..., alias="accessToken")
    expires_in: int = Field(..., alias="expiresIn")


class SocialRevokeResponse(BaseModel):
    """연동 해제 응답."""

    success: bool = True
    revoked: bool = True


class SocialProfileResponse(BaseModel):
    """저장된 토큰으로 조회한 프로필."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    provider: str
    provider_user: ProviderUser = Field(..., alias="providerUser")
