"""Spotify Schemas."""

from pydantic import BaseModel, ConfigDict, Field


class SpotifyTokenBody(BaseModel):
    """Spotify authorization code 교환 요청 (PKCE)."""

    code: str = Field(..., min_length=1, description="OAuth 인증 코드")
    code_verifier: str = Field(..., min_length=1, description="PKCE code verifier")
    redirect_uri: str = Field(..., min_length=1, description="인가 요청에 사용한 redirect URI")
    client_id: str | None = Field(None, description="앱 별 Spotify client ID")


class SpotifyRefreshBody(BaseModel):
    """Spotify access token 갱신 요청."""

    client_id: str | None = None


class SpotifyTokenResponse(BaseModel):
    """Spotify 토큰 교환 응답."""

    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(..., alias="accessToken")
    expires_in: int = Field(..., alias="expiresIn")
    scope: str | None = None
    token_type: str = Field(..., alias="tokenType")
    is_premium: bool = Field(False, alias="isPremium")


class SpotifyRefreshResponse(BaseModel):
    """Spotify access token 갱신 응답."""

    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(..., alias="accessToken")
    expires_in: int = Field(..., alias="expiresIn")
    scope: str | None = None
    token_type: str = Field(..., alias="tokenType")
    version: int


class SpotifyRevokeResponse(BaseModel):
    revoked: bool = True


class PremiumStatusResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_premium: bool = Field(..., alias="isPremium")
    product: str | None = None


class SpotifyProfileResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    display_name: str | None = None
    product: str | None = None
    is_premium: bool = Field(..., alias="isPremium")


class PlayBody(BaseModel):
    """재생 요청."""

    uris: list[str] | None = None
    context_uri: str | None = None
    position_ms: int | None = Field(None, ge=0)
    device_id: str | None = None


class SeekBody(BaseModel):
    position_ms: int = Field(..., ge=0)


class VolumeBody(BaseModel):
    volume_percent: int = Field(..., ge=0, le=100)


class TransferBody(BaseModel):
    device_id: str = Field(..., min_length=1)
    play: bool = True


class SuccessResponse(BaseModel):
    success: bool = True
