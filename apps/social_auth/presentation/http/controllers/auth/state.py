"""Social State Controller.

앱 내 소셜 계정 연동용 state 발급 엔드포인트입니다.
"""

from fastapi import APIRouter, Depends, Request

from apps.social_auth.application.oauth.commands import IssueStateInteractor
from apps.social_auth.application.oauth.dto import IssueStateRequest
from apps.social_auth.domain.enums import Provider
from apps.social_auth.presentation.http.auth import get_optional_user_id
from apps.social_auth.presentation.http.schemas.auth import IssueStateBody, IssueStateResponse
from apps.social_auth.presentation.http.utils.fingerprint import get_request_fingerprint
from apps.social_auth.setup.dependencies import get_issue_state_interactor

router = APIRouter()


@router.post(
    "/social/state",
    response_model=IssueStateResponse,
    summary="소셜 연동 state 발급",
)
async def issue_state(
    body: IssueStateBody,
    request: Request,
    user_id: str | None = Depends(get_optional_user_id),
    interactor: IssueStateInteractor = Depends(get_issue_state_interactor),
) -> IssueStateResponse:
    """OAuth state 를 발급합니다.

    로그인 상태면 사용자에, 아니면 요청 fingerprint 에 바인딩됩니다.
    """
    result = await interactor.execute(
        IssueStateRequest(
            provider=Provider.parse_social(body.provider),
            user_id=user_id,
            fingerprint=get_request_fingerprint(request),
            redirect_uri=body.redirect_uri,
        )
    )
    return IssueStateResponse(state=result.state, expires_in_ms=result.expires_in_ms)
