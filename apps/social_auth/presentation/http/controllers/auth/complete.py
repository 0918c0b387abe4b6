"""Complete Login Controller.

딥링크로 받은 일회용 코드를 세션 토큰으로 교환합니다.
"""

from fastapi import APIRouter, Depends, Response

from apps.social_auth.application.oauth.commands import CompleteLoginInteractor
from apps.social_auth.presentation.http.schemas.auth import (
    CompleteLoginBody,
    CompleteLoginResponse,
)
from apps.social_auth.setup.dependencies import get_complete_login_interactor

router = APIRouter()

NO_STORE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, private",
    "Pragma": "no-cache",
    "Expires": "0",
}


@router.post(
    "/complete",
    response_model=CompleteLoginResponse,
    summary="일회용 코드 교환",
)
async def complete_login(
    body: CompleteLoginBody,
    response: Response,
    interactor: CompleteLoginInteractor = Depends(get_complete_login_interactor),
) -> CompleteLoginResponse:
    payload = await interactor.execute(body.code)
    response.headers.update(NO_STORE_HEADERS)
    return CompleteLoginResponse(token=payload.token, provider=payload.provider.value)
