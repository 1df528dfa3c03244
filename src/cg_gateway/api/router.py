"""Auth API router: sign-up, sign-in, sign-out.

All endpoints return ApiResponse. request_id is read from request.state
(injected by RequestLogMiddleware).

Session/token issuance is not part of this service: sign-in only verifies
credentials, and sign-out clears whatever session cookie the client holds.
"""

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.cg_auth.schemas import SignInRequest, SignUpRequest, UserResponse
from src.cg_auth.service import CredentialService
from src.cg_common.database import get_db_session
from src.cg_common.response import ApiResponse, success_response
from src.cg_gateway.cookies import cookies
from src.cg_gateway.middleware.request_log import get_request_id

router = APIRouter(prefix="/auth", tags=["auth"])
_service = CredentialService()


def get_credential_service() -> CredentialService:
    return _service


@router.post(
    "/sign-up",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse,
    summary="Create a user",
)
async def sign_up(
    request: Request,
    body: SignUpRequest,
    db: AsyncSession = Depends(get_db_session),
    service: CredentialService = Depends(get_credential_service),
) -> ApiResponse:
    async with db.begin():
        user = await service.create_user(
            body.name, body.email, body.password, db, role=body.role
        )

    data = UserResponse.from_user(user)
    return success_response(
        data.model_dump(mode="json"),
        message="User registered successfully",
        request_id=get_request_id(request),
    )


@router.post(
    "/sign-in",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    summary="Verify credentials",
)
async def sign_in(
    request: Request,
    body: SignInRequest,
    db: AsyncSession = Depends(get_db_session),
    service: CredentialService = Depends(get_credential_service),
) -> ApiResponse:
    user = await service.authenticate_user(body.email, body.password, db)

    data = UserResponse.from_user(user)
    return success_response(
        data.model_dump(mode="json"),
        message="User signed in successfully",
        request_id=get_request_id(request),
    )


@router.post(
    "/sign-out",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    summary="Clear the session cookie",
)
async def sign_out(request: Request, response: Response) -> ApiResponse:
    cookies.clear(response, settings.SESSION_COOKIE_NAME)
    return success_response(
        message="User signed out successfully",
        request_id=get_request_id(request),
    )
