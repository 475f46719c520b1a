from fastapi import APIRouter, Depends, Request, status

from gateway.core.exceptions import InvalidRequestFormat
from gateway.routes.dependencies import get_admin_authenticator
from gateway.schemas.responses import ErrorResponse, SuccessResponse
from gateway.services.admin_auth import AdminAuthenticator
from gateway.services.validation import decode_json_object

router = APIRouter()


@router.post(
    "/admin/auth",
    response_model=SuccessResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
    summary="Verify the admin password",
)
async def admin_auth(
    request: Request,
    authenticator: AdminAuthenticator = Depends(get_admin_authenticator),
) -> SuccessResponse:
    payload = decode_json_object(await request.body())

    password = payload.get("password")
    if password is None:
        password = ""
    if not isinstance(password, str):
        raise InvalidRequestFormat()

    authenticator.authenticate(password)
    return SuccessResponse(message="Authentication successful")
