"""
Authentication routes.

Summary
-------
Endpoints include:
  - Register
  - Login
  - Logout
  - Forgot password
  - Reset password
  - Refresh token

Register, login and refresh set the access token in an HTTP-only cookie in
addition to returning the token pair; logout clears that cookie. Errors are
not caught here; they reach the exception handlers registered on the app.
"""

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED

from blog_backend.configs.settings import LOGOUT_MESSAGE
from blog_backend.dependencies import AuthServiceDep
from blog_backend.managers import limiter
from blog_backend.schemas.auth import (
    AuthResult,
    ForgotPasswordRequest,
    MessageResponse,
    PasswordResetIssued,
    RefreshTokenRequest,
    ResetPasswordRequest,
    SigninRequest,
    SignupRequest,
)
from blog_backend.utils.cookies import clear_auth_cookie, set_auth_cookie

router = APIRouter(prefix="/auth", tags=["🔐 Auth"])

_RATE_LIMITED = {
    429: {
        "description": "Rate limit exceeded",
        "content": {"application/json": {"example": {"detail": "Rate limit exceeded"}}},
    },
}


@router.post(
    "/register",
    response_class=ORJSONResponse,
    response_model=AuthResult,
    status_code=HTTP_201_CREATED,
    summary="Register a new user",
    description="Create an account and sign it in.",
    responses={
        409: {
            "description": "Conflict",
            "content": {"application/json": {"example": {"detail": "Email is already registered"}}},
        },
        **_RATE_LIMITED,
    },
    operation_id="auth_register",
)
@limiter.limit("5/hour")
async def register(
    request: Request,
    response: Response,
    payload: SignupRequest,
    auth_service: AuthServiceDep,
) -> AuthResult:
    """
    Register a new user.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response the auth cookie is set on.
    payload : SignupRequest
        Registration data.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    AuthResult
        Token pair and the created user's profile.
    """
    result = await auth_service.signup(payload)
    set_auth_cookie(response, result.access_token)
    return result


@router.post(
    "/login",
    response_class=ORJSONResponse,
    response_model=AuthResult,
    summary="Login with email and password",
    responses={
        401: {
            "description": "Unauthorized",
            "content": {"application/json": {"example": {"detail": "Invalid email or password"}}},
        },
        **_RATE_LIMITED,
    },
    operation_id="auth_login",
)
@limiter.limit("5/minute")
async def login(
    request: Request,
    response: Response,
    payload: SigninRequest,
    auth_service: AuthServiceDep,
) -> AuthResult:
    """
    Login with email and password.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response the auth cookie is set on.
    payload : SigninRequest
        Credentials.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    AuthResult
        Token pair and the user's profile.

    Raises
    ------
    InvalidCredentialsError
        If the email is unknown or the password is wrong.
    """
    result = await auth_service.signin(payload.email, payload.password.get_secret_value())
    set_auth_cookie(response, result.access_token)
    return result


@router.post(
    "/logout",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Logout",
    description="Clear the auth cookie. Tokens are stateless, so nothing is revoked server side.",
    operation_id="auth_logout",
)
async def logout(response: Response) -> MessageResponse:
    clear_auth_cookie(response)
    return MessageResponse(message=LOGOUT_MESSAGE)


@router.post(
    "/forgot-password",
    response_class=ORJSONResponse,
    response_model=PasswordResetIssued,
    response_model_exclude_none=True,
    summary="Request a password reset",
    description=(
        "Issue a password reset token. The response is identical for unknown emails."
    ),
    responses={**_RATE_LIMITED},
    operation_id="auth_forgot_password",
)
@limiter.limit("3/hour")
async def forgot_password(
    request: Request,
    response: Response,
    payload: ForgotPasswordRequest,
    auth_service: AuthServiceDep,
) -> PasswordResetIssued:
    return await auth_service.forgot_password(payload.email)


@router.post(
    "/reset-password/{reset_token}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Reset password",
    responses={
        400: {
            "description": "Bad request",
            "content": {
                "application/json": {
                    "example": {"detail": "Password reset token is invalid or has expired"},
                },
            },
        },
        **_RATE_LIMITED,
    },
    operation_id="auth_reset_password",
)
@limiter.limit("5/hour")
async def reset_password(
    request: Request,
    response: Response,
    reset_token: str,
    payload: ResetPasswordRequest,
    auth_service: AuthServiceDep,
) -> MessageResponse:
    """
    Set a new password with a reset token.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for the rate limiter.
    reset_token : str
        Token issued by forgot-password.
    payload : ResetPasswordRequest
        The new password.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    MessageResponse
        Confirmation message.
    """
    return await auth_service.reset_password(
        reset_token,
        payload.new_password.get_secret_value(),
    )


@router.post(
    "/refresh-token",
    response_class=ORJSONResponse,
    response_model=AuthResult,
    summary="Refresh tokens",
    description="Exchange a refresh token for a new token pair.",
    responses={
        401: {
            "description": "Unauthorized",
            "content": {
                "application/json": {"example": {"detail": "Invalid or expired refresh token"}},
            },
        },
        **_RATE_LIMITED,
    },
    operation_id="auth_refresh_token",
)
@limiter.limit("10/minute")
async def refresh_token(
    request: Request,
    response: Response,
    payload: RefreshTokenRequest,
    auth_service: AuthServiceDep,
) -> AuthResult:
    result = await auth_service.refresh_access_token(payload.refresh_token)
    set_auth_cookie(response, result.access_token)
    return result
