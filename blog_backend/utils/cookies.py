"""Auth cookie helpers."""

from starlette.responses import Response

from blog_backend.configs import settings


def set_auth_cookie(response: Response, access_token: str) -> None:
    """
    Store the access token in an HTTP-only cookie.

    The cookie lives as long as the access token itself.

    Args:
        response: Outgoing response
        access_token: Encoded JWT access token
    """
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=access_token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite=settings.AUTH_COOKIE_SAMESITE,
        domain=settings.AUTH_COOKIE_DOMAIN,
        path="/",
    )


def clear_auth_cookie(response: Response) -> None:
    """Expire the auth cookie on the client."""
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite=settings.AUTH_COOKIE_SAMESITE,
        domain=settings.AUTH_COOKIE_DOMAIN,
        path="/",
    )
