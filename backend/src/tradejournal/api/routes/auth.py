from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.config import config
from ...core.exceptions import AuthenticationError, ConflictError, to_http_exception
from ...core.logging import get_logger
from ...core.oauth import get_enabled_providers, oauth
from ...core.security import CurrentUser, create_user_token
from ...db.session import get_db
from ...schemas.auth import LoginRequest, ProvidersResponse, RegisterRequest, Token
from ...schemas.base import SuccessResponse
from ...schemas.user import UserRead
from ...services.auth_service import authenticate_user, register_user, resolve_oauth_user

logger = get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


def _set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=config.COOKIE_NAME,
        value=token,
        httponly=True,
        secure=config.COOKIE_SECURE,
        samesite="lax",
        max_age=config.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


def _require_provider(provider: str) -> None:
    enabled = get_enabled_providers()
    if provider not in enabled:
        raise HTTPException(
            status_code=400,
            detail=f"OAuth provider '{provider}' is not configured. Available: {enabled}",
        )


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest, response: Response, db: Annotated[AsyncSession, Depends(get_db)]
) -> Token:
    """
    Creates an account with email and password and signs it in.
    """
    try:
        user = await register_user(db, payload.email, payload.password, payload.display_name)
    except ConflictError as e:
        raise to_http_exception(e) from e

    token = create_user_token(user)
    _set_auth_cookie(response, token)
    return Token(access_token=token)


@router.post("/login", response_model=Token)
async def login(
    payload: LoginRequest, response: Response, db: Annotated[AsyncSession, Depends(get_db)]
) -> Token:
    """
    Authenticates a user and returns a JWT token.
    """
    user = await authenticate_user(db, payload.email, payload.password)
    if not user:
        raise to_http_exception(AuthenticationError("Invalid email or password"))

    token = create_user_token(user)
    _set_auth_cookie(response, token)
    return Token(access_token=token)


@router.post("/logout", response_model=SuccessResponse)
async def logout(response: Response) -> SuccessResponse:
    response.delete_cookie(config.COOKIE_NAME)
    return SuccessResponse()


@router.get("/providers", response_model=ProvidersResponse)
async def list_providers() -> ProvidersResponse:
    """List enabled OAuth providers."""
    return ProvidersResponse(providers=get_enabled_providers())


@router.get("/google")
async def google_login(request: Request):
    """
    Redirects to Google's consent page.
    """
    _require_provider("google")
    client = oauth.create_client("google")
    redirect_uri = str(request.url_for("google_callback"))
    return await client.authorize_redirect(request, redirect_uri)


@router.get("/google/callback", name="google_callback")
async def google_callback(request: Request, db: Annotated[AsyncSession, Depends(get_db)]):
    """
    Handles Google's redirect: resolves or links the user, then returns to
    the frontend with the session cookie set.
    """
    _require_provider("google")
    failure = RedirectResponse(url=f"{config.OAUTH_REDIRECT_URL}/login?error=oauth_failed")

    try:
        client = oauth.create_client("google")
        token = await client.authorize_access_token(request)
        user_info = token.get("userinfo") or await client.userinfo(token=token)
    except Exception as e:
        logger.error(f"Google OAuth callback error: {e}")
        return failure

    provider_id = user_info.get("sub")
    email = user_info.get("email")
    if not provider_id or not email:
        logger.error("Google OAuth response is missing the account id or email")
        return failure

    user = await resolve_oauth_user(
        db,
        provider="google",
        provider_id=str(provider_id),
        email=email,
        display_name=user_info.get("name"),
        picture=user_info.get("picture"),
    )

    redirect = RedirectResponse(url=f"{config.OAUTH_REDIRECT_URL}/", status_code=302)
    _set_auth_cookie(redirect, create_user_token(user))
    return redirect


@router.get("/me", response_model=UserRead)
def read_users_me(current_user: CurrentUser) -> UserRead:
    """
    Returns the current authenticated user.
    """
    return UserRead.model_validate(current_user)
