"""
Authentication service: local accounts and OAuth identity resolution.
"""

from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import ConflictError
from ..core.logging import get_logger
from ..core.security import hash_password, verify_password
from ..models.user import User

logger = get_logger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    """Find a user whose local or OAuth email matches."""
    email = normalize_email(email)
    result = await db.execute(
        select(User)
        .where(or_(func.lower(User.email) == email, func.lower(User.oauth_email) == email))
        .order_by(User.id)
        .limit(1)
    )
    return result.scalar_one_or_none()


async def register_user(
    db: AsyncSession, email: str, password: str, display_name: Optional[str] = None
) -> User:
    """
    Create a user with local credentials.

    Raises:
        ConflictError: If any user already holds the email, either as a
            local login or as an OAuth email
    """
    email = normalize_email(email)
    # Matches OAuth-only users through oauth_email as well
    if await get_user_by_email(db, email) is not None:
        raise ConflictError(f"An account with email {email} already exists")

    user = User(email=email, password_hash=hash_password(password), display_name=display_name)
    db.add(user)

    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise ConflictError(f"An account with email {email} already exists") from e
    await db.refresh(user)
    logger.info("User registered", extra={"action": "register", "user_id": user.id})
    return user


async def authenticate_user(db: AsyncSession, email: str, password: str) -> Optional[User]:
    """Return the user if the email/password pair is valid."""
    email = normalize_email(email)
    result = await db.execute(select(User).where(func.lower(User.email) == email))
    user = result.scalar_one_or_none()
    if user is None or not verify_password(password, user.password_hash):
        logger.warning("Failed login attempt", extra={"action": "login"})
        return None
    logger.info("User logged in", extra={"action": "login", "user_id": user.id})
    return user


async def resolve_oauth_user(
    db: AsyncSession,
    provider: str,
    provider_id: str,
    email: str,
    display_name: Optional[str] = None,
    picture: Optional[str] = None,
) -> User:
    """
    Find, link or create the user for an OAuth sign-in.

    1. A user already holding ``(provider, provider_id)`` is returned as is.
    2. Otherwise a user whose email or OAuth email matches gets the provider
       linked to it.
    3. Otherwise a new OAuth-only user is created.
    """
    result = await db.execute(
        select(User).where(User.oauth_provider == provider, User.oauth_provider_id == provider_id)
    )
    user = result.scalar_one_or_none()
    if user is not None:
        return user

    email = normalize_email(email)
    user = await get_user_by_email(db, email)
    if user is not None:
        user.oauth_provider = provider
        user.oauth_provider_id = provider_id
        user.oauth_email = email
        action = "oauth_link"
    else:
        user = User(
            oauth_provider=provider,
            oauth_provider_id=provider_id,
            oauth_email=email,
            display_name=display_name,
        )
        db.add(user)
        action = "oauth_create"

    if picture and not user.profile_image_url:
        user.profile_image_url = picture

    await db.commit()
    await db.refresh(user)
    logger.info(f"OAuth sign-in via {provider}", extra={"action": action, "user_id": user.id})
    return user


async def update_profile(
    db: AsyncSession,
    user: User,
    display_name: Optional[str] = None,
    profile_image_url: Optional[str] = None,
) -> User:
    """Update the profile fields that were provided."""
    if display_name is not None:
        user.display_name = display_name
    if profile_image_url is not None:
        user.profile_image_url = profile_image_url
    await db.commit()
    await db.refresh(user)
    return user
