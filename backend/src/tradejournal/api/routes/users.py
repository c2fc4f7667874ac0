"""
API routes for the signed-in user's profile.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.logging import get_logger
from ...core.security import CurrentUser
from ...db.session import get_db
from ...schemas.user import UserProfileUpdate, UserRead
from ...services.auth_service import update_profile

logger = get_logger(__name__)

router = APIRouter(prefix="/api/users", tags=["Profile"])


@router.get("/me", response_model=UserRead)
async def get_profile(current_user: CurrentUser) -> UserRead:
    """Profile of the signed-in user."""
    return UserRead.model_validate(current_user)


@router.patch("/me", response_model=UserRead)
async def update_my_profile(
    payload: UserProfileUpdate,
    current_user: CurrentUser,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserRead:
    """Update display name and/or profile image URL; omitted fields are kept."""
    user = await update_profile(
        db,
        current_user,
        display_name=payload.display_name,
        profile_image_url=payload.profile_image_url,
    )
    logger.info("Profile updated", extra={"action": "update_profile", "user_id": user.id})
    return UserRead.model_validate(user)
