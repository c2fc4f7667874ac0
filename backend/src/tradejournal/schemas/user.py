"""
User profile schemas for request/response validation.
"""

from typing import Optional

from pydantic import Field

from .base import BaseSchema, BaseUpdateSchema


class UserRead(BaseSchema):
    """Profile returned to the signed-in user. Credentials are never exposed."""

    email: Optional[str] = Field(default=None, description="Local sign-in email")
    oauth_provider: Optional[str] = Field(default=None, description="Linked OAuth provider, if any")
    oauth_email: Optional[str] = Field(default=None, description="Email reported by the OAuth provider")
    display_name: Optional[str] = None
    profile_image_url: Optional[str] = None


class UserProfileUpdate(BaseUpdateSchema):
    display_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    profile_image_url: Optional[str] = Field(default=None, max_length=500)
