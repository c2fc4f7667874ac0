"""
User model for journal owners.

A user signs in either with email and password or through an OAuth
provider; both paths resolve to the same row when the emails match.
"""

from typing import Optional

from sqlalchemy import Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class User(BaseModel):
    """Journal user with local and/or OAuth credentials."""

    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("oauth_provider", "oauth_provider_id", name="uq_users_oauth_identity"),
        Index("idx_users_oauth_email", "oauth_email"),
    )

    # Local credentials (both empty for OAuth-only users)
    email: Mapped[Optional[str]] = mapped_column(String(255), unique=True, nullable=True, index=True)
    password_hash: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # OAuth identity
    oauth_provider: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    oauth_provider_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    oauth_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Profile
    display_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    profile_image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    @property
    def contact_email(self) -> Optional[str]:
        """Email to show for the user, whichever sign-in path supplied it."""
        return self.email or self.oauth_email

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.contact_email}, provider={self.oauth_provider})>"
