"""OAuth configuration for social authentication.

Google is the only provider. When its credentials are missing the app still
starts and email/password sign-in keeps working.

Usage:
    from tradejournal.core.oauth import oauth

    client = oauth.create_client("google")
    return await client.authorize_redirect(request, redirect_uri)
"""

from authlib.integrations.starlette_client import OAuth

from .config import config
from .logging import get_logger

logger = get_logger(__name__)

oauth = OAuth()


def configure_oauth() -> None:
    """
    Register OAuth providers from settings.

    Call this during app startup after settings are loaded.
    """
    if config.google_oauth_enabled:
        oauth.register(
            name="google",
            client_id=config.GOOGLE_CLIENT_ID,
            client_secret=config.GOOGLE_CLIENT_SECRET,
            server_metadata_url="https://accounts.google.com/.well-known/openid-configuration",
            client_kwargs={"scope": "openid email profile"},
        )
        logger.info("Google OAuth configured")
    else:
        logger.warning(
            "Google OAuth not configured (missing GOOGLE_CLIENT_ID or GOOGLE_CLIENT_SECRET); "
            "email/password login still works"
        )


def get_enabled_providers() -> list[str]:
    """Get list of enabled OAuth providers."""
    providers = []
    if config.google_oauth_enabled:
        providers.append("google")
    return providers
