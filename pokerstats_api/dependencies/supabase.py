import logging

from supabase import Client, create_client

from pokerstats_api.config import get_settings

logger = logging.getLogger(__name__)


def get_anonymous_supabase_client() -> Client:
    """Create a fresh Supabase client with no user session.

    A new client is returned on every call because signing in stores the
    session on the client instance.
    """
    settings = get_settings()
    logger.debug("Creating anonymous Supabase client")
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_API_KEY)


def get_authenticated_supabase_client(access_token: str) -> Client:
    """Create a Supabase client authenticated with the user's JWT.

    This allows RLS policies that check auth.uid() to work correctly.
    """
    settings = get_settings()
    logger.debug("Creating authenticated Supabase client with user JWT")
    client = create_client(settings.SUPABASE_URL, settings.SUPABASE_API_KEY)
    client.postgrest.auth(access_token)
    return client
