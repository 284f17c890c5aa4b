"""Supabase client for the listing stores."""

from functools import lru_cache

from supabase import Client, create_client

from app.core.config import get_settings
from app.core.errors import ConfigurationError


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    """
    Get the shared Supabase client (cached per process).

    Returns:
        Supabase client authenticated with the service role key

    Raises:
        ConfigurationError: If the client cannot be created from settings
    """
    settings = get_settings()
    try:
        return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
    except Exception as e:
        raise ConfigurationError(f"Failed to initialize Supabase client: {e}") from e


def single_row(response) -> dict | None:
    """Row from a maybe_single() query, or None when nothing matched."""
    if response is None:
        return None
    return response.data or None
