"""Read access to business (issuer) records."""

from typing import Any

from supabase import Client

from app.core.config import get_settings
from app.db.supabase_client import get_supabase, single_row


def get_issuer(entity_id: str, client: Client | None = None) -> dict[str, Any] | None:
    """
    Get an issuer record by id.

    Args:
        entity_id: Issuer id
        client: Supabase client (defaults to the shared one)

    Returns:
        Issuer row, or None if no such issuer
    """
    supabase = client or get_supabase()
    response = (
        supabase.table(get_settings().ISSUERS_TABLE)
        .select("*")
        .eq("id", entity_id)
        .maybe_single()
        .execute()
    )
    return single_row(response)
