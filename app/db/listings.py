"""Read access to catalog (listing) records."""

from typing import Any

from supabase import Client

from app.core.config import get_settings
from app.db.supabase_client import get_supabase, single_row


def get_listing(document_id: str, client: Client | None = None) -> dict[str, Any] | None:
    """Get a listing record by instrument id, or None."""
    supabase = client or get_supabase()
    response = (
        supabase.table(get_settings().LISTING_TABLE)
        .select("*")
        .eq("instrumentid", document_id)
        .maybe_single()
        .execute()
    )
    return single_row(response)


def resolve_entity_id(listing: dict[str, Any] | None) -> str | None:
    """Issuer id owning a listing."""
    if not listing:
        return None
    entity_id = listing.get("instrumentissuerid")
    return str(entity_id) if entity_id else None
