"""Read/write access to the in-progress listing document row."""

from typing import Any

from supabase import Client

from app.core.config import get_settings
from app.db.supabase_client import get_supabase, single_row


def get_listing_document(document_id: str, client: Client | None = None) -> dict[str, Any] | None:
    """
    Get the document row for a listing.

    Args:
        document_id: Instrument id keying the document row
        client: Supabase client (defaults to the shared one)

    Returns:
        Document row (column -> value), or None if not started
    """
    supabase = client or get_supabase()
    response = (
        supabase.table(get_settings().LISTING_DOCUMENT_TABLE)
        .select("*")
        .eq("instrumentid", document_id)
        .maybe_single()
        .execute()
    )
    return single_row(response)


def get_document_columns(client: Client | None = None) -> set[str]:
    """
    Column names of the document table, read from a sample row.

    Returns:
        Column name set (empty when the table has no rows)
    """
    supabase = client or get_supabase()
    response = supabase.table(get_settings().LISTING_DOCUMENT_TABLE).select("*").limit(1).execute()
    rows = response.data or []
    return set(rows[0].keys()) if rows else set()


def update_listing_document(
    document_id: str,
    updates: dict[str, Any],
    client: Client | None = None,
) -> list[dict[str, Any]]:
    """Apply one batched column update to a document row; returns updated rows."""
    supabase = client or get_supabase()
    response = (
        supabase.table(get_settings().LISTING_DOCUMENT_TABLE)
        .update(updates)
        .eq("instrumentid", document_id)
        .execute()
    )
    return response.data or []
