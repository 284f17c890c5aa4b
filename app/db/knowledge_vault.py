"""Read access to the knowledge-vault reference-document catalog."""

from typing import Any

from supabase import Client

from app.core.config import get_settings
from app.db.supabase_client import get_supabase


def list_org_documents(organization_id: str, client: Client | None = None) -> list[dict[str, Any]]:
    """Reference documents uploaded by an organization, newest first."""
    supabase = client or get_supabase()
    response = (
        supabase.table(get_settings().KNOWLEDGE_VAULT_TABLE)
        .select("id, name, category, type, description")
        .eq("organization_id", organization_id)
        .order("created_at", desc=True)
        .execute()
    )
    return response.data or []
