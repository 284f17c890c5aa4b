"""Read access to the prompt template catalog."""

from supabase import Client

from app.core.config import get_settings
from app.db.supabase_client import get_supabase, single_row


def list_template_names(prefix: str, client: Client | None = None) -> list[str]:
    """Template names starting with a section-type prefix, sorted."""
    supabase = client or get_supabase()
    response = (
        supabase.table(get_settings().PROMPT_TEMPLATE_TABLE)
        .select("promptname")
        .like("promptname", f"{prefix}%")
        .execute()
    )
    return sorted(row["promptname"] for row in (response.data or []) if row.get("promptname"))


def get_template(name: str, client: Client | None = None) -> str | None:
    """Template body by name, or None when absent."""
    supabase = client or get_supabase()
    response = (
        supabase.table(get_settings().PROMPT_TEMPLATE_TABLE)
        .select("prompt")
        .eq("promptname", name)
        .maybe_single()
        .execute()
    )
    row = single_row(response)
    return row.get("prompt") if row else None
