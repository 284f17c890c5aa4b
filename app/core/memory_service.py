"""Mem0 memory service for section completions, entity facts and tone references.

The memory layer is optional: when MEM0_API_KEY is not configured, or any call
fails, every operation degrades to an empty result instead of raising.
"""

from datetime import datetime, timezone
from typing import Any

import httpx

from app.core.config import Settings, get_settings
from app.core.logging import get_logger
from app.core.schemas_section_context import (
    MemoryEntry,
    MemoryMatch,
    MemoryMetadata,
    MemorySubtype,
)

logger = get_logger(__name__)

SECTION_MEMORY_LIMIT = 5
ENTITY_FACT_LIMIT = 10
DEFAULT_SEARCH_LIMIT = 10
SECTION_SUMMARY_CHARS = 500


def _matches_filters(metadata: dict[str, Any], filters: dict[str, Any] | None) -> bool:
    if not filters:
        return True
    return all(metadata.get(key) == value for key, value in filters.items())


def _to_match(raw: dict[str, Any], default_score: float | None = None) -> MemoryMatch:
    """Normalize a Mem0 result row."""
    metadata = raw.get("metadata") or {}
    content = raw.get("memory")
    if content is None and isinstance(raw.get("data"), dict):
        content = raw["data"].get("memory")
    score = raw.get("score", default_score)
    return MemoryMatch(
        id=raw.get("id"),
        content=content or "",
        score=float(score) if score is not None else None,
        metadata=MemoryMetadata.model_validate(
            {k: v for k, v in metadata.items() if k in MemoryMetadata.model_fields}
        ),
    )


def _result_rows(payload: Any) -> list[dict[str, Any]]:
    if isinstance(payload, list):
        return [row for row in payload if isinstance(row, dict)]
    if isinstance(payload, dict):
        rows = payload.get("results") or payload.get("memories") or []
        return [row for row in rows if isinstance(row, dict)]
    return []


class MemoryService:
    """Thin Mem0 platform client. Owned and injected by callers."""

    def __init__(self, settings: Settings | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings or get_settings()
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.settings.MEM0_API_KEY)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.settings.MEM0_BASE_URL,
            headers={"Authorization": f"Token {self.settings.MEM0_API_KEY}"},
            timeout=self.settings.MEMORY_TIMEOUT_SECONDS,
            transport=self._transport,
        )

    # ------------------------------------------------------------------
    # Core operations
    # ------------------------------------------------------------------

    async def add(self, entry: MemoryEntry, scope: str | None = None) -> str | None:
        """Store a memory; returns its id, or None when unavailable."""
        if not self.is_configured:
            return None

        scope = scope or entry.metadata.scope or self.settings.MEMORY_DEFAULT_SCOPE
        metadata = entry.metadata.model_dump(exclude_none=True)
        metadata["scope"] = scope

        try:
            async with self._client() as client:
                response = await client.post(
                    "/v1/memories/",
                    json={
                        "messages": [{"role": "user", "content": entry.content}],
                        "user_id": scope,
                        "metadata": metadata,
                    },
                )
                response.raise_for_status()
                rows = _result_rows(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Memory add failed: {e}")
            return None

        memory_id = rows[0].get("id") if rows else None
        logger.info(f"Stored memory {memory_id} (type={metadata.get('type')})")
        return memory_id

    async def search(
        self,
        query: str,
        scope: str | None = None,
        limit: int = DEFAULT_SEARCH_LIMIT,
        filters: dict[str, Any] | None = None,
    ) -> list[MemoryMatch]:
        """Ranked memory search; empty on any failure."""
        if not self.is_configured:
            return []

        scope = scope or self.settings.MEMORY_DEFAULT_SCOPE
        try:
            async with self._client() as client:
                response = await client.post(
                    "/v1/memories/search/",
                    json={
                        "query": query,
                        "user_id": scope,
                        "top_k": limit,
                        "metadata": filters or {},
                    },
                )
                response.raise_for_status()
                rows = _result_rows(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Memory search failed: {e}")
            return []

        matches = [_to_match(row, default_score=0.0) for row in rows if _matches_filters(row.get("metadata") or {}, filters)]
        return matches[:limit]

    async def get_all(self, scope: str | None = None, filters: dict[str, Any] | None = None) -> list[MemoryMatch]:
        """All memories in a scope (optionally filtered by metadata); empty on failure."""
        if not self.is_configured:
            return []

        scope = scope or self.settings.MEMORY_DEFAULT_SCOPE
        try:
            async with self._client() as client:
                response = await client.get("/v1/memories/", params={"user_id": scope})
                response.raise_for_status()
                rows = _result_rows(response.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Memory listing failed: {e}")
            return []

        # getAll has no relevance score
        return [_to_match(row, default_score=1.0) for row in rows if _matches_filters(row.get("metadata") or {}, filters)]

    async def delete(self, memory_id: str) -> bool:
        if not self.is_configured:
            return False
        try:
            async with self._client() as client:
                response = await client.delete(f"/v1/memories/{memory_id}/")
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Memory delete failed for {memory_id}: {e}")
            return False
        logger.info(f"Deleted memory {memory_id}")
        return True

    # ------------------------------------------------------------------
    # Section-context queries
    # ------------------------------------------------------------------

    async def search_section_memories(self, entity_id: str, section_key: str, query: str) -> list[MemoryMatch]:
        matches = await self.search(
            query,
            limit=SECTION_MEMORY_LIMIT,
            filters={"entity_id": entity_id, "section_key": section_key},
        )
        return [m.model_copy(update={"subtype": MemorySubtype.SECTION_MEMORY}) for m in matches]

    async def search_entity_facts(self, entity_id: str, query: str) -> list[MemoryMatch]:
        matches = await self.search(
            query,
            limit=ENTITY_FACT_LIMIT,
            filters={"entity_id": entity_id, "type": "entity_fact"},
        )
        return [m.model_copy(update={"subtype": MemorySubtype.ENTITY_FACT}) for m in matches]

    async def get_tone_references(self, entity_id: str) -> list[MemoryMatch]:
        matches = await self.get_all(filters={"entity_id": entity_id, "type": "tone_reference"})
        return [m.model_copy(update={"subtype": MemorySubtype.TONE_REFERENCE}) for m in matches]

    # ------------------------------------------------------------------
    # Writers
    # ------------------------------------------------------------------

    async def store_section_completion(
        self,
        entity_id: str,
        document_id: str,
        section_key: str,
        content: str,
        scope: str | None = None,
    ) -> str | None:
        """Remember a finalized section so later generations can reuse it."""
        summary = content[:SECTION_SUMMARY_CHARS]
        if len(content) > SECTION_SUMMARY_CHARS:
            summary += "..."
        return await self.add(
            MemoryEntry(
                content=f"Section {section_key} completed for listing {document_id}: {summary}",
                metadata=MemoryMetadata(
                    entity_id=entity_id,
                    document_id=document_id,
                    section_key=section_key,
                    type="section_final",
                    created_at=datetime.now(timezone.utc).isoformat(),
                ),
            ),
            scope=scope,
        )

    async def store_entity_fact(self, entity_id: str, fact: str, scope: str | None = None) -> str | None:
        return await self.add(
            MemoryEntry(
                content=fact,
                metadata=MemoryMetadata(
                    entity_id=entity_id,
                    type="entity_fact",
                    created_at=datetime.now(timezone.utc).isoformat(),
                ),
            ),
            scope=scope,
        )

    async def store_tone_reference(self, entity_id: str, tone_content: str, scope: str | None = None) -> str | None:
        return await self.add(
            MemoryEntry(
                content=tone_content,
                metadata=MemoryMetadata(
                    entity_id=entity_id,
                    type="tone_reference",
                    created_at=datetime.now(timezone.utc).isoformat(),
                ),
            ),
            scope=scope,
        )

    async def check_connection(self) -> bool:
        """Add and delete a throwaway memory to verify credentials."""
        if not self.is_configured:
            logger.warning("Memory service not configured (MEM0_API_KEY missing)")
            return False

        check_id = await self.add(
            MemoryEntry(content="Connection check", metadata=MemoryMetadata(type="connection_test")),
            scope="test",
        )
        if not check_id:
            return False
        return await self.delete(check_id)
