"""
ORACLE <- Recall memory store

Thin HTTP client for the Recall service, which stores short "learnings"
scoped by agent id. Recall is an optional enhancement: every failure
here degrades to an empty result and is never raised to the caller.

Usage:
    recall = RecallClient("https://recall.example")
    memories = recall.search("dark mode", agent_id="oracle-myapp")
    memory_id = recall.store("Use CSS variables for theming", importance=0.7)
"""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger
from pydantic import BaseModel, ConfigDict

DEFAULT_TIMEOUT = 10.0


class Memory(BaseModel):
    """One search hit: the remembered text and where it came from."""
    model_config = ConfigDict(frozen=True)

    content: str = ""
    source: str | None = None


class RecallClient:
    """
    JSON-over-HTTP client for Recall.

    `transport` lets tests plug in an `httpx.MockTransport`.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            verify=False,
            transport=transport,
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> RecallClient:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def search(self, query: str, agent_id: str | None = None, limit: int = 10) -> list[Memory]:
        """Search for relevant memories. Returns [] on any failure."""
        params: dict[str, Any] = {"query": query, "limit": limit}
        if agent_id is not None:
            params["agent_id"] = agent_id

        data = self._request("POST", "/api/memories/search", params)
        if not isinstance(data, dict) or not isinstance(data.get("data"), list):
            return []

        memories = []
        for item in data["data"]:
            if not isinstance(item, dict):
                continue
            source = item.get("source")
            memories.append(Memory(
                content=str(item.get("content") or ""),
                source=source if isinstance(source, str) else None,
            ))

        logger.debug(f"[RECALL] search '{query[:40]}' → {len(memories)} memories")
        return memories

    def store(
        self,
        content: str,
        importance: float = 0.5,
        agent_id: str | None = None,
        source: str | None = None,
        category: str | None = None,
    ) -> int | None:
        """Create a memory. Returns its id, or None on failure."""
        params: dict[str, Any] = {"content": content, "importance": importance}
        if agent_id is not None:
            params["agent_id"] = agent_id
        if source is not None:
            params["source"] = source
        if category is not None:
            params["metadata"] = {"category": category}

        data = self._request("POST", "/api/memories", params)
        try:
            return int(data["data"]["id"])
        except (TypeError, KeyError, ValueError):
            return None

    def get(self, memory_id: int) -> dict[str, Any] | None:
        """Fetch a single memory by id."""
        data = self._request("GET", f"/api/memories/{memory_id}")
        if isinstance(data, dict) and isinstance(data.get("data"), dict):
            return data["data"]
        return None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> Any:
        try:
            response = self._client.request(method, path, json=payload)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.debug(f"[RECALL] {method} {path} failed: {e}")
            return None
