"""
Learning capture: push extracted learnings into Recall and, on request,
into the project's docs/solutions/ so future prompts list them.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any

from loguru import logger

from oracle.recall import RecallClient
from oracle.results import ReviewResult

LEARNINGS_DOC_DIR = "docs/solutions/oracle"


def learnings_from_review(review: dict[str, Any], importance: float) -> list[dict[str, Any]]:
    """Turn a saved review into learnings: comments are conventions, friction points are gotchas."""
    result = ReviewResult.from_dict(review)
    learnings = []

    for comment in result.comments:
        if isinstance(comment, dict):
            learnings.append({
                "content": str(comment.get("body") or ""),
                "category": "convention",
                "importance": importance,
            })

    for point in result.friction_points:
        if isinstance(point, dict):
            learnings.append({
                "content": str(point.get("description") or ""),
                "category": "gotcha",
                "importance": importance,
            })

    return learnings


def _importance(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def store_learnings(
    recall: RecallClient,
    learnings: list[Any],
    agent_id: str | None,
    default_importance: float,
    source: str,
) -> list[dict[str, Any]]:
    """Store each learning in Recall. Returns the ones that were accepted, with their ids."""
    stored = []

    for learning in learnings:
        if not isinstance(learning, dict) or not isinstance(learning.get("content"), str):
            continue

        category = learning.get("category")
        category = category if isinstance(category, str) else None
        importance = _importance(learning.get("importance", default_importance), default_importance)

        memory_id = recall.store(learning["content"], importance, agent_id, f"oracle:{source}", category)
        if memory_id is None:
            logger.warning(f"[LEARN] Recall rejected learning: {learning['content'][:60]}")
            continue

        stored.append({"id": memory_id, "content": learning["content"], "category": category})

    return stored


def write_learnings_doc(stored: list[dict[str, Any]], project_path: Path, today: date | None = None) -> Path:
    """Write stored learnings to docs/solutions/oracle/learnings-YYYYMMDD.md."""
    stamp = (today or date.today()).strftime("%Y%m%d")
    docs_dir = project_path / LEARNINGS_DOC_DIR
    docs_dir.mkdir(parents=True, exist_ok=True)

    lines = [f"# Oracle Learnings: {stamp}", ""]
    for learning in stored:
        category = learning.get("category") or "uncategorized"
        lines += [f"## [{category}] Learning #{learning['id']}", "", learning["content"], ""]

    path = docs_dir / f"learnings-{stamp}.md"
    path.write_text("\n".join(lines), encoding="utf-8")
    logger.info(f"[LEARN] Wrote {len(stored)} learnings to {path}")
    return path
