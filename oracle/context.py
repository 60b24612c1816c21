"""
ORACLE Context Gatherer

Collects everything an LLM should know about the target project before
it answers, plans or reviews:

  - the conventions document (AGENTS.md / CLAUDE.md)
  - solution docs under docs/solutions/
  - nested per-directory CLAUDE.md / AGENTS.md notes
  - relevant memories from Recall

Gathering never fails. A step that errors leaves its field empty.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from oracle.recall import Memory

if TYPE_CHECKING:
    from oracle.config_loader import ConfigManager
    from oracle.recall import RecallClient


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

CONVENTION_FILES = ("AGENTS.md", "CLAUDE.md")

SOLUTIONS_DIR = "docs/solutions"

HIERARCHY_ROOTS = ("app", "src", "resources", "tests")

HIERARCHY_FILES = ("CLAUDE.md", "AGENTS.md")

SKIP_DIRS = {
    ".git", "node_modules", "vendor", "storage", "__pycache__",
    ".venv", "venv", "build", "dist",
}


def _read_file(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"[CONTEXT] Skipping unreadable {path}: {e}")
        return None


# ---------------------------------------------------------------------------
# Data Model
# ---------------------------------------------------------------------------

class ProjectContext(BaseModel):
    """Immutable bundle of project knowledge, built once per command."""
    model_config = ConfigDict(frozen=True)

    project_path: str
    conventions: str | None = None
    docs: dict[str, str] = Field(default_factory=dict)  # relative path → content
    hierarchical_docs: dict[str, str] = Field(default_factory=dict)  # reserved, not rendered into prompts yet
    memories: list[Memory] = Field(default_factory=list)

    def doc_paths(self) -> list[str]:
        return list(self.docs)

    def memory_contents(self) -> list[str]:
        return [m.content for m in self.memories]

    def memory_sources(self) -> list[str | None]:
        return [m.source for m in self.memories]


# ---------------------------------------------------------------------------
# Gatherer
# ---------------------------------------------------------------------------

class ContextGatherer:

    def __init__(self, recall: RecallClient, config: ConfigManager):
        self.recall = recall
        self.config = config

    def gather(self, project_path: Path | str, query: str | None = None) -> ProjectContext:
        """Gather all available context for a project."""
        root = Path(project_path)

        context = ProjectContext(
            project_path=str(project_path),
            conventions=self._read_conventions(root),
            docs=self._read_docs(root),
            hierarchical_docs=self._read_hierarchical_docs(root),
            memories=self._query_memories(query) if query is not None else [],
        )

        logger.info(
            f"[CONTEXT] conventions={'yes' if context.conventions is not None else 'no'}, "
            f"docs={len(context.docs)}, notes={len(context.hierarchical_docs)}, "
            f"memories={len(context.memories)}"
        )
        return context

    def _read_conventions(self, root: Path) -> str | None:
        """Read the first conventions file that exists."""
        configured = self.config.project_get("conventions_file")
        if isinstance(configured, str) and configured:
            candidates = [configured]
        else:
            candidates = list(CONVENTION_FILES)

        for candidate in candidates:
            path = root / candidate
            if path.is_file():
                return _read_file(path)
        return None

    def _read_docs(self, root: Path) -> dict[str, str]:
        """Read every markdown file under docs/solutions/. Unreadable files are skipped."""
        docs_dir = root / SOLUTIONS_DIR
        if not docs_dir.is_dir():
            return {}

        docs: dict[str, str] = {}
        try:
            paths = sorted(docs_dir.rglob("*.md"))
        except OSError as e:
            logger.warning(f"[CONTEXT] Could not list solution docs: {e}")
            return {}

        for path in paths:
            if not path.is_file():
                continue
            content = _read_file(path)
            if content is not None:
                docs[path.relative_to(root).as_posix()] = content
        return docs

    def _read_hierarchical_docs(self, root: Path) -> dict[str, str]:
        """Read nested CLAUDE.md / AGENTS.md files below the known source roots."""
        docs: dict[str, str] = {}
        for name in HIERARCHY_ROOTS:
            directory = root / name
            if directory.is_dir():
                self._collect_notes(directory, root, docs)
        return docs

    def _collect_notes(self, directory: Path, root: Path, docs: dict[str, str]) -> None:
        for filename in HIERARCHY_FILES:
            path = directory / filename
            if path.is_file():
                content = _read_file(path)
                if content is not None:
                    docs[path.relative_to(root).as_posix()] = content

        try:
            children = sorted(directory.iterdir())
        except OSError as e:
            logger.warning(f"[CONTEXT] Could not walk {directory}: {e}")
            return

        for child in children:
            if child.is_dir() and child.name not in SKIP_DIRS:
                self._collect_notes(child, root, docs)

    def _query_memories(self, query: str) -> list[Memory]:
        """Ask Recall for relevant memories. Recall is optional."""
        agent_id = self.config.project_get("recall_agent_id")
        try:
            return [
                m if isinstance(m, Memory) else Memory.model_validate(m)
                for m in self.recall.search(query, agent_id)
            ]
        except Exception as e:
            logger.debug(f"[CONTEXT] Recall search failed, continuing without memories: {e}")
            return []
