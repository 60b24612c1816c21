from unittest.mock import MagicMock

from oracle.config_loader import ConfigManager
from oracle.context import ContextGatherer
from oracle.recall import Memory


def _gatherer(tmp_path, recall=None, project_config=None) -> ContextGatherer:
    config = ConfigManager(global_dir=tmp_path / "global")
    if project_config is not None:
        config.set_project_config(project_config)
    return ContextGatherer(recall or MagicMock(), config)


def test_reads_agents_md_as_conventions(tmp_path):
    (tmp_path / "AGENTS.md").write_text("# Agent rules")
    (tmp_path / "CLAUDE.md").write_text("# Claude rules")

    context = _gatherer(tmp_path).gather(tmp_path)

    assert context.conventions == "# Agent rules"


def test_falls_back_to_claude_md(tmp_path):
    (tmp_path / "CLAUDE.md").write_text("# Claude rules")

    assert _gatherer(tmp_path).gather(tmp_path).conventions == "# Claude rules"


def test_configured_conventions_file_wins(tmp_path):
    (tmp_path / "AGENTS.md").write_text("# Agent rules")
    (tmp_path / "CONVENTIONS.md").write_text("# Custom")

    gatherer = _gatherer(tmp_path, project_config={"conventions_file": "CONVENTIONS.md"})

    assert gatherer.gather(tmp_path).conventions == "# Custom"


def test_non_string_conventions_file_falls_back_to_defaults(tmp_path):
    (tmp_path / "AGENTS.md").write_text("# Agent rules")

    gatherer = _gatherer(tmp_path, project_config={"conventions_file": 5})

    assert gatherer.gather(tmp_path).conventions == "# Agent rules"


def test_reads_solution_docs_recursively_in_sorted_order(tmp_path):
    docs = tmp_path / "docs" / "solutions"
    (docs / "caching").mkdir(parents=True)
    (docs / "zeta.md").write_text("z")
    (docs / "caching" / "redis.md").write_text("r")
    (docs / "notes.txt").write_text("ignored")

    context = _gatherer(tmp_path).gather(tmp_path)

    assert context.docs == {
        "docs/solutions/caching/redis.md": "r",
        "docs/solutions/zeta.md": "z",
    }
    assert context.doc_paths() == ["docs/solutions/caching/redis.md", "docs/solutions/zeta.md"]


def test_collects_hierarchical_notes_and_skips_vendor_dirs(tmp_path):
    (tmp_path / "src" / "billing").mkdir(parents=True)
    (tmp_path / "src" / "CLAUDE.md").write_text("src notes")
    (tmp_path / "src" / "billing" / "AGENTS.md").write_text("billing notes")
    (tmp_path / "src" / "node_modules" / "pkg").mkdir(parents=True)
    (tmp_path / "src" / "node_modules" / "pkg" / "CLAUDE.md").write_text("skip me")
    (tmp_path / "lib").mkdir()
    (tmp_path / "lib" / "CLAUDE.md").write_text("not a hierarchy root")

    context = _gatherer(tmp_path).gather(tmp_path)

    assert context.hierarchical_docs == {
        "src/CLAUDE.md": "src notes",
        "src/billing/AGENTS.md": "billing notes",
    }


def test_queries_recall_when_query_is_provided(tmp_path):
    recall = MagicMock()
    recall.search.return_value = [Memory(content="Use locking", source="x")]
    gatherer = _gatherer(tmp_path, recall, project_config={"recall_agent_id": "oracle-test"})

    context = gatherer.gather(tmp_path, "rate limiter")

    recall.search.assert_called_once_with("rate limiter", "oracle-test")
    assert context.memory_contents() == ["Use locking"]
    assert context.memory_sources() == ["x"]


def test_skips_recall_without_query(tmp_path):
    recall = MagicMock()

    context = _gatherer(tmp_path, recall).gather(tmp_path)

    recall.search.assert_not_called()
    assert context.memories == []


def test_gather_never_throws(tmp_path):
    recall = MagicMock()
    recall.search.side_effect = RuntimeError("connection refused")

    context = _gatherer(tmp_path, recall).gather(tmp_path, "anything")

    assert context.conventions is None
    assert context.docs == {}
    assert context.hierarchical_docs == {}
    assert context.memories == []


def test_malformed_memories_are_dropped(tmp_path):
    recall = MagicMock()
    recall.search.return_value = ["not a memory"]

    assert _gatherer(tmp_path, recall).gather(tmp_path, "q").memories == []


def test_undecodable_doc_is_skipped_and_others_kept(tmp_path):
    docs = tmp_path / "docs" / "solutions"
    docs.mkdir(parents=True)
    (docs / "a.md").write_bytes(b"\xff\xfe bad")
    (docs / "b.md").write_text("good")

    context = _gatherer(tmp_path).gather(tmp_path)

    assert context.docs == {"docs/solutions/b.md": "good"}


def test_undecodable_note_is_skipped_and_others_kept(tmp_path):
    (tmp_path / "src" / "billing").mkdir(parents=True)
    (tmp_path / "src" / "CLAUDE.md").write_bytes(b"\xff\xfe bad")
    (tmp_path / "src" / "billing" / "AGENTS.md").write_text("billing notes")

    context = _gatherer(tmp_path).gather(tmp_path)

    assert context.hierarchical_docs == {"src/billing/AGENTS.md": "billing notes"}
