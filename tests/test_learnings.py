from datetime import date
from unittest.mock import MagicMock

from oracle.learnings import learnings_from_review, store_learnings, write_learnings_doc


def test_review_comments_become_conventions_and_friction_becomes_gotchas():
    review = {
        "verdict": "request_changes",
        "comments": [{"path": "app.py", "line": 3, "body": "Use the repository helper"}],
        "friction_points": [{"project": "acme/ui", "description": "Patched missing prop", "severity": "low"}],
    }

    assert learnings_from_review(review, 0.6) == [
        {"content": "Use the repository helper", "category": "convention", "importance": 0.6},
        {"content": "Patched missing prop", "category": "gotcha", "importance": 0.6},
    ]


def test_review_legacy_workarounds_are_read():
    learnings = learnings_from_review({"workarounds": [{"description": "old style"}]}, 0.5)

    assert learnings == [{"content": "old style", "category": "gotcha", "importance": 0.5}]


def test_empty_review_has_no_learnings():
    assert learnings_from_review({"verdict": "approve"}, 0.5) == []


def test_store_learnings_reports_stored_ids():
    recall = MagicMock()
    recall.store.side_effect = [11, None, 12]
    learnings = [
        {"content": "first", "category": "pattern", "importance": 0.9},
        {"content": "rejected", "category": "gotcha"},
        {"content": "third"},
        {"category": "no content"},
        "not a dict",
    ]

    stored = store_learnings(recall, learnings, "oracle-demo", 0.5, "direct")

    assert stored == [
        {"id": 11, "content": "first", "category": "pattern"},
        {"id": 12, "content": "third", "category": None},
    ]
    recall.store.assert_any_call("first", 0.9, "oracle-demo", "oracle:direct", "pattern")
    recall.store.assert_any_call("third", 0.5, "oracle-demo", "oracle:direct", None)
    assert recall.store.call_count == 3


def test_store_learnings_defaults_bad_importance():
    recall = MagicMock()
    recall.store.return_value = 1

    store_learnings(recall, [{"content": "x", "importance": "very"}], None, 0.4, "review:r.json")

    recall.store.assert_called_once_with("x", 0.4, None, "oracle:review:r.json", None)


def test_write_learnings_doc(tmp_path):
    stored = [
        {"id": 11, "content": "Use locking", "category": "pattern"},
        {"id": 12, "content": "Beware N+1", "category": None},
    ]

    path = write_learnings_doc(stored, tmp_path, today=date(2026, 3, 1))

    assert path == tmp_path / "docs" / "solutions" / "oracle" / "learnings-20260301.md"
    content = path.read_text()
    assert content.startswith("# Oracle Learnings: 20260301")
    assert "## [pattern] Learning #11\n\nUse locking" in content
    assert "## [uncategorized] Learning #12\n\nBeware N+1" in content
