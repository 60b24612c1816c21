from unittest.mock import MagicMock, patch

from oracle.vcs import pr_diff, pr_number, resolve_diff


def test_pr_number_from_url():
    assert pr_number("https://github.com/acme/app/pull/123") == "123"
    assert pr_number("https://github.com/acme/app/pull/123/files") == "123"
    assert pr_number("https://github.com/acme/app/issues/5") is None


def test_pr_diff_without_number_runs_nothing(tmp_path):
    with patch("oracle.vcs.subprocess.run") as run:
        assert pr_diff("not-a-pr", tmp_path) is None
    run.assert_not_called()


def _completed(stdout="", returncode=0):
    return MagicMock(stdout=stdout, stderr="", returncode=returncode)


def test_resolve_diff_prefers_pr(tmp_path):
    with patch("oracle.vcs.subprocess.run", return_value=_completed("pr diff")) as run:
        diff = resolve_diff(tmp_path, pr="https://github.com/a/b/pull/9", diff_ref="HEAD~1")

    assert diff == "pr diff"
    assert run.call_args.args[0] == ["gh", "pr", "diff", "9"]


def test_resolve_diff_ref_and_branch(tmp_path):
    with patch("oracle.vcs.subprocess.run", return_value=_completed("d")) as run:
        resolve_diff(tmp_path, diff_ref="HEAD~3")
        assert run.call_args.args[0] == ["git", "diff", "HEAD~3"]

        resolve_diff(tmp_path, branch="feature/x")
        assert run.call_args.args[0] == ["git", "diff", "main...feature/x"]


def test_resolve_diff_default_clean_tree_is_none(tmp_path):
    with patch("oracle.vcs.subprocess.run", return_value=_completed("  \n")) as run:
        assert resolve_diff(tmp_path) is None
    assert run.call_args.args[0] == ["git", "diff", "HEAD"]


def test_failed_command_yields_none(tmp_path):
    with patch("oracle.vcs.subprocess.run", return_value=_completed("partial", returncode=128)):
        assert resolve_diff(tmp_path, diff_ref="nope") is None
