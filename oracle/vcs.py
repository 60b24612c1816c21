"""
Diff sources for review and learning extraction.

Wraps `git diff` and `gh pr diff`. A failed command yields None so the
caller can report "no diff" instead of a stack trace.
"""

from __future__ import annotations

import re
import subprocess
from pathlib import Path

from loguru import logger

_PR_NUMBER_RE = re.compile(r"/pull/(\d+)")


def pr_number(url: str) -> str | None:
    """Extract the PR number from a GitHub pull request URL."""
    match = _PR_NUMBER_RE.search(url)
    return match.group(1) if match else None


def pr_diff(url: str, repo: Path) -> str | None:
    number = pr_number(url)
    if number is None:
        return None
    return _run_cmd(["gh", "pr", "diff", number], cwd=repo)


def resolve_diff(
    repo: Path,
    pr: str | None = None,
    diff_ref: str | None = None,
    branch: str | None = None,
) -> str | None:
    """
    Pick the diff to review, first match wins:
      1. --pr      → gh pr diff <number>
      2. --diff    → git diff <ref>
      3. --branch  → git diff main...<branch>
      4. default   → git diff HEAD (None when the tree is clean)
    """
    if pr is not None:
        return pr_diff(pr, repo)
    if diff_ref is not None:
        return _run_cmd(["git", "diff", diff_ref], cwd=repo)
    if branch is not None:
        return _run_cmd(["git", "diff", f"main...{branch}"], cwd=repo)

    diff = _run_cmd(["git", "diff", "HEAD"], cwd=repo)
    return diff if diff and diff.strip() else None


def _run_cmd(cmd: list[str], cwd: Path) -> str | None:
    try:
        result = subprocess.run(cmd, cwd=cwd, capture_output=True, text=True, timeout=60)
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.warning(f"[VCS] {' '.join(cmd)} could not run: {e}")
        return None

    if result.returncode != 0:
        logger.warning(f"[VCS] {' '.join(cmd)} failed: {result.stderr.strip()[:200]}")
        return None
    return result.stdout
