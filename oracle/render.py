"""
Human-readable rendering of results (the non --json path).
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from oracle.results import CompoundResult, PlanResult, ReviewResult, VerifyResult

SEVERITY_COLORS = {"high": "red", "medium": "yellow", "low": "dim"}

VERDICTS = {
    "approve": ("APPROVED", "green"),
    "request_changes": ("CHANGES REQUESTED", "red"),
    "pass": ("PASS", "green"),
    "follow_up": ("FOLLOW-UP REQUIRED", "yellow"),
    "package_issue": ("PASS (PACKAGE ISSUE)", "cyan"),
    "fail": ("FAIL", "red"),
}


def _field(item: Any, key: str, default: str = "") -> str:
    if isinstance(item, dict) and item.get(key) is not None:
        return escape(str(item[key]))
    return default


def _severity(item: Any) -> str:
    severity = _field(item, "severity", "medium")
    return f"[{SEVERITY_COLORS.get(severity, 'dim')}]{severity}[/]"


def _verdict(console: Console, verdict: str) -> None:
    label, color = VERDICTS.get(verdict, (escape(verdict.upper()), "red"))
    console.print(f"\n[bold {color}]{label}[/]\n")


def render_answer(console: Console, answer: str) -> None:
    console.print()
    console.print(Markdown(answer))


def render_plan(console: Console, plan: PlanResult) -> None:
    console.print(Panel(escape(plan.summary) or "[dim]No summary[/]", title="Plan Summary", border_style="cyan"))

    for number, step in enumerate(plan.steps, start=1):
        console.print(f"\n[bold green]Step {number}: {_field(step, 'title', 'Untitled')}[/]")
        console.print(_field(step, "description"))

        files = step.get("files") if isinstance(step, dict) else None
        if isinstance(files, list) and files:
            console.print(f"[dim]Files: {escape(', '.join(str(f) for f in files))}[/]")
        if _field(step, "verification"):
            console.print(f"[dim]Verify: {_field(step, 'verification')}[/]")


def render_review(console: Console, review: ReviewResult) -> None:
    _verdict(console, review.verdict)
    console.print(escape(review.summary))

    if review.comments:
        table = Table(title="Comments", border_style="cyan")
        table.add_column("Location", style="dim")
        table.add_column("Comment")
        for comment in review.comments:
            location = _field(comment, "path", "?")
            if _field(comment, "line"):
                location += f":{_field(comment, 'line')}"
            table.add_row(location, _field(comment, "body"))
        console.print(table)

    if review.friction_points:
        table = Table(title="Friction Points", border_style="yellow")
        table.add_column("Severity")
        table.add_column("Project")
        table.add_column("Description")
        for point in review.friction_points:
            table.add_row(_severity(point), _field(point, "project", "unknown"), _field(point, "description"))
        console.print(table)


def render_verify(console: Console, verification: VerifyResult) -> None:
    _verdict(console, verification.verdict)
    console.print(escape(verification.summary))

    if verification.follow_up_question is not None:
        console.print("\n[bold yellow]Follow-up Question:[/]")
        console.print(escape(verification.follow_up_question))

    if verification.package_issues:
        table = Table(title="Package Issues", border_style="cyan")
        table.add_column("Severity")
        table.add_column("Package")
        table.add_column("Description")
        table.add_column("Blocking")
        for issue in verification.package_issues:
            blocking = isinstance(issue, dict) and bool(issue.get("blocking"))
            table.add_row(
                _severity(issue),
                _field(issue, "package", "unknown"),
                _field(issue, "description"),
                "[red]yes[/]" if blocking else "no",
            )
        console.print(table)

    console.print(f"\n[dim]Confidence: {round(verification.confidence * 100)}%[/]")


def render_compound(console: Console, compound: CompoundResult) -> None:
    if compound.summary:
        console.print(Panel(escape(compound.summary), title="Summary", border_style="cyan"))

    if compound.learnings:
        table = Table(title="Learnings", border_style="green")
        table.add_column("Action")
        table.add_column("File")
        table.add_column("Reason")
        for learning in compound.learnings:
            table.add_row(
                f"[green]{_field(learning, 'action', 'unknown')}[/]",
                _field(learning, "file", "unknown"),
                _field(learning, "reason"),
            )
        console.print(table)

    if compound.package_tasks:
        table = Table(title="Package Tasks", border_style="yellow")
        table.add_column("Severity")
        table.add_column("Package")
        table.add_column("Title")
        for task in compound.package_tasks:
            table.add_row(_severity(task), _field(task, "package", "unknown"), _field(task, "title"))
        console.print(table)


def render_stored(console: Console, stored: list[dict[str, Any]]) -> None:
    if len(stored) == 1:
        console.print(f"[green]Stored learning #{stored[0]['id']} in Recall.[/]")
        return
    console.print(f"[green]Stored {len(stored)} learnings in Recall.[/]")
    for learning in stored:
        category = escape(f"[{learning.get('category') or 'uncategorized'}]")
        console.print(f"  [dim]#{learning['id']} {category}[/] {escape(learning['content'][:80])}")
