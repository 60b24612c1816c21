"""
ORACLE Prompt Builder

One builder per mode. Each prompt is:
  - a fixed instruction block (with the exact JSON output schema)
  - mode-specific sections (task, diff, transcript, ...)
  - the shared project context (conventions, memories, doc list)

Builders are pure: same inputs, byte-identical prompt.
"""

from __future__ import annotations

from typing import Any

from oracle.context import ProjectContext

SECTION_SEPARATOR = "\n\n---\n\n"


# ---------------------------------------------------------------------------
# Instruction blocks
# ---------------------------------------------------------------------------

ASK_INSTRUCTIONS = """You are a knowledgeable software engineer. Answer the following question about this project accurately and concisely.

Use the provided project context to inform your answer. If you're unsure, say so rather than guessing.

Format your answer in clear markdown."""

PLAN_INSTRUCTIONS = """You are an expert software architect. Analyze the following task and create a structured implementation plan.

Your output MUST be valid JSON with this exact schema:
{
  "steps": [
    {
      "title": "Short step title",
      "description": "Detailed description of what to do",
      "files": ["path/to/file1.py", "path/to/file2.py"],
      "verification": "How to verify this step is complete"
    }
  ],
  "summary": "One paragraph summary of the plan"
}"""

REVIEW_INSTRUCTIONS = """You are an expert code reviewer. Review the following changes against the project's conventions and best practices.

Your output MUST be valid JSON with this exact schema:
{
  "verdict": "approve" or "request_changes",
  "summary": "Brief summary of the review",
  "comments": [
    {
      "path": "relative/file/path.py",
      "line": 42,
      "body": "Review comment explaining the issue"
    }
  ],
  "friction_points": [
    {
      "project": "project-name or null",
      "description": "Description of the workaround/friction point",
      "severity": "low|medium|high"
    }
  ]
}

Review criteria:
- Code follows project conventions (from AGENTS.md/CLAUDE.md)
- No security vulnerabilities (OWASP top 10)
- No unnecessary complexity or over-engineering
- Tests are included for new functionality
- No debug code, dead code, or commented-out code"""

VERIFY_INSTRUCTIONS = """You are an expert verification agent. A coding agent has finished working on a task. Using the session transcript, the task description and the beads status, decide whether the work is actually done.

Your output MUST be valid JSON with this exact schema:
{
  "verdict": "pass" or "follow_up" or "package_issue" or "fail",
  "summary": "Brief summary of what was verified",
  "follow_up_question": "Specific question for the coder, or null",
  "package_issues": [
    {
      "package": "vendor/package-name",
      "description": "What the package is missing or gets wrong",
      "severity": "low|medium|high",
      "blocking": false
    }
  ],
  "confidence": 0.85
}

Verdicts:
- pass: Every requirement is met and all beads are complete
- follow_up: Something is unclear or unverified; ask exactly one follow_up_question
- package_issue: The task is done, but a dependency has a gap that should be fixed upstream
- fail: The work does not satisfy the task or takes a fundamentally wrong approach

confidence is a number between 0.0 and 1.0."""

LEARN_INSTRUCTIONS = """You are an expert at extracting reusable knowledge from code changes and reviews.

Analyze the following content and extract discrete, actionable learnings.

Your output MUST be valid JSON with this exact schema:
{
  "learnings": [
    {
      "content": "The specific learning or pattern discovered",
      "category": "pattern|gotcha|convention|solution",
      "importance": 0.5
    }
  ]
}

Categories:
- pattern: A reusable code pattern or approach
- gotcha: A non-obvious pitfall or edge case
- convention: A project-specific convention or rule
- solution: A solution to a specific problem"""

COMPOUND_INSTRUCTIONS = """You are an expert at compounding engineering knowledge. Study the coder session transcript below and turn what was learned into durable solution docs and upstream package tasks.

Your output MUST be valid JSON with this exact schema:
{
  "learnings": [
    {
      "action": "create" or "update",
      "file": "docs/solutions/category/short-slug.md",
      "content": "Full markdown content of the solution doc",
      "reason": "Why this knowledge is worth keeping",
      "existing_file": "docs/solutions/... (only for update)"
    }
  ],
  "package_tasks": [
    {
      "package": "vendor/package-name",
      "title": "Short task title",
      "description": "What the package should change and why",
      "severity": "low|medium|high"
    }
  ],
  "summary": "One paragraph summary of what was learned"
}

Rules:
- Prefer updating an existing solution doc over creating a near-duplicate.
- Only record knowledge that would save a future session real time.
- Only raise package tasks for internal packages that caused friction."""


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

class PromptBuilder:

    def build_ask_prompt(self, question: str, context: ProjectContext) -> str:
        sections = [ASK_INSTRUCTIONS, f"## Question\n\n{question}"]
        self._append_context(sections, context)
        return SECTION_SEPARATOR.join(sections)

    def build_plan_prompt(
        self,
        task_description: str,
        context: ProjectContext,
        task_meta: dict[str, Any] | None = None,
    ) -> str:
        sections = [PLAN_INSTRUCTIONS, f"## Task\n\n{task_description}"]

        if task_meta is not None:
            self._append_criteria(sections, task_meta)

            complexity = task_meta.get("complexity")
            if isinstance(complexity, str):
                sections.append(f"## Complexity\n\n{complexity}")

            feedback = task_meta.get("review_feedback")
            if isinstance(feedback, str):
                sections.append(
                    "## Previous Review Feedback\n\n"
                    f"Address the following feedback from a prior code review:\n\n{feedback}"
                )

        self._append_context(sections, context)
        return SECTION_SEPARATOR.join(sections)

    def build_review_prompt(
        self,
        diff: str,
        context: ProjectContext,
        task_description: str | None = None,
        internal_projects: list[str] | None = None,
    ) -> str:
        sections = [REVIEW_INSTRUCTIONS]

        if task_description is not None:
            sections.append(f"## Task Description\n\n{task_description}")

        if internal_projects:
            project_list = ", ".join(internal_projects)
            sections.append(
                "## Internal Projects\n\n"
                "These are internal projects. If the diff contains workarounds for limitations "
                f"in these projects, flag them as friction points:\n\n{project_list}"
            )

        sections.append(f"## Diff\n\n```diff\n{diff}\n```")

        self._append_context(sections, context)
        return SECTION_SEPARATOR.join(sections)

    def build_verify_prompt(
        self,
        transcript: str,
        task_description: str,
        beads_status: str,
        context: ProjectContext,
        solutions_index: str | None = None,
        task_meta: dict[str, Any] | None = None,
    ) -> str:
        sections = [VERIFY_INSTRUCTIONS, f"## Task\n\n{task_description}"]

        if task_meta is not None:
            self._append_criteria(sections, task_meta)

            feedback = task_meta.get("previous_review_feedback")
            if isinstance(feedback, str):
                sections.append(
                    "## Previous Review Feedback\n\n"
                    f"Check that this feedback from a prior review was addressed:\n\n{feedback}"
                )

        sections.append(f"## Beads Status\n\n```json\n{beads_status}\n```")

        if solutions_index is not None:
            sections.append(f"## Solutions Index\n\n{solutions_index}")

        sections.append(f"## Session Transcript\n\n{transcript}")

        self._append_context(sections, context)
        return SECTION_SEPARATOR.join(sections)

    def build_learn_prompt(self, content: str, source: str, context: ProjectContext) -> str:
        sections = [
            LEARN_INSTRUCTIONS,
            f"## Source\n\n{source}",
            f"## Content\n\n{content}",
        ]
        self._append_context(sections, context)
        return SECTION_SEPARATOR.join(sections)

    def build_compound_prompt(
        self,
        transcript: str,
        task_description: str,
        context: ProjectContext,
        solutions_index: str | None = None,
        packages_doc: str | None = None,
        task_meta: dict[str, Any] | None = None,
    ) -> str:
        sections = [COMPOUND_INSTRUCTIONS, f"## Task\n\n{task_description}"]

        if task_meta is not None:
            self._append_criteria(sections, task_meta)

        if solutions_index is not None:
            sections.append(f"## Existing Solutions Index\n\n{solutions_index}")

        if packages_doc is not None:
            sections.append(f"## Internal Packages\n\n{packages_doc}")

        sections.append(f"## Session Transcript\n\n{transcript}")

        self._append_context(sections, context)
        return SECTION_SEPARATOR.join(sections)

    # ------------------------------------------------------------------
    # Shared sections
    # ------------------------------------------------------------------

    @staticmethod
    def _append_criteria(sections: list[str], task_meta: dict[str, Any]) -> None:
        criteria = task_meta.get("completion_criteria")
        if isinstance(criteria, list):
            joined = "\n- ".join(str(c) for c in criteria)
            sections.append(f"## Completion Criteria\n\n- {joined}")

    @staticmethod
    def _append_context(sections: list[str], context: ProjectContext) -> None:
        if context.conventions is not None:
            sections.append(f"## Project Conventions\n\n{context.conventions}")

        if context.memories:
            memory_text = SECTION_SEPARATOR.join(context.memory_contents())
            sections.append(f"## Relevant Learnings from Memory\n\n{memory_text}")

        if context.docs:
            doc_list = "\n- ".join(context.doc_paths())
            sections.append(
                f"## Available Documentation\n\nThe following solution docs are available:\n- {doc_list}"
            )
