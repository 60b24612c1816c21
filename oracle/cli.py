"""
ORACLE CLI: The Interface

Six LLM modes, each one prompt and one answer:
  1. oracle ask "question"                  (markdown answer)
  2. oracle plan "task" | --file task.json  (structured plan)
  3. oracle review [--pr URL | --diff REF]  (code review)
  4. oracle verify --transcript-file ...    (did the coder finish?)
  5. oracle learn [content | --pr | --from-review]
  6. oracle compound --transcript-file ...  (solution docs + package tasks)

Plus utilities:
  - oracle init     (write .oracle.json for the current project)
  - oracle config   (show / get / set global config)

Every command speaks JSON ({"success": ..., "data"|"error": ...}) with
--json or when stdin is not a terminal.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, NoReturn, Optional

import typer
from dotenv import load_dotenv
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from oracle.config_loader import (
    PROJECT_CONFIG_NAME,
    ConfigError,
    ConfigManager,
    OracleDefaults,
    global_config_dir,
    load_defaults,
    resolve_project_path,
)
from oracle.context import CONVENTION_FILES, SOLUTIONS_DIR, ContextGatherer, ProjectContext
from oracle.drivers import LlmDriver, available_drivers, default_model_for, get_driver
from oracle.identity import BANNER, __codename__, __tagline__, __version__
from oracle.invoker import LlmInvocationError, LlmInvoker
from oracle.learnings import learnings_from_review, store_learnings, write_learnings_doc
from oracle.prompts import PromptBuilder
from oracle.recall import RecallClient
from oracle.render import (
    render_answer,
    render_compound,
    render_plan,
    render_review,
    render_stored,
    render_verify,
)
from oracle.results import CompoundResult, LearnResult, PlanResult, ReviewResult, VerifyResult
from oracle.vcs import pr_diff, resolve_diff

# Load .env from current directory or the global config dir
load_dotenv()
load_dotenv(global_config_dir() / ".env")

app = typer.Typer(
    name="oracle",
    help=f"{__codename__}: {__tagline__}",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)

PARSE_FAILURE = "Failed to parse LLM response as JSON."


def version_callback(value: bool):
    if value:
        console.print(f"{__codename__} v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
):
    pass


# ---------------------------------------------------------------------------
# Shared options
# ---------------------------------------------------------------------------

PROJECT_OPTION = typer.Option(None, "--project", "-p", help="Path to the project (defaults to cwd)")
DRIVER_OPTION = typer.Option(None, "--driver", help="LLM driver (gemini, claude, codex)")
MODEL_OPTION = typer.Option(None, "--model", help="LLM model to use")
TIMEOUT_OPTION = typer.Option(None, "--timeout", help="Seconds before the LLM CLI is killed")
JSON_OPTION = typer.Option(False, "--json", help="Output as JSON")
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable debug logging")


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

def _print_banner():
    console.print(f"[bright_cyan]{BANNER}[/]")
    console.print(f"  [dim]v{__version__} · {__tagline__}[/]\n")


def _wants_json(flag: bool) -> bool:
    return flag or not sys.stdin.isatty()


def _emit_json(payload: dict[str, Any]) -> None:
    typer.echo(json.dumps(payload, indent=4, ensure_ascii=False))


def _success(data: dict[str, Any]) -> None:
    _emit_json({"success": True, "data": data})


def _fail(message: str, as_json: bool) -> NoReturn:
    if as_json:
        _emit_json({"success": False, "error": message})
    else:
        err_console.print(f"[red]{escape(message)}[/]")
    raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Session wiring
# ---------------------------------------------------------------------------

class Session:
    """Everything one LLM-backed command needs, resolved once."""

    def __init__(
        self,
        project: Optional[Path],
        driver: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        self.defaults: OracleDefaults = load_defaults()
        self.project_path = resolve_project_path(project)

        self.config = ConfigManager()
        self.config.load_project(self.project_path)

        self.driver: LlmDriver = get_driver(self.config.resolve("driver", self.defaults.driver, driver))
        fallback_model = (
            self.defaults.model
            if self.driver.name == self.defaults.driver
            else default_model_for(self.driver.name)
        )
        self.model: str = str(self.config.resolve("model", fallback_model, model))

        raw_timeout = self.config.resolve("timeout", self.defaults.timeout, timeout)
        try:
            self.timeout = int(raw_timeout)
        except (TypeError, ValueError):
            raise ConfigError(f"Invalid timeout: {raw_timeout!r}")

        self.recall = RecallClient(str(self.config.resolve("recall_url", self.defaults.recall_url)))
        self.gatherer = ContextGatherer(self.recall, self.config)
        self.prompts = PromptBuilder()
        self.invoker = LlmInvoker(self.defaults.extra_path_segment())

    @property
    def agent_id(self) -> Optional[str]:
        agent_id = self.config.project_get("recall_agent_id")
        return agent_id if isinstance(agent_id, str) else None

    def gather(self, query: str) -> ProjectContext:
        return self.gatherer.gather(self.project_path, query)

    def invoke(self, prompt: str) -> Optional[dict[str, Any]]:
        return self.invoker.invoke(self.driver, self.model, prompt, self.project_path, self.timeout)

    def close(self) -> None:
        self.recall.close()


def _open_session(
    as_json: bool,
    project: Optional[Path],
    driver: Optional[str] = None,
    model: Optional[str] = None,
    timeout: Optional[int] = None,
) -> Session:
    try:
        return Session(project, driver, model, timeout)
    except ConfigError as e:
        _fail(str(e), as_json)


def _context_used(context: ProjectContext) -> dict[str, list[Any]]:
    return {"docs": context.doc_paths(), "memories": context.memory_sources()}


def _read_text(path: Optional[Path]) -> Optional[str]:
    if path is None or not path.is_file():
        return None
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read {path}: {e}")
        return None


def _read_json_object(path: Optional[Path]) -> Optional[dict[str, Any]]:
    content = _read_text(path)
    if content is None:
        return None
    try:
        decoded = json.loads(content)
    except json.JSONDecodeError:
        return None
    return decoded if isinstance(decoded, dict) else None


def _title_and_description(task: Optional[dict[str, Any]]) -> Optional[str]:
    if task is None:
        return None
    parts = [task[key] for key in ("title", "description") if isinstance(task.get(key), str)]
    return "\n\n".join(parts) if parts else None


def _task_meta(task: Optional[dict[str, Any]]) -> Optional[dict[str, Any]]:
    meta = task.get("meta") if task else None
    return meta if isinstance(meta, dict) else None


# ---------------------------------------------------------------------------
# LLM commands
# ---------------------------------------------------------------------------

@app.command()
def ask(
    question: str = typer.Argument(..., help="The question to answer"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Include file content as additional context"),
    project: Optional[Path] = PROJECT_OPTION,
    driver: Optional[str] = DRIVER_OPTION,
    model: Optional[str] = MODEL_OPTION,
    timeout: Optional[int] = TIMEOUT_OPTION,
    json_output: bool = JSON_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Answer a question using project context and Recall memories."""
    _configure_logging(verbose)
    as_json = _wants_json(json_output)
    session = _open_session(as_json, project, driver, model, timeout)

    extra = _read_text(file)
    if extra is not None:
        question += f"\n\n## Additional Context (from {file})\n\n{extra}"

    if not as_json:
        console.print(f"[cyan]Thinking with {session.driver.name}/{session.model}...[/]")

    try:
        context = session.gather(question)
        prompt = session.prompts.build_ask_prompt(question, context)
        response = session.invoker.run(
            session.driver, session.model, prompt, session.project_path, session.timeout
        )
    except LlmInvocationError as e:
        _fail(str(e), as_json)
    finally:
        session.close()

    if as_json:
        _success({"answer": response.text, "context_used": _context_used(context)})
        return

    render_answer(console, response.text)


def _read_task_input(
    task: Optional[str],
    file: Optional[Path],
    from_stdin: bool,
) -> tuple[Optional[str], Optional[dict[str, Any]]]:
    """Task text plus optional meta. Precedence: --stdin, --file, argument."""
    if from_stdin:
        return sys.stdin.read().strip(), None

    if file is not None:
        content = _read_text(file)
        if content is None:
            return None, None
        try:
            decoded = json.loads(content)
        except json.JSONDecodeError:
            decoded = None
        if isinstance(decoded, dict) and "description" in decoded:
            return str(decoded["description"]), _task_meta(decoded)
        return content.strip(), None

    return task, None


@app.command()
def plan(
    task: Optional[str] = typer.Argument(None, help="The task description (inline)"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Read task from a JSON or text file"),
    from_stdin: bool = typer.Option(False, "--stdin", help="Read task from stdin"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", help="Write plan.json to this directory"),
    project: Optional[Path] = PROJECT_OPTION,
    driver: Optional[str] = DRIVER_OPTION,
    model: Optional[str] = MODEL_OPTION,
    timeout: Optional[int] = TIMEOUT_OPTION,
    json_output: bool = JSON_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Generate a structured implementation plan from a task description."""
    _configure_logging(verbose)
    as_json = _wants_json(json_output)
    session = _open_session(as_json, project, driver, model, timeout)

    description, meta = _read_task_input(task, file, from_stdin)
    if not description:
        session.close()
        _fail("No task provided. Pass a task description, --file, or --stdin.", as_json)

    if not as_json:
        console.print(f"[cyan]Planning with {session.driver.name}/{session.model}...[/]")

    try:
        context = session.gather(description)
        prompt = session.prompts.build_plan_prompt(description, context, meta)
        result = session.invoke(prompt)
    except LlmInvocationError as e:
        _fail(str(e), as_json)
    finally:
        session.close()

    if result is None:
        _fail(PARSE_FAILURE, as_json)

    result = PlanResult.from_dict({**result, "context_used": _context_used(context)})

    if output_dir is not None:
        output_dir.mkdir(parents=True, exist_ok=True)
        (output_dir / "plan.json").write_text(
            json.dumps(result.to_dict(), indent=4, ensure_ascii=False), encoding="utf-8"
        )
        logger.info(f"Plan written to {output_dir / 'plan.json'}")

    if as_json:
        _success(result.to_dict())
        return

    render_plan(console, result)


@app.command()
def review(
    pr: Optional[str] = typer.Option(None, "--pr", help="PR URL to review"),
    diff: Optional[str] = typer.Option(None, "--diff", help="Git diff reference (e.g. HEAD~3)"),
    branch: Optional[str] = typer.Option(None, "--branch", help="Branch to compare against main"),
    task_file: Optional[Path] = typer.Option(None, "--task-file", help="Task metadata JSON (for context)"),
    detect_workarounds: bool = typer.Option(False, "--detect-workarounds", help="Flag workarounds for internal projects"),
    project: Optional[Path] = PROJECT_OPTION,
    driver: Optional[str] = DRIVER_OPTION,
    model: Optional[str] = MODEL_OPTION,
    timeout: Optional[int] = TIMEOUT_OPTION,
    json_output: bool = JSON_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Review code changes against project conventions."""
    _configure_logging(verbose)
    as_json = _wants_json(json_output)
    session = _open_session(as_json, project, driver, model, timeout)

    changes = resolve_diff(session.project_path, pr=pr, diff_ref=diff, branch=branch)
    if changes is None:
        session.close()
        _fail("No diff could be generated. Provide --pr, --diff, or --branch.", as_json)

    internal_projects = None
    if detect_workarounds:
        configured = session.config.project_get("internal_projects") or []
        internal_projects = [str(p) for p in configured] if isinstance(configured, list) else []

    if not as_json:
        console.print(f"[cyan]Reviewing with {session.driver.name}/{session.model}...[/]")

    try:
        context = session.gather("code review")
        prompt = session.prompts.build_review_prompt(
            changes, context, _title_and_description(_read_json_object(task_file)), internal_projects
        )
        result = session.invoke(prompt)
    except LlmInvocationError as e:
        _fail(str(e), as_json)
    finally:
        session.close()

    if result is None:
        _fail(PARSE_FAILURE, as_json)

    result = ReviewResult.from_dict(result)

    if as_json:
        _success(result.to_dict())
        return

    render_review(console, result)


@app.command()
def verify(
    transcript_file: Optional[Path] = typer.Option(None, "--transcript-file", help="Path to the session transcript"),
    task_file: Optional[Path] = typer.Option(None, "--task-file", help="Path to task metadata JSON"),
    beads_status: str = typer.Option("{}", "--beads-status", help="JSON string with beads completion data"),
    solutions_index: Optional[Path] = typer.Option(None, "--solutions-index", help="Path to the solutions index"),
    project: Optional[Path] = PROJECT_OPTION,
    driver: Optional[str] = DRIVER_OPTION,
    model: Optional[str] = MODEL_OPTION,
    timeout: Optional[int] = TIMEOUT_OPTION,
    json_output: bool = JSON_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Verify coder work against task requirements and beads."""
    _configure_logging(verbose)
    as_json = _wants_json(json_output)
    session = _open_session(as_json, project, driver, model, timeout)

    transcript = _read_text(transcript_file)
    if transcript is None:
        session.close()
        _fail("Could not read transcript. Provide --transcript-file with a valid path.", as_json)

    task = _read_json_object(task_file)
    if task is None:
        session.close()
        _fail("Could not read task file. Provide --task-file with a valid path.", as_json)

    description = next(
        (task[key] for key in ("description", "title") if isinstance(task.get(key), str)),
        "No description provided.",
    )

    if not as_json:
        console.print(f"[cyan]Verifying with {session.driver.name}/{session.model}...[/]")

    try:
        context = session.gather("verification")
        prompt = session.prompts.build_verify_prompt(
            transcript,
            description,
            beads_status,
            context,
            _read_text(solutions_index),
            _task_meta(task),
        )
        result = session.invoke(prompt)
    except LlmInvocationError as e:
        _fail(str(e), as_json)
    finally:
        session.close()

    if result is None:
        _fail(PARSE_FAILURE, as_json)

    result = VerifyResult.from_dict(result)

    if as_json:
        _success(result.to_dict())
        return

    render_verify(console, result)


@app.command()
def learn(
    content: Optional[str] = typer.Argument(None, help="A learning to store directly"),
    pr: Optional[str] = typer.Option(None, "--pr", help="Extract learnings from a PR"),
    from_review: Optional[Path] = typer.Option(None, "--from-review", help="Extract learnings from a saved review JSON"),
    importance: float = typer.Option(0.5, "--importance", help="Importance level (0.0-1.0)"),
    category: Optional[str] = typer.Option(None, "--category", help="pattern, gotcha, convention or solution"),
    update_docs: bool = typer.Option(False, "--update-docs", help="Also write learnings to docs/solutions/oracle/"),
    project: Optional[Path] = PROJECT_OPTION,
    driver: Optional[str] = DRIVER_OPTION,
    model: Optional[str] = MODEL_OPTION,
    timeout: Optional[int] = TIMEOUT_OPTION,
    json_output: bool = JSON_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Capture learnings into Recall and optionally into project docs."""
    _configure_logging(verbose)
    as_json = _wants_json(json_output)
    session = _open_session(as_json, project, driver, model, timeout)

    try:
        if content is not None:
            learnings = [{"content": content, "category": category, "importance": importance}]
            source = "direct"
        elif pr is not None:
            learnings = _learnings_from_pr(session, pr, as_json)
            source = pr
        elif from_review is not None:
            learnings = _learnings_from_review_file(from_review, importance, as_json)
            source = f"review:{from_review}"
        else:
            _fail("Provide content, --pr, or --from-review.", as_json)

        stored = store_learnings(session.recall, learnings, session.agent_id, importance, source)
    finally:
        session.close()

    if not stored:
        _fail("Failed to store learnings in Recall.", as_json)

    data: dict[str, Any] = {"stored": len(stored), "learnings": stored}
    if update_docs:
        data["doc"] = str(write_learnings_doc(stored, session.project_path))

    if as_json:
        _success(data)
        return

    render_stored(console, stored)
    if update_docs:
        console.print(f"[dim]Wrote {data['doc']}[/]")


def _learnings_from_pr(session: Session, url: str, as_json: bool) -> list[Any]:
    changes = pr_diff(url, session.project_path)
    if changes is None:
        _fail(f"Could not get diff for PR: {url}", as_json)

    if not as_json:
        console.print(f"[cyan]Extracting learnings with {session.driver.name}/{session.model}...[/]")

    try:
        context = session.gather("learning extraction")
        result = session.invoke(session.prompts.build_learn_prompt(changes, f"PR: {url}", context))
    except LlmInvocationError as e:
        _fail(str(e), as_json)

    if result is None or not isinstance(result.get("learnings"), list):
        _fail("Failed to extract learnings from PR.", as_json)

    return LearnResult.from_dict(result).learnings


def _learnings_from_review_file(path: Path, importance: float, as_json: bool) -> list[Any]:
    if not path.is_file():
        _fail(f"Review file not found: {path}", as_json)

    saved = _read_json_object(path)
    if saved is None:
        _fail("Invalid JSON in review file.", as_json)

    # `oracle review --json` output wraps the review in the success envelope
    if isinstance(saved.get("data"), dict) and saved.get("success") is True:
        saved = saved["data"]

    learnings = learnings_from_review(saved, importance)
    if not learnings:
        _fail("No learnings found in review file.", as_json)
    return learnings


@app.command()
def compound(
    transcript_file: Optional[Path] = typer.Option(None, "--transcript-file", help="Path to the session transcript"),
    task_file: Optional[Path] = typer.Option(None, "--task-file", help="Path to task metadata JSON"),
    solutions_index: Optional[Path] = typer.Option(None, "--solutions-index", help="Path to the solutions index"),
    packages: Optional[Path] = typer.Option(None, "--packages", help="Path to the internal packages doc"),
    project: Optional[Path] = PROJECT_OPTION,
    driver: Optional[str] = DRIVER_OPTION,
    model: Optional[str] = MODEL_OPTION,
    timeout: Optional[int] = TIMEOUT_OPTION,
    json_output: bool = JSON_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Extract solution docs and package tasks from a coder session transcript."""
    _configure_logging(verbose)
    as_json = _wants_json(json_output)
    session = _open_session(as_json, project, driver, model, timeout)

    transcript = _read_text(transcript_file)
    if transcript is None:
        session.close()
        _fail("Could not read transcript. Provide --transcript-file with a valid path.", as_json)

    task = _read_json_object(task_file)
    description = _title_and_description(task) or "No task description provided."

    if not as_json:
        console.print(f"[cyan]Compounding with {session.driver.name}/{session.model}...[/]")

    try:
        context = session.gather("knowledge extraction")
        prompt = session.prompts.build_compound_prompt(
            transcript,
            description,
            context,
            _read_text(solutions_index),
            _read_text(packages),
            _task_meta(task),
        )
        result = session.invoke(prompt)
    except LlmInvocationError as e:
        _fail(str(e), as_json)
    finally:
        session.close()

    if result is None:
        _fail(PARSE_FAILURE, as_json)

    result = CompoundResult.from_dict(result)

    if as_json:
        _success(result.to_dict())
        return

    render_compound(console, result)


# ---------------------------------------------------------------------------
# Utilities
# ---------------------------------------------------------------------------

@app.command()
def init(
    driver: Optional[str] = typer.Option(None, "--driver", help="Default LLM driver"),
    model: Optional[str] = typer.Option(None, "--model", help="Default LLM model"),
    auto: bool = typer.Option(False, "--auto", help="Non-interactive mode"),
    json_output: bool = JSON_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Initialize Oracle for the current project (.oracle.json)."""
    _configure_logging(verbose)
    as_json = _wants_json(json_output)

    project_path = Path.cwd()
    if (project_path / PROJECT_CONFIG_NAME).is_file():
        _fail(f"{PROJECT_CONFIG_NAME} already exists in this directory.", as_json)

    driver = driver or load_defaults().driver
    agent_id = f"oracle-{project_path.name}"

    if not auto and not as_json:
        _print_banner()
        driver = typer.prompt(f"Default LLM driver ({', '.join(available_drivers())})", default=driver)
        model = typer.prompt("Default model", default=model or default_model_for(driver))
        agent_id = typer.prompt("Recall agent ID (for memory scoping)", default=agent_id)

    if driver not in available_drivers():
        _fail(f"Unknown driver: {driver}. Choose one of: {', '.join(available_drivers())}", as_json)

    project_config = {
        "driver": driver,
        "model": model or default_model_for(driver),
        "recall_agent_id": agent_id,
        "context_paths": _detect_context_paths(project_path),
        "conventions_file": next((f for f in CONVENTION_FILES if (project_path / f).is_file()), None),
    }

    config = ConfigManager()
    config.set_project_config(project_config)
    path = config.save_project(project_path)

    if as_json:
        _success(project_config)
        return

    console.print(f"[green]Created {path}[/]")
    console.print(f"  Driver:       {project_config['driver']}")
    console.print(f"  Model:        {project_config['model']}")
    console.print(f"  Recall agent: {project_config['recall_agent_id']}")


def _detect_context_paths(project_path: Path) -> list[str]:
    paths = [f for f in CONVENTION_FILES if (project_path / f).is_file()]
    if (project_path / SOLUTIONS_DIR).is_dir():
        paths.append(f"{SOLUTIONS_DIR}/")
    return paths


@app.command("config")
def config_command(
    action: Optional[str] = typer.Argument(None, help="get or set (omit to show everything)"),
    key: Optional[str] = typer.Argument(None, help="Config key (dotted for nested values)"),
    value: Optional[str] = typer.Argument(None, help="Value to set (JSON is decoded)"),
    json_output: bool = JSON_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Show or edit Oracle configuration."""
    _configure_logging(verbose)
    as_json = _wants_json(json_output)
    config = ConfigManager()

    if action is None:
        _show_config(config, as_json)
    elif action == "get":
        if key is None:
            _fail("Provide a config key to get.", as_json)
        current = config.get(key)
        if as_json:
            _success({"key": key, "value": current})
        else:
            console.print(f"{key}: {'(not set)' if current is None else json.dumps(current)}")
    elif action == "set":
        if key is None or value is None:
            _fail("Usage: oracle config set <key> <value>", as_json)
        config.set(key, _decode_value(value))
        if as_json:
            _success({"key": key, "value": config.get(key)})
        else:
            console.print(f"[green]Set {key} = {value}[/]")
    else:
        _fail(f"Unknown action: {action}. Use 'get' or 'set'.", as_json)


def _decode_value(value: str) -> Any:
    """JSON-decode CLI values so lists and numbers survive; plain strings pass through."""
    try:
        decoded = json.loads(value)
    except json.JSONDecodeError:
        return value
    return value if decoded is None else decoded


def _show_config(config: ConfigManager, as_json: bool) -> None:
    defaults = load_defaults()
    config.load_project(Path.cwd())

    resolved = {
        "driver": config.resolve("driver", defaults.driver),
        "model": config.resolve("model", defaults.model),
        "timeout": config.resolve("timeout", defaults.timeout),
        "recall_url": config.resolve("recall_url", defaults.recall_url),
    }

    if as_json:
        _success({"global": config.get(), "project": config.project_get(), "resolved": resolved})
        return

    sections = [
        (f"Global Config ({config.global_config_path})", config.get(), "(empty)"),
        (f"Project Config ({Path.cwd() / PROJECT_CONFIG_NAME})", config.project_get(), "(not initialized, run `oracle init`)"),
        ("Resolved Config", resolved, ""),
    ]
    for title, values, empty in sections:
        table = Table(title=title, border_style="cyan", title_justify="left")
        table.add_column("Key")
        table.add_column("Value")
        for name, setting in values.items():
            table.add_row(name, json.dumps(setting))
        if not values:
            table.add_row(f"[dim]{empty}[/]", "")
        console.print(table)


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    if verbose:
        logger.add(
            lambda msg: err_console.print(f"[dim]{escape(str(msg))}[/]", highlight=False, end=""),
            level="DEBUG",
            format="{time:HH:mm:ss} | {level:<7} | {message}",
        )
    else:
        logger.add(
            lambda msg: err_console.print(f"[dim]{escape(str(msg))}[/]", highlight=False, end=""),
            level="WARNING",
            format="{message}",
        )


# ---------------------------------------------------------------------------
# Entry
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    app()
