"""
ORACLE Invoker: prompt in, parsed response out.

Writes the prompt to a temp file, runs the driver's CLI against it with
a hard timeout, unwraps the driver envelope and hands the text to the
ResponseParser. One attempt only: a failed CLI run is raised, never
retried.
"""

from __future__ import annotations

import os
import subprocess
import tempfile
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from loguru import logger

from oracle.drivers import LlmDriver, LlmResponse
from oracle.parser import ResponseParser

DEFAULT_TIMEOUT = 180
STDERR_LIMIT = 500
FALLBACK_PATH = "/usr/local/bin:/usr/bin:/bin"


class LlmInvocationError(RuntimeError):
    """The LLM CLI exited non-zero, timed out, or could not be started."""

    def __init__(self, driver: str, message: str):
        self.driver = driver
        super().__init__(f"{driver} CLI {message}")


@contextmanager
def prompt_file(prompt: str) -> Iterator[Path]:
    """Write `prompt` to a fresh temp file that is removed on exit."""
    fd, name = tempfile.mkstemp(prefix="oracle_prompt_", suffix=".md")
    path = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(prompt)
        yield path
    finally:
        try:
            path.unlink()
        except OSError:
            pass


def build_env(extra_path: str = "") -> dict[str, str]:
    """Inherited environment with `extra_path` prepended to PATH."""
    env = os.environ.copy()
    if extra_path:
        env["PATH"] = f"{extra_path}{os.pathsep}{env.get('PATH') or FALLBACK_PATH}"
    return env


def _truncate(stream: Any) -> str:
    if stream is None:
        return ""
    if isinstance(stream, bytes):
        stream = stream.decode("utf-8", errors="replace")
    return stream[:STDERR_LIMIT]


class LlmInvoker:
    """
    Runs LLM CLIs as subprocesses.

    `run()` returns the driver's normalized text (used by `ask`);
    `invoke()` additionally parses it into a JSON object.
    """

    def __init__(self, extra_path: str = "", parser: ResponseParser | None = None):
        self.extra_path = extra_path
        self.parser = parser or ResponseParser()

    def run(
        self,
        driver: LlmDriver,
        model: str,
        prompt: str,
        working_dir: Path | str,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> LlmResponse:
        """Execute the driver CLI once.

        Raises:
            LlmInvocationError: On non-zero exit, timeout or a missing executable.
        """
        with prompt_file(prompt) as path:
            command = driver.build_command(str(path), model)
            logger.debug(f"[INVOKE] {driver.name} → {model} ({len(prompt)} chars, timeout {timeout}s)")
            start = time.monotonic()

            try:
                result = subprocess.run(
                    command,
                    cwd=str(working_dir),
                    env=build_env(self.extra_path),
                    stdin=subprocess.DEVNULL,
                    capture_output=True,
                    text=True,
                    timeout=timeout,
                )
            except subprocess.TimeoutExpired as e:
                raise LlmInvocationError(
                    driver.name, f"timed out after {timeout}s: {_truncate(e.stderr)}"
                ) from e
            except OSError as e:
                raise LlmInvocationError(driver.name, f"could not be started: {e}") from e

        elapsed_ms = int((time.monotonic() - start) * 1000)

        if result.returncode != 0:
            logger.debug(f"[INVOKE] {driver.name} exited {result.returncode} after {elapsed_ms}ms")
            raise LlmInvocationError(driver.name, f"failed: {_truncate(result.stderr)}")

        logger.debug(f"[INVOKE] {driver.name} complete: {len(result.stdout)} chars, {elapsed_ms}ms")
        return driver.parse_output(result.stdout)

    def invoke(
        self,
        driver: LlmDriver,
        model: str,
        prompt: str,
        working_dir: Path | str,
        timeout: int = DEFAULT_TIMEOUT,
    ) -> dict[str, Any] | None:
        """Run the CLI and parse its answer; None when no JSON object came back."""
        response = self.run(driver, model, prompt, working_dir, timeout)
        return self.parser.parse_json(response.text, working_dir)
