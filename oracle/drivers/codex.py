"""
Codex CLI driver.

Codex has no file-input mode, so the prompt file is read and its
content is passed as a literal argument. Output carries no envelope.
"""

from __future__ import annotations

from pathlib import Path

from oracle.drivers import LlmDriver, LlmResponse, register_driver


@register_driver
class CodexDriver(LlmDriver):
    name = "codex"
    default_model = "codex-mini-latest"

    def build_command(self, prompt_file: str, model: str) -> list[str]:
        try:
            prompt = Path(prompt_file).read_text(encoding="utf-8")
        except OSError:
            prompt = ""
        return ["codex", "-p", prompt, "--model", model]

    def parse_output(self, output: str) -> LlmResponse:
        return LlmResponse(text=output.strip())
