"""Claude Code CLI driver: `--output-format json` returns {"result": ...}."""

from __future__ import annotations

from oracle.drivers import LlmDriver, LlmResponse, register_driver


@register_driver
class ClaudeDriver(LlmDriver):
    name = "claude"
    default_model = "claude-sonnet-4-5-20250514"

    def build_command(self, prompt_file: str, model: str) -> list[str]:
        return ["claude", "-p", f"@{prompt_file}", "--model", model, "--output-format", "json"]

    def parse_output(self, output: str) -> LlmResponse:
        trimmed = output.strip()
        envelope = self._decode_envelope(trimmed)

        if envelope is not None and isinstance(envelope.get("result"), str):
            return LlmResponse(text=envelope["result"])

        return LlmResponse(text=trimmed)
