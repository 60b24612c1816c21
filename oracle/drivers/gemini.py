"""
Gemini CLI driver (default).

`gemini --output-format json` wraps the answer in an envelope. Older
releases emitted {session_id, response, stats}; newer ones have used
other keys, so several candidates are tried in order.
"""

from __future__ import annotations

from oracle.drivers import LlmDriver, LlmResponse, register_driver

RESPONSE_KEYS = ("response", "output_text", "text", "content")


@register_driver
class GeminiDriver(LlmDriver):
    name = "gemini"
    default_model = "gemini-2.5-flash"

    def build_command(self, prompt_file: str, model: str) -> list[str]:
        return [
            "gemini",
            "--model", model,
            "--prompt", f"@{prompt_file}",
            "--output-format", "json",
            "--yolo",
        ]

    def parse_output(self, output: str) -> LlmResponse:
        trimmed = output.strip()
        envelope = self._decode_envelope(trimmed)

        if envelope is not None:
            for key in RESPONSE_KEYS:
                value = envelope.get(key)
                if isinstance(value, str) and value:
                    session_id = envelope.get("session_id")
                    return LlmResponse(
                        text=value,
                        session_id=session_id if isinstance(session_id, str) else None,
                    )

        return LlmResponse(text=trimmed)
