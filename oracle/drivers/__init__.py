"""
ORACLE Driver Roster

Each driver wraps one external LLM command-line tool:
  - how to invoke it (argv built from a prompt file + model)
  - how to unwrap its output envelope into plain response text

Drivers are stateless. Everything else in the pipeline is driver-agnostic.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict


class LlmResponse(BaseModel):
    """Normalized output of a driver invocation."""
    model_config = ConfigDict(frozen=True)

    text: str
    session_id: str | None = None


class LlmDriver(ABC):
    """
    Base class for all ORACLE drivers.

    Subclasses define:
      - name: str: identifier used in config (`driver` key)
      - default_model: str: model suggested by `oracle init`
      - build_command(): argv for the subprocess
      - parse_output(): raw stdout -> LlmResponse
    """

    name: str = "unknown"
    default_model: str = ""

    @abstractmethod
    def build_command(self, prompt_file: str, model: str) -> list[str]:
        """Build the CLI argv that runs `prompt_file` against `model`."""
        ...

    @abstractmethod
    def parse_output(self, output: str) -> LlmResponse:
        """Parse raw CLI output into a normalized response."""
        ...

    @staticmethod
    def _decode_envelope(output: str) -> dict[str, Any] | None:
        try:
            decoded = json.loads(output)
        except json.JSONDecodeError:
            return None
        return decoded if isinstance(decoded, dict) else None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

DEFAULT_DRIVER = "gemini"

_REGISTRY: dict[str, type[LlmDriver]] = {}


def register_driver(cls: type[LlmDriver]) -> type[LlmDriver]:
    """Class decorator: make a driver selectable by its `name`."""
    _REGISTRY[cls.name] = cls
    return cls


def available_drivers() -> list[str]:
    return sorted(_REGISTRY)


def get_driver(name: Any) -> LlmDriver:
    """Instantiate the driver registered under `name` (Gemini when unknown)."""
    key = name if isinstance(name, str) else ""
    factory: Callable[[], LlmDriver] = _REGISTRY.get(key, _REGISTRY[DEFAULT_DRIVER])
    return factory()


def default_model_for(name: str | None) -> str:
    return get_driver(name).default_model


from oracle.drivers.claude import ClaudeDriver  # noqa: E402
from oracle.drivers.codex import CodexDriver  # noqa: E402
from oracle.drivers.gemini import GeminiDriver  # noqa: E402

__all__ = [
    "ClaudeDriver",
    "CodexDriver",
    "GeminiDriver",
    "LlmDriver",
    "LlmResponse",
    "available_drivers",
    "default_model_for",
    "get_driver",
    "register_driver",
]
