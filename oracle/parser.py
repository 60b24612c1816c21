"""
ORACLE Response Parser

Turns LLM text into a JSON object:
  1. strip one markdown code fence (```json / ```markdown / ```md / ```)
  2. decode
  3. fall back to <working_dir>/output.json, which some CLIs write
     instead of (or as well as) printing clean JSON
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from loguru import logger

OUTPUT_FILE = "output.json"

_FENCE_RE = re.compile(r"```(?:json|markdown|md)?\s*\n?(.*?)\n?\s*```", re.DOTALL)


class ResponseParser:

    def parse_json(self, text: str, working_dir: Path | str | None = None) -> dict[str, Any] | None:
        """Parse response text into a dict, or None if nothing usable was found."""
        parsed = self._decode(self.strip_code_fences(text))
        if parsed is not None:
            return parsed

        if working_dir is not None:
            parsed = self._read_output_file(Path(working_dir))
            if parsed is not None:
                logger.debug(f"[PARSER] Recovered response from {OUTPUT_FILE}")
                return parsed

        logger.debug(f"[PARSER] No JSON object in response: {text[:500]}")
        return None

    def strip_code_fences(self, text: str) -> str:
        """Return the interior of the first code fence, or the text unchanged."""
        match = _FENCE_RE.search(text)
        return match.group(1) if match else text

    @staticmethod
    def _decode(text: str) -> dict[str, Any] | None:
        try:
            parsed = json.loads(text.strip())
        except json.JSONDecodeError:
            return None
        return parsed if isinstance(parsed, dict) else None

    def _read_output_file(self, working_dir: Path) -> dict[str, Any] | None:
        output_file = working_dir / OUTPUT_FILE
        if not output_file.is_file():
            return None

        try:
            content = output_file.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning(f"[PARSER] Could not read {output_file}: {e}")
            return None

        try:
            output_file.unlink()
        except OSError:
            pass

        return self._decode(content)
