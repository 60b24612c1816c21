"""
ORACLE Result Schemas

Typed views over the JSON each mode asks the LLM for. Unlike a strict
schema, these never reject input: a missing or wrong-typed field takes
its default, so a sloppy answer still renders.

    VerifyResult.from_dict({})  ->  verdict="fail", confidence=0.0, ...
    VerifyResult.from_dict(r.to_dict()) == r
"""

from collections.abc import Mapping
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------

def text_or(default: str) -> BeforeValidator:
    return BeforeValidator(lambda value: value if isinstance(value, str) else default)


def _optional_text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _number(value: Any) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return 0.0


def _items(value: Any) -> list[Any]:
    return list(value) if isinstance(value, list) else []


def _context_used(value: Any) -> dict[str, list[Any]]:
    value = value if isinstance(value, Mapping) else {}
    return {"docs": _items(value.get("docs")), "memories": _items(value.get("memories"))}


Text = Annotated[str, text_or("")]
OptionalText = Annotated[Optional[str], BeforeValidator(_optional_text)]
Number = Annotated[float, BeforeValidator(_number)]
Items = Annotated[list[Any], BeforeValidator(_items)]


class _Result(BaseModel):
    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_dict(cls, data: Any):
        """Build from a decoded response, defaulting anything missing or malformed."""
        return cls.model_validate(dict(data) if isinstance(data, Mapping) else {})

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()


# ---------------------------------------------------------------------------
# Modes
# ---------------------------------------------------------------------------

class PlanResult(_Result):
    steps: Items = Field(default_factory=list)  # {title, description, files, verification}
    summary: Text = ""
    context_used: Annotated[dict[str, list[Any]], BeforeValidator(_context_used)] = Field(
        default_factory=lambda: {"docs": [], "memories": []}
    )


class ReviewResult(_Result):
    verdict: Annotated[str, text_or("request_changes")] = "request_changes"
    summary: Text = ""
    comments: Items = Field(default_factory=list)  # {path, line, body}
    friction_points: Items = Field(default_factory=list)  # {project, description, severity}

    @classmethod
    def from_dict(cls, data: Any) -> "ReviewResult":
        data = dict(data) if isinstance(data, Mapping) else {}
        # Older prompts asked for "workarounds"; "friction_points" wins when both exist.
        if not isinstance(data.get("friction_points"), list) and isinstance(data.get("workarounds"), list):
            data["friction_points"] = data["workarounds"]
        return cls.model_validate(data)


class VerifyResult(_Result):
    verdict: Annotated[str, text_or("fail")] = "fail"
    summary: Text = ""
    follow_up_question: OptionalText = None
    package_issues: Items = Field(default_factory=list)  # {package, description, severity, blocking}
    confidence: Number = 0.0


class LearnResult(_Result):
    learnings: Items = Field(default_factory=list)  # {content, category, importance}


class CompoundResult(_Result):
    learnings: Items = Field(default_factory=list)  # {action, file, content, reason, existing_file}
    package_tasks: Items = Field(default_factory=list)  # {package, title, description, severity}
    summary: Text = ""
