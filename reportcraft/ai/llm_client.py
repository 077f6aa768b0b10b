"""
LLM adapter - the only place that talks to OpenAI.

Raw model output never leaves this module: responses are parsed into a strict
result type (PointsOk | PointsMalformed | PointsEmpty) and callers decide on
fallbacks. Transport failures raise LLMUnavailable.
"""

import json
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

from reportcraft.config import get_settings
from reportcraft.logging_config import get_logger

logger = get_logger(__name__)

MAX_POINT_LENGTH = 200


class LLMUnavailable(Exception):
    """The LLM is not configured or the call failed."""


@dataclass(frozen=True)
class PointsOk:
    points: List[str] = field(default_factory=list)
    core_question: Optional[str] = None


@dataclass(frozen=True)
class PointsMalformed:
    reason: str


@dataclass(frozen=True)
class PointsEmpty:
    pass


PointsResult = Union[PointsOk, PointsMalformed, PointsEmpty]


def is_configured() -> bool:
    """True when a real (non-placeholder) OpenAI key is set."""
    key = (get_settings().openai_api_key or "").strip()
    return bool(key and not key.startswith("sk-your-"))


def strip_code_fence(content: str) -> str:
    """Remove a surrounding markdown code block, if any."""
    content = (content or "").strip()
    if content.startswith("```"):
        content = content.split("\n", 1)[-1].rsplit("```", 1)[0]
    return content.strip()


def parse_json_object(content: str) -> Optional[dict]:
    """Parse a JSON object from model output; None when it is not one."""
    try:
        data = json.loads(strip_code_fence(content))
    except (json.JSONDecodeError, TypeError):
        return None
    return data if isinstance(data, dict) else None


def parse_points_response(content: Optional[str]) -> PointsResult:
    """
    Validate a points response of the form
    {"points": [str, ...], "coreQuestion": str?}.
    """
    if not content or not content.strip():
        return PointsEmpty()

    data = parse_json_object(content)
    if data is None:
        return PointsMalformed("response is not a JSON object")

    raw_points: Any = data.get("points")
    if not isinstance(raw_points, list):
        return PointsMalformed("'points' is missing or not a list")

    points = [
        p.strip()[:MAX_POINT_LENGTH]
        for p in raw_points
        if isinstance(p, str) and p.strip()
    ]
    if not points:
        return PointsEmpty()

    core_question = data.get("coreQuestion") or data.get("core_question")
    if not isinstance(core_question, str) or not core_question.strip():
        core_question = None
    return PointsOk(points=points, core_question=core_question)


async def complete(
    system_prompt: str,
    user_prompt: str,
    *,
    json_mode: bool = False,
    temperature: float = 0.7,
    max_tokens: int = 800,
) -> str:
    """
    Run one chat completion and return the message content.

    Raises:
        LLMUnavailable: if no key is configured or the request fails
    """
    if not is_configured():
        raise LLMUnavailable("OPENAI_API_KEY is not set")

    settings = get_settings()
    try:
        from openai import AsyncOpenAI

        client = AsyncOpenAI(
            api_key=settings.openai_api_key.strip(),
            timeout=settings.openai_timeout_seconds,
        )
        kwargs: dict = {
            "model": settings.openai_model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        response = await client.chat.completions.create(**kwargs)
    except Exception as exc:
        logger.warning("OpenAI request failed: %s", exc)
        raise LLMUnavailable(str(exc)) from exc

    if not response.choices:
        return ""
    return (response.choices[0].message.content or "").strip()
