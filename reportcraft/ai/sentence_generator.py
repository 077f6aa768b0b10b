"""
Opening-sentence generator for a single outline point.
"""

import random
from typing import Optional

from reportcraft.ai import llm_client
from reportcraft.ai.llm_client import LLMUnavailable
from reportcraft.engines.outline.templates import SECTION_ROLES, field_display_name
from reportcraft.logging_config import get_logger

logger = get_logger(__name__)

FALLBACK_TEMPLATES = (
    "本節では、{point}について、{context}の観点から詳細に検討する。",
    "以上の背景を踏まえ、本稿では{point}に着目し、議論を展開する。",
    "{point}に関して、{context}の文脈において、以下に分析を加える。",
    "本項では、{point}を中心に、{context}の視点から考察を行う。",
)


def fallback_sentence(point: str, context: str, rng: Optional[random.Random] = None) -> str:
    template = (rng or random).choice(FALLBACK_TEMPLATES)
    return template.format(point=point, context=context)


def extract_sentence(content: str) -> str:
    """First non-empty line that is not a heading or a bullet."""
    for line in content.split("\n"):
        line = line.strip()
        if line and not line.startswith("【") and not line.startswith("*"):
            return line
    return content.strip()


async def generate_sentence(field: str, point: str, context: str) -> str:
    """
    One academic opening sentence (about 50 characters) for a point.

    Falls back to a template sentence when the point is blank, the LLM is not
    configured, or the call fails.
    """
    if not point or not point.strip():
        logger.warning("Empty point; returning template sentence")
        return fallback_sentence(point, context)
    if not llm_client.is_configured():
        return fallback_sentence(point, context)

    field_name = field_display_name(field)
    section_role = SECTION_ROLES.get(context, context)
    system_prompt = (
        f"あなたは{field_name}の学術論文を執筆する学生の指導をしている教授です。"
        "アカデミックな文体で、簡潔で明確な書き出しの一文を生成してください。"
    )
    user_prompt = f"""以下の論点について、アカデミックな書き出しの一文を生成してください。

【セクションの役割】
{section_role}

【論点】
{point}

【要件】
- 学術的な文体で、簡潔で明確な一文
- その論点を書き始めるための導入文
- 50文字程度
- 日本語で記述

一文のみを返してください。説明や補足は不要です。"""

    try:
        raw = await llm_client.complete(system_prompt, user_prompt, max_tokens=150)
    except LLMUnavailable:
        return fallback_sentence(point, context)

    if not raw:
        logger.warning("Empty sentence response")
        return fallback_sentence(point, context)
    return extract_sentence(raw)
