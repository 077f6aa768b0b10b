"""
Outline grader - a strict professor's S/A/B/C/D verdict on an outline.
"""

from dataclasses import dataclass, field
from typing import List

from reportcraft.ai import llm_client
from reportcraft.ai.llm_client import LLMUnavailable
from reportcraft.engines.outline.types import ReportOutline
from reportcraft.engines.outline.templates import field_display_name
from reportcraft.logging_config import get_logger

logger = get_logger(__name__)

VALID_GRADES = ("S", "A", "B", "C", "D")


@dataclass
class GradeResult:
    grade: str
    comment: str
    missing_points: List[str] = field(default_factory=list)


def fallback_grade() -> GradeResult:
    return GradeResult(
        grade="B",
        comment=(
            "構成は基本的な要素を押さえていますが、理論的な深掘りが不足しています。"
            "もう少し先行研究との対話を意識してください。"
        ),
        missing_points=["先行研究の批判的検討", "理論的フレームワークの明確化"],
    )


def outline_to_text(outline: ReportOutline) -> str:
    """Render an outline as numbered points under 【section】 headings."""
    blocks = []
    for section in outline.sections:
        points = "\n".join(f"{i}. {p}" for i, p in enumerate(section.points, start=1))
        blocks.append(f"【{section.title}】\n{points}")
    return "\n\n".join(blocks)


def parse_grade_response(content: str) -> GradeResult:
    """Validate a grading response; anything off-schema yields the fallback grade."""
    data = llm_client.parse_json_object(content)
    if data is None:
        logger.warning("Grade response is not a JSON object")
        return fallback_grade()

    grade = data.get("grade")
    comment = data.get("comment")
    missing = data.get("missingPoints", data.get("missing_points"))
    if grade not in VALID_GRADES:
        logger.warning("Invalid grade in response: %r", grade)
        return fallback_grade()
    if not isinstance(comment, str) or not comment.strip() or not isinstance(missing, list):
        logger.warning("Grade response has an invalid shape")
        return fallback_grade()

    return GradeResult(
        grade=grade,
        comment=comment.strip(),
        missing_points=[str(p) for p in missing if str(p).strip()],
    )


async def grade_outline(field: str, question: str, outline: ReportOutline) -> GradeResult:
    """
    Grade an outline against its question.

    Never raises: an unconfigured LLM, an empty or malformed answer, or any
    error yields the fallback grade B.
    """
    if not llm_client.is_configured():
        logger.info("OpenAI not configured; returning fallback grade")
        return fallback_grade()

    field_name = field_display_name(field)
    system_prompt = (
        f"あなたは{field_name}の厳格な教授です。"
        "学生のレポート構成を厳しく、しかし建設的に評価してください。"
    )
    user_prompt = f"""あなたは{field_name}の厳格な教授です。学生のレポート構成案を厳しく評価してください。

【課題文】
{question}

【レポート構成】
{outline_to_text(outline)}

以下のJSON形式で評価結果を返してください：
{{
  "grade": "S" | "A" | "B" | "C" | "D"（S=最高、D=不可）,
  "comment": "辛口のフィードバックコメント（100文字程度）",
  "missingPoints": ["不足している視点1", "不足している視点2"]
}}
JSONのみを返してください。"""

    try:
        raw = await llm_client.complete(system_prompt, user_prompt, json_mode=True)
    except LLMUnavailable:
        return fallback_grade()

    if not raw:
        logger.warning("Empty grade response")
        return fallback_grade()
    return parse_grade_response(raw)
