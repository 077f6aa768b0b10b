"""
Generation Orchestrator - sequences Template Store -> Ranker -> Point Filter,
with optional AI refinement of a section's points.

Every entry point degrades to a fallback result (is_fallback=True) instead of
raising: unknown fields/sections, LLM failures and unexpected errors are
logged and absorbed here.
"""

import asyncio
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from reportcraft.ai import llm_client
from reportcraft.ai.llm_client import LLMUnavailable, PointsMalformed, PointsOk
from reportcraft.engines.outline.comment_analyzer import CommentType, analyze_comment
from reportcraft.engines.outline.differ import ModifiedPoint
from reportcraft.engines.outline.point_filter import (
    filter_new,
    prioritize_by_intent,
    select_relevant,
)
from reportcraft.engines.outline.ranker import (
    CommentIntent,
    GenerationIntent,
    InstructorType,
    rank,
)
from reportcraft.engines.outline.similarity import (
    UNCHANGED_THRESHOLD,
    dedupe_points,
    is_near_duplicate,
    similarity,
)
from reportcraft.engines.outline.templates import (
    SECTION_ORDER,
    SECTION_ROLES,
    field_display_name,
    get_core_question,
    get_template_items,
)
from reportcraft.engines.outline.types import ReportOutline, Section
from reportcraft.logging_config import get_logger

logger = get_logger(__name__)

MAX_ADDITIONAL_POINTS = 3
MAX_COMMENT_POINTS = 2
MAX_AI_POINTS = 3

FALLBACK_POINTS = {
    "序論": [
        "問題の背景と現代的な課題を整理する",
        "本稿の問いと目的を提示する",
        "議論の進め方を示す",
    ],
    "本論": [
        "先行研究の到達点と限界を指摘する",
        "分析の視点を設定し主要な論点を検討する",
        "想定される反論を検討する",
    ],
    "結論": [
        "議論を総括し問いへの答えを示す",
        "残された課題と今後の展望を述べる",
    ],
}


@dataclass
class GeneratePointsResult:
    points: List[str]
    is_fallback: bool
    core_question: Optional[str] = None


@dataclass
class AdditionalPointsParams:
    field: str
    existing_outline: List[Section]
    target_section: str
    intent: GenerationIntent
    question: str = ""
    instructor_type: InstructorType = InstructorType.THEORY


@dataclass
class GenerateAdditionalPointsResult:
    new_points: List[str]
    is_fallback: bool


@dataclass
class CommentParams:
    field: str
    existing_outline: List[Section]
    target_section: str
    comment_text: str
    comment_type: CommentType
    question: str = ""
    instructor_type: InstructorType = InstructorType.THEORY
    target_point_index: Optional[int] = None


@dataclass
class GeneratePointsFromCommentResult:
    updated_points: List[str] = field(default_factory=list)
    added_points: List[str] = field(default_factory=list)
    modified_points: List[ModifiedPoint] = field(default_factory=list)
    removed_point_indices: List[int] = field(default_factory=list)
    is_fallback: bool = False


@dataclass
class RegenerateSectionResult:
    sections: List[Section]
    new_points: List[str]
    is_fallback: bool


def _value(enum_or_str) -> str:
    return getattr(enum_or_str, "value", enum_or_str)


def _section_points(outline: Sequence[Section], title: str) -> Optional[List[str]]:
    for section in outline:
        if section.title == title:
            return list(section.points)
    return None


def fallback_points(section_title: str) -> List[str]:
    """Static points used when a section cannot be generated."""
    return list(FALLBACK_POINTS.get(section_title, FALLBACK_POINTS["本論"]))


async def suggest_ai_points(
    field: str,
    question: str,
    word_count: int,
    section_title: str,
    instructor_type,
    template_points: Sequence[str],
) -> List[str]:
    """
    Ask the LLM for extra points for one section.

    Returns an empty list when the LLM is unavailable or its answer is unusable.
    """
    field_name = field_display_name(field)
    system_prompt = (
        f"あなたは{field_name}のレポート指導を行う大学教員です。"
        "学生のレポート構成案に含めるべき論点を簡潔に提案してください。"
    )
    existing = "\n".join(f"- {p}" for p in template_points)
    user_prompt = f"""【課題文】
{question}

【セクション】
{section_title}（{SECTION_ROLES.get(section_title, section_title)}）

【想定文字数】
{word_count}字

【指導教員のタイプ】
{_value(instructor_type)}

【既存の論点】
{existing}

既存の論点と重複しない論点を最大{MAX_AI_POINTS}つ、以下のJSON形式で返してください：
{{"points": ["論点1", "論点2"], "coreQuestion": "レポート全体の核心的な問い"}}
JSONのみを返してください。"""

    try:
        raw = await llm_client.complete(system_prompt, user_prompt, json_mode=True)
    except LLMUnavailable:
        return []

    result = llm_client.parse_points_response(raw)
    if isinstance(result, PointsOk):
        return result.points[:MAX_AI_POINTS]
    if isinstance(result, PointsMalformed):
        logger.warning(
            "Discarding malformed AI points for %s/%s: %s",
            field, section_title, result.reason,
        )
    return []


async def generate_points(
    field: str,
    question: str,
    word_count: int,
    section_title: str,
    instructor_type,
) -> GeneratePointsResult:
    """
    Ranked points for one section of an outline.

    Template points ranked for the instructor type are the base; when the LLM
    is configured its suggestions are placed first. Near-duplicates
    (similarity > 0.7) are removed, keeping the earlier point.
    """
    items = get_template_items(field, section_title)
    if not items:
        logger.warning("No template for field=%s section=%s", field, section_title)
        return GeneratePointsResult(points=fallback_points(section_title), is_fallback=True)

    try:
        points = rank(items, instructor_type)
        if llm_client.is_configured():
            ai_points = await suggest_ai_points(
                field, question, word_count, section_title, instructor_type, points,
            )
            points = ai_points + points
        return GeneratePointsResult(
            points=dedupe_points(points, UNCHANGED_THRESHOLD),
            is_fallback=False,
            core_question=get_core_question(field),
        )
    except Exception:
        logger.exception("Point generation failed for %s/%s", field, section_title)
        return GeneratePointsResult(points=fallback_points(section_title), is_fallback=True)


async def generate_outline(
    field: str,
    question: str,
    word_count: int,
    instructor_type,
) -> ReportOutline:
    """Generate all three sections concurrently; a failed section falls back."""
    results = await asyncio.gather(
        *(
            generate_points(field, question, word_count, title, instructor_type)
            for title in SECTION_ORDER
        ),
        return_exceptions=True,
    )

    sections: List[Section] = []
    core_question: Optional[str] = None
    for title, result in zip(SECTION_ORDER, results):
        if isinstance(result, BaseException):
            logger.error("Section %s failed: %s", title, result)
            sections.append(Section(title=title, points=fallback_points(title), is_fallback=True))
            continue
        sections.append(Section(title=title, points=result.points, is_fallback=result.is_fallback))
        core_question = core_question or result.core_question

    return ReportOutline(sections=sections, core_question=core_question or get_core_question(field))


async def generate_additional_points(
    params: AdditionalPointsParams,
) -> GenerateAdditionalPointsResult:
    """
    Up to three new points for a section, steered by a generation intent.
    """
    try:
        items = get_template_items(params.field, params.target_section)
        if not items:
            logger.warning(
                "No template for field=%s section=%s", params.field, params.target_section,
            )
            return GenerateAdditionalPointsResult(new_points=[], is_fallback=True)

        existing = _section_points(params.existing_outline, params.target_section) or []
        ranked = rank(items, params.instructor_type, params.intent)
        candidates = filter_new(ranked, existing)
        prioritized = prioritize_by_intent(candidates, params.intent, existing)
        return GenerateAdditionalPointsResult(
            new_points=prioritized[:MAX_ADDITIONAL_POINTS],
            is_fallback=False,
        )
    except Exception:
        logger.exception("Additional point generation failed")
        return GenerateAdditionalPointsResult(
            new_points=[f"既存の論点を発展させる新たな視点（{_value(params.intent)}）"],
            is_fallback=True,
        )


def _replacement_for(
    candidates: Sequence[str],
    keywords: Sequence[str],
    old_point: str,
    other_points: Sequence[str],
) -> Optional[str]:
    for candidate in candidates:
        if not any(k in candidate for k in keywords):
            continue
        if similarity(candidate, old_point) >= UNCHANGED_THRESHOLD:
            continue
        if any(is_near_duplicate(candidate, other) for other in other_points):
            continue
        return candidate
    return None


async def generate_points_from_comment(
    params: CommentParams,
) -> GeneratePointsFromCommentResult:
    """
    Apply an instructor comment to one section.

    add / strengthen append up to two new points (keyword-relevant first),
    modify replaces the targeted point or appends when no point is targeted,
    delete removes the targeted point.
    """
    existing = _section_points(params.existing_outline, params.target_section)
    if existing is None:
        logger.warning("Section %s not found in outline", params.target_section)
        return GeneratePointsFromCommentResult(is_fallback=True)

    try:
        analysis = analyze_comment(params.comment_text, params.comment_type)
        items = get_template_items(params.field, params.target_section)
        if not items:
            logger.warning(
                "No template for field=%s section=%s", params.field, params.target_section,
            )
            return GeneratePointsFromCommentResult(updated_points=existing, is_fallback=True)

        ranked = rank(items, params.instructor_type, analysis.intent)
        result = GeneratePointsFromCommentResult(updated_points=list(existing))
        index = params.target_point_index
        has_target = index is not None and 0 <= index < len(existing)

        if analysis.intent == CommentIntent.DELETE:
            if has_target:
                del result.updated_points[index]
                result.removed_point_indices.append(index)
            return result

        if analysis.intent == CommentIntent.MODIFY and has_target:
            old_point = existing[index]
            others = existing[:index] + existing[index + 1:]
            replacement = _replacement_for(ranked, analysis.target_keywords, old_point, others)
            if replacement is not None:
                result.updated_points[index] = replacement
                result.modified_points.append(
                    ModifiedPoint(before=old_point, after=replacement, index=index)
                )
            return result

        candidates = filter_new(ranked, existing)
        if analysis.intent == CommentIntent.MODIFY:
            selected = candidates[:MAX_COMMENT_POINTS]
        else:
            selected = select_relevant(candidates, analysis.target_keywords, MAX_COMMENT_POINTS)
        result.updated_points.extend(selected)
        result.added_points.extend(selected)
        return result
    except Exception:
        logger.exception("Comment reflection failed for section %s", params.target_section)
        return GeneratePointsFromCommentResult(updated_points=existing, is_fallback=True)


async def regenerate_section(
    params: AdditionalPointsParams,
    mode: str = "add",
) -> RegenerateSectionResult:
    """
    Regenerate one section of an outline.

    "replace" swaps the section's points for freshly generated ones, "add"
    appends those not already present. Fallback results leave the outline
    untouched.
    """
    generated = await generate_additional_points(params)
    sections = [section.model_copy(deep=True) for section in params.existing_outline]
    if generated.is_fallback or not generated.new_points:
        return RegenerateSectionResult(
            sections=sections,
            new_points=generated.new_points,
            is_fallback=generated.is_fallback,
        )

    target = next((s for s in sections if s.title == params.target_section), None)
    if target is None:
        target = Section(title=params.target_section)
        sections.append(target)

    if mode == "replace":
        target.points = list(generated.new_points)
    else:
        target.points = target.points + [p for p in generated.new_points if p not in target.points]
    target.is_fallback = False

    return RegenerateSectionResult(
        sections=sections,
        new_points=generated.new_points,
        is_fallback=False,
    )
