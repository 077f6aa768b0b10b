"""
Outline API - generation, revision, scoring and analysis of report outlines.

Endpoints:
  POST /outlines/generate             whole outline (metered)
  POST /outlines/points               one section
  POST /outlines/additional-points    more points for a section
  POST /outlines/comment              apply an instructor comment
  POST /outlines/regenerate-section   add to or replace a section
  POST /outlines/diff                 compare two outlines
  POST /outlines/classify             tag points, optionally filtered
  POST /outlines/grade                S/A/B/C/D verdict
  POST /outlines/sentence             opening sentence for a point
  POST /outlines/references           reference suggestions
"""

from typing import List

from fastapi import APIRouter, HTTPException, status

from reportcraft.ai.grader import grade_outline
from reportcraft.ai.outline_generator import (
    AdditionalPointsParams,
    CommentParams,
    generate_additional_points,
    generate_outline,
    generate_points,
    generate_points_from_comment,
    regenerate_section,
)
from reportcraft.ai.sentence_generator import generate_sentence
from reportcraft.api.deps import CurrentUser, DbSession
from reportcraft.engines.outline.classifier import classify_points, filter_by_tags
from reportcraft.engines.outline.differ import diff_outline
from reportcraft.engines.outline.references import suggest_references
from reportcraft.engines.outline.types import ReportOutline
from reportcraft.logging_config import get_logger
from reportcraft.schemas.common import ErrorResponse
from reportcraft.schemas.outline import (
    AdditionalPointsRequest,
    AdditionalPointsResponse,
    ClassifyRequest,
    CommentRequest,
    CommentResponse,
    DiffRequest,
    DiffResponse,
    GradeRequest,
    GradeResponse,
    ModifiedPointResponse,
    OutlineRequest,
    PointsRequest,
    PointsResponse,
    ReferenceSuggestionResponse,
    ReferencesRequest,
    RegenerateSectionRequest,
    RegenerateSectionResponse,
    SectionDiffResponse,
    SentenceRequest,
    SentenceResponse,
    TaggedPointResponse,
    TagResponse,
)
from reportcraft.services.statistics import record_generation
from reportcraft.services.usage_limit import check_usage_limit, log_usage

logger = get_logger(__name__)
router = APIRouter()

GENERATE_ACTION = "generateOutline"


def _additional_params(body: AdditionalPointsRequest) -> AdditionalPointsParams:
    return AdditionalPointsParams(
        field=body.field.value,
        existing_outline=body.existing_outline,
        target_section=body.target_section,
        intent=body.intent,
        question=body.question,
        instructor_type=body.instructor_type,
    )


@router.post(
    "/generate",
    response_model=ReportOutline,
    responses={401: {"model": ErrorResponse}, 429: {"model": ErrorResponse}},
)
async def generate(body: OutlineRequest, user: CurrentUser, db: DbSession):
    """Generate a full outline. Free-plan users are limited per day."""
    usage = await check_usage_limit(db, user.email)
    if not usage.allowed:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=usage.error or "Usage limit reached",
        )

    outline = await generate_outline(
        body.field.value, body.question, body.word_count, body.instructor_type,
    )
    await log_usage(db, user.email, GENERATE_ACTION)
    await record_generation(db, body.field.value)
    logger.info("Generated outline", extra={"field": body.field.value})
    return outline


@router.post("/points", response_model=PointsResponse)
async def points(body: PointsRequest):
    result = await generate_points(
        body.field.value,
        body.question,
        body.word_count,
        body.section_title,
        body.instructor_type,
    )
    return PointsResponse(
        points=result.points,
        is_fallback=result.is_fallback,
        core_question=result.core_question,
    )


@router.post("/additional-points", response_model=AdditionalPointsResponse)
async def additional_points(body: AdditionalPointsRequest):
    result = await generate_additional_points(_additional_params(body))
    return AdditionalPointsResponse(new_points=result.new_points, is_fallback=result.is_fallback)


@router.post("/comment", response_model=CommentResponse)
async def comment(body: CommentRequest):
    """Reflect an instructor comment in one section."""
    result = await generate_points_from_comment(
        CommentParams(
            field=body.field.value,
            existing_outline=body.existing_outline,
            target_section=body.target_section,
            comment_text=body.comment_text,
            comment_type=body.comment_type,
            question=body.question,
            instructor_type=body.instructor_type,
            target_point_index=body.target_point_index,
        )
    )
    return CommentResponse(
        updated_points=result.updated_points,
        added_points=result.added_points,
        modified_points=[
            ModifiedPointResponse(before=m.before, after=m.after, index=m.index)
            for m in result.modified_points
        ],
        removed_point_indices=result.removed_point_indices,
        is_fallback=result.is_fallback,
    )


@router.post("/regenerate-section", response_model=RegenerateSectionResponse)
async def regenerate(body: RegenerateSectionRequest):
    result = await regenerate_section(_additional_params(body), mode=body.mode)
    return RegenerateSectionResponse(
        sections=result.sections,
        new_points=result.new_points,
        is_fallback=result.is_fallback,
    )


@router.post("/diff", response_model=DiffResponse)
async def diff(body: DiffRequest):
    result = diff_outline(body.old, body.new)
    return DiffResponse(
        diffs=[
            SectionDiffResponse(
                section_title=d.section_title,
                added_points=d.added_points,
                removed_points=d.removed_points,
                modified_points=[
                    ModifiedPointResponse(before=m.before, after=m.after, index=m.index)
                    for m in d.modified_points
                ],
            )
            for d in result.diffs
        ],
        has_changes=result.has_changes,
    )


@router.post("/classify", response_model=List[TaggedPointResponse])
async def classify(body: ClassifyRequest):
    tagged = filter_by_tags(classify_points(body.points), body.selected_tags)
    return [
        TaggedPointResponse(
            text=tp.text,
            tags=[TagResponse(tag=t.tag, confidence=t.confidence) for t in tp.tags],
        )
        for tp in tagged
    ]


@router.post("/grade", response_model=GradeResponse)
async def grade(body: GradeRequest):
    result = await grade_outline(body.field.value, body.question, body.outline)
    return GradeResponse(
        grade=result.grade,
        comment=result.comment,
        missing_points=result.missing_points,
    )


@router.post("/sentence", response_model=SentenceResponse)
async def sentence(body: SentenceRequest):
    text = await generate_sentence(body.field.value, body.point, body.context)
    return SentenceResponse(sentence=text)


@router.post("/references", response_model=List[ReferenceSuggestionResponse])
async def references(body: ReferencesRequest):
    return [
        ReferenceSuggestionResponse(**suggestion)
        for suggestion in suggest_references(body.field.value, body.points)
    ]
