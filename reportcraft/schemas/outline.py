"""
Outline schemas - sections, outlines and the request/response bodies of the
outline endpoints.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from reportcraft.engines.outline.comment_analyzer import CommentType
from reportcraft.engines.outline.classifier import PointTag
from reportcraft.engines.outline.ranker import GenerationIntent, InstructorType
from reportcraft.engines.outline.templates import Field as ReportField
from reportcraft.engines.outline.types import ReportOutline, Section

SectionTitle = Literal["序論", "本論", "結論"]


# ── Generation requests ──────────────────────────────────────────────────

class OutlineRequest(BaseModel):
    field: ReportField
    question: str = Field(..., min_length=1, max_length=2000)
    word_count: int = Field(2000, ge=100, le=50000)
    instructor_type: InstructorType = InstructorType.THEORY
    instructor_label: Optional[str] = Field(
        None, max_length=200, description="Display label for a custom instructor profile",
    )


class PointsRequest(OutlineRequest):
    section_title: SectionTitle


class AdditionalPointsRequest(BaseModel):
    field: ReportField
    existing_outline: List[Section]
    target_section: SectionTitle
    intent: GenerationIntent
    question: str = ""
    instructor_type: InstructorType = InstructorType.THEORY


class RegenerateSectionRequest(AdditionalPointsRequest):
    mode: Literal["add", "replace"] = "add"


class CommentRequest(BaseModel):
    field: ReportField
    existing_outline: List[Section]
    target_section: SectionTitle
    comment_text: str = Field(..., min_length=1, max_length=2000)
    comment_type: CommentType
    question: str = ""
    instructor_type: InstructorType = InstructorType.THEORY
    target_point_index: Optional[int] = Field(None, ge=0)


class DiffRequest(BaseModel):
    old: ReportOutline
    new: ReportOutline


class ClassifyRequest(BaseModel):
    points: List[str]
    selected_tags: List[PointTag] = Field(default_factory=list)


class GradeRequest(BaseModel):
    field: ReportField
    question: str
    outline: ReportOutline


class SentenceRequest(BaseModel):
    field: ReportField
    point: str
    context: str = Field("本論", description="Section title or free-text context")


class ReferencesRequest(BaseModel):
    field: ReportField
    points: List[str]


# ── Responses ────────────────────────────────────────────────────────────

class PointsResponse(BaseModel):
    points: List[str]
    is_fallback: bool
    core_question: Optional[str] = None


class AdditionalPointsResponse(BaseModel):
    new_points: List[str]
    is_fallback: bool


class RegenerateSectionResponse(BaseModel):
    sections: List[Section]
    new_points: List[str]
    is_fallback: bool


class ModifiedPointResponse(BaseModel):
    before: str
    after: str
    index: Optional[int] = None


class CommentResponse(BaseModel):
    updated_points: List[str]
    added_points: List[str]
    modified_points: List[ModifiedPointResponse]
    removed_point_indices: List[int]
    is_fallback: bool


class SectionDiffResponse(BaseModel):
    section_title: str
    added_points: List[str]
    removed_points: List[str]
    modified_points: List[ModifiedPointResponse]


class DiffResponse(BaseModel):
    diffs: List[SectionDiffResponse]
    has_changes: bool


class TagResponse(BaseModel):
    tag: PointTag
    confidence: float


class TaggedPointResponse(BaseModel):
    text: str
    tags: List[TagResponse]


class GradeResponse(BaseModel):
    grade: Literal["S", "A", "B", "C", "D"]
    comment: str
    missing_points: List[str]


class SentenceResponse(BaseModel):
    sentence: str


class ReferenceSuggestionResponse(BaseModel):
    category: str
    references: List[str]
