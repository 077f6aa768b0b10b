"""
Outline Engine - point generation and scoring pipeline.

Components:
1. Template Store - field/section candidate points with two weights
2. Weighted Ranker - instructor-type and intent weighted ordering
3. Similarity Engine - token-set Jaccard similarity
4. Point Filter - dedup against an outline, intent-specific reordering
5. Point Classifier - keyword tagging with confidence
6. Outline Differ - added/removed/modified points per section

All functions are pure and safe to call concurrently.
"""

from reportcraft.engines.outline.classifier import (
    PointTag,
    TaggedPoint,
    TagScore,
    classify,
    classify_points,
    filter_by_tags,
)
from reportcraft.engines.outline.comment_analyzer import (
    CommentAnalysis,
    CommentType,
    analyze_comment,
)
from reportcraft.engines.outline.differ import (
    ModifiedPoint,
    OutlineDiff,
    OutlineDiffResult,
    diff_outline,
)
from reportcraft.engines.outline.point_filter import filter_new, prioritize_by_intent
from reportcraft.engines.outline.ranker import (
    CommentIntent,
    GenerationIntent,
    InstructorType,
    rank,
)
from reportcraft.engines.outline.references import suggest_references
from reportcraft.engines.outline.similarity import dedupe_points, similarity
from reportcraft.engines.outline.templates import (
    Field,
    TemplateItem,
    get_core_question,
    get_template_items,
)
from reportcraft.engines.outline.types import ReportOutline, Section

__all__ = [
    "PointTag",
    "TaggedPoint",
    "TagScore",
    "classify",
    "classify_points",
    "filter_by_tags",
    "CommentAnalysis",
    "CommentType",
    "analyze_comment",
    "ModifiedPoint",
    "OutlineDiff",
    "OutlineDiffResult",
    "diff_outline",
    "filter_new",
    "prioritize_by_intent",
    "CommentIntent",
    "GenerationIntent",
    "InstructorType",
    "rank",
    "suggest_references",
    "dedupe_points",
    "similarity",
    "Field",
    "TemplateItem",
    "get_core_question",
    "get_template_items",
    "ReportOutline",
    "Section",
]
