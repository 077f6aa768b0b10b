"""
Weighted Ranker - orders template items by instructor profile and intent.

The primary weight column is chosen by instructor type: practice-oriented
instructors rank by weight_practical, every other profile (theory-oriented,
custom, unknown) ranks by weight_theory. An optional intent adds a fixed
delta to that column. Sorting is stable, so equal weights keep template order.
"""

from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple, Union

from reportcraft.engines.outline.templates import TemplateItem


class InstructorType(str, Enum):
    """Weighting profile of the supervising instructor."""
    THEORY = "理論重視型"
    PRACTICE = "実務重視型"
    CUSTOM = "カスタム"


class GenerationIntent(str, Enum):
    """Kind of revision requested when generating more points."""
    ADD_POINT = "論点追加"
    CHANGE_VIEWPOINT = "視点変更"
    LEAN_THEORETICAL = "理論寄り"
    LEAN_PRACTICAL = "実務寄り"
    ADD_EXAMPLE = "具体例追加"
    CONSIDER_COUNTERARGUMENT = "反論考慮"


class CommentIntent(str, Enum):
    """Intent derived from an instructor comment."""
    ADD = "add"
    MODIFY = "modify"
    DELETE = "delete"
    STRENGTHEN = "strengthen"


RankingIntent = Union[GenerationIntent, CommentIntent]

# intent -> (delta when ranking by theory, delta when ranking by practical)
INTENT_ADJUSTMENTS: Dict[RankingIntent, Tuple[int, int]] = {
    GenerationIntent.LEAN_THEORETICAL: (3, -2),
    GenerationIntent.LEAN_PRACTICAL: (-2, 3),
    GenerationIntent.ADD_POINT: (1, 1),
    GenerationIntent.CHANGE_VIEWPOINT: (2, 2),
    GenerationIntent.ADD_EXAMPLE: (-1, 2),
    GenerationIntent.CONSIDER_COUNTERARGUMENT: (1, -1),
    CommentIntent.STRENGTHEN: (2, 2),
    CommentIntent.ADD: (0, 0),
    CommentIntent.MODIFY: (0, 0),
    CommentIntent.DELETE: (0, 0),
}


def _coerce_instructor_type(instructor_type) -> Optional[InstructorType]:
    if isinstance(instructor_type, InstructorType):
        return instructor_type
    try:
        return InstructorType(instructor_type)
    except ValueError:
        return None


def uses_practical_weight(instructor_type) -> bool:
    """True only for the practice-oriented profile."""
    return _coerce_instructor_type(instructor_type) == InstructorType.PRACTICE


def intent_adjustment(intent: Optional[RankingIntent], is_theory: bool) -> int:
    """Delta added to the primary weight for an intent (0 when absent)."""
    if intent is None:
        return 0
    theory_delta, practical_delta = INTENT_ADJUSTMENTS.get(intent, (0, 0))
    return theory_delta if is_theory else practical_delta


def adjusted_weight(
    item: TemplateItem,
    instructor_type,
    intent: Optional[RankingIntent] = None,
) -> int:
    """Primary weight of an item plus the intent delta."""
    is_theory = not uses_practical_weight(instructor_type)
    base = item.weight_theory if is_theory else item.weight_practical
    return base + intent_adjustment(intent, is_theory)


def rank(
    items: Sequence[TemplateItem],
    instructor_type,
    intent: Optional[RankingIntent] = None,
) -> List[str]:
    """
    Rank template items and return their texts, highest adjusted weight first.

    Args:
        items: Candidate template items (order is the tie-break)
        instructor_type: InstructorType or its string value
        intent: Optional GenerationIntent / CommentIntent modifier

    Returns:
        Point texts in descending adjusted-weight order
    """
    ordered = sorted(
        items,
        key=lambda item: adjusted_weight(item, instructor_type, intent),
        reverse=True,
    )
    return [item.text for item in ordered]
