"""
Point Filter / Selector - removes near-duplicates of existing points and
re-prioritizes what remains according to the generation intent.

The filter never caps its output; callers decide how many points to keep.
"""

from typing import Callable, List, Optional, Sequence

from reportcraft.engines.outline.ranker import GenerationIntent
from reportcraft.engines.outline.similarity import DEDUP_THRESHOLD, similarity

THEORY_TERMS = ["理論", "概念", "フレームワーク", "枠組み", "モデル", "分析", "検証"]
PRACTICAL_TERMS = ["実務", "実践", "適用", "事例", "具体", "実際", "運用"]
EXAMPLE_KEYWORDS = ["事例", "例", "具体"]
COUNTERARGUMENT_KEYWORDS = ["反論", "批判", "異論", "問題"]


def filter_new(candidates: Sequence[str], existing: Sequence[str]) -> List[str]:
    """Keep candidates whose similarity to every existing point is <= 0.5."""
    return [
        candidate
        for candidate in candidates
        if not any(similarity(candidate, e) > DEDUP_THRESHOLD for e in existing)
    ]


def diversity(point: str, existing: Sequence[str]) -> float:
    """1 - mean similarity to the existing points (1.0 with no existing points)."""
    if not existing:
        return 1.0
    total = sum(similarity(point, e) for e in existing)
    return 1.0 - total / len(existing)


def count_terms(text: str, terms: Sequence[str]) -> int:
    """Number of terms that occur in text as substrings."""
    return sum(1 for term in terms if term in text)


def count_theory_terms(text: str) -> int:
    return count_terms(text, THEORY_TERMS)


def count_practical_terms(text: str) -> int:
    return count_terms(text, PRACTICAL_TERMS)


def partition_by_keywords(points: Sequence[str], keywords: Sequence[str]) -> List[str]:
    """Stable partition: points mentioning any keyword first."""
    matched = [p for p in points if any(k in p for k in keywords)]
    rest = [p for p in points if not any(k in p for k in keywords)]
    return matched + rest


def _sort_desc(points: Sequence[str], score: Callable[[str], float]) -> List[str]:
    return sorted(points, key=score, reverse=True)


def prioritize_by_intent(
    points: Sequence[str],
    intent: Optional[GenerationIntent],
    existing: Sequence[str] = (),
) -> List[str]:
    """
    Reorder filtered points for an intent.

    論点追加 keeps order, 視点変更 prefers diversity from existing points,
    理論寄り / 実務寄り sort by term counts, 具体例追加 / 反論考慮 move
    keyword matches to the front.
    """
    if intent == GenerationIntent.CHANGE_VIEWPOINT:
        return _sort_desc(points, lambda p: diversity(p, existing))
    if intent == GenerationIntent.LEAN_THEORETICAL:
        return _sort_desc(points, count_theory_terms)
    if intent == GenerationIntent.LEAN_PRACTICAL:
        return _sort_desc(points, count_practical_terms)
    if intent == GenerationIntent.ADD_EXAMPLE:
        return partition_by_keywords(points, EXAMPLE_KEYWORDS)
    if intent == GenerationIntent.CONSIDER_COUNTERARGUMENT:
        return partition_by_keywords(points, COUNTERARGUMENT_KEYWORDS)
    return list(points)


def select_relevant(points: Sequence[str], keywords: Sequence[str], limit: int) -> List[str]:
    """
    Up to `limit` points mentioning a keyword; when none do, the first `limit`.
    """
    relevant = [p for p in points if any(k in p for k in keywords)]
    chosen = relevant if relevant else list(points)
    return chosen[:limit]
