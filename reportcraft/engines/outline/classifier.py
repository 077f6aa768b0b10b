"""
Point Classifier - keyword tagging of outline points.

Every tag owns a keyword list; a tag's confidence is
min(matched / total * 2, 1.0) rounded to two decimals, where matched counts
the keywords that occur in the text as substrings. Tags below 0.3 are dropped,
the rest sorted by confidence (ties keep tag order) and capped at three. A
point nothing matches gets the catch-all 分析 tag at 0.5.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Sequence, Tuple


class PointTag(str, Enum):
    THEORY = "理論"
    PRACTICE = "実務"
    HISTORY = "歴史"
    COMPARISON = "比較"
    EXAMPLE = "事例"
    COUNTERARGUMENT = "反論"
    DEFINITION = "定義"
    ANALYSIS = "分析"
    METHODOLOGY = "方法論"
    VERIFICATION = "検証"


TAG_KEYWORDS: Dict[PointTag, Tuple[str, ...]] = {
    PointTag.THEORY: ("理論", "概念", "フレームワーク", "モデル", "仮説", "学説", "理論的"),
    PointTag.PRACTICE: ("実務", "実践", "適用", "運用", "実際", "具体的", "実践的"),
    PointTag.HISTORY: ("歴史", "史料", "時代", "背景", "史的", "過去", "歴史的"),
    PointTag.COMPARISON: ("比較", "対比", "相違", "類似", "差異", "対照"),
    PointTag.EXAMPLE: ("事例", "例", "具体", "ケース", "サンプル", "実例"),
    PointTag.COUNTERARGUMENT: ("反論", "批判", "異論", "問題", "限界", "課題", "批判的"),
    PointTag.DEFINITION: ("定義", "意味", "概念", "規定", "解釈"),
    PointTag.ANALYSIS: ("分析", "検討", "考察", "解釈", "検証", "評価"),
    PointTag.METHODOLOGY: ("方法", "手法", "アプローチ", "方法論", "手順"),
    PointTag.VERIFICATION: ("検証", "実証", "立証", "証明", "確認"),
}

MIN_CONFIDENCE = 0.3
MAX_TAGS = 3
DEFAULT_TAG = PointTag.ANALYSIS
DEFAULT_CONFIDENCE = 0.5


@dataclass(frozen=True)
class TagScore:
    tag: PointTag
    confidence: float


@dataclass
class TaggedPoint:
    """A point with its tags, highest confidence first."""
    text: str
    tags: List[TagScore] = field(default_factory=list)

    @property
    def tag_names(self) -> List[str]:
        return [t.tag.value for t in self.tags]


def tag_confidence(text: str, keywords: Sequence[str]) -> float:
    """Confidence of one tag for a text (0.0 when no keyword matches)."""
    if not keywords:
        return 0.0
    matched = sum(1 for keyword in keywords if keyword in text)
    return round(min(matched / len(keywords) * 2, 1.0), 2)


def classify(text: str) -> TaggedPoint:
    """Tag a single point."""
    scores = []
    for tag, keywords in TAG_KEYWORDS.items():
        confidence = tag_confidence(text, keywords)
        if confidence > 0:
            scores.append(TagScore(tag=tag, confidence=confidence))

    scores.sort(key=lambda s: s.confidence, reverse=True)
    kept = [s for s in scores if s.confidence >= MIN_CONFIDENCE][:MAX_TAGS]

    if not kept:
        kept = [TagScore(tag=DEFAULT_TAG, confidence=DEFAULT_CONFIDENCE)]
    return TaggedPoint(text=text, tags=kept)


def classify_points(points: Sequence[str]) -> List[TaggedPoint]:
    """Tag every point independently, preserving order."""
    return [classify(point) for point in points]


def filter_by_tags(
    tagged_points: Sequence[TaggedPoint],
    selected_tags: Sequence[PointTag],
) -> List[TaggedPoint]:
    """Points carrying any of the selected tags; no selection keeps all."""
    if not selected_tags:
        return list(tagged_points)
    wanted = set(selected_tags)
    return [tp for tp in tagged_points if any(t.tag in wanted for t in tp.tags)]
