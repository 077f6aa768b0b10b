"""
Comment analysis - turns an instructor's comment into a ranking intent,
target keywords and suggested changes.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from reportcraft.engines.outline.ranker import CommentIntent


class CommentType(str, Enum):
    CRITICISM = "criticism"
    ADDITION = "addition"
    MODIFICATION = "modification"
    DELETION = "deletion"


KEYWORD_PATTERNS: List[re.Pattern] = [
    re.compile(r"文体分析|修辞技法|表現技法|言語分析"),
    re.compile(r"理論|実務|事例|具体例"),
    re.compile(r"比較|対比|相違|類似"),
    re.compile(r"先行研究|既存研究|関連研究"),
    re.compile(r"歴史的背景|文化的文脈"),
    re.compile(r"解釈|検証|妥当性"),
    re.compile(r"反論|批判|異論"),
    re.compile(r"実証|データ|統計"),
]

WEAKNESS_MARKERS = ("弱い", "不足", "不十分")
REVISION_MARKERS = ("修正", "変更")
_REQUEST_RE = re.compile(r"追加してほしい|付け加えてほしい|加えてほしい")

DEFAULT_SUGGESTION = "コメントに基づく改善を反映する"


@dataclass
class CommentAnalysis:
    intent: CommentIntent
    target_keywords: List[str] = field(default_factory=list)
    suggested_changes: List[str] = field(default_factory=list)


def extract_keywords(text: str) -> List[str]:
    """Academic keywords found in a comment, unique, pattern order."""
    keywords: List[str] = []
    for pattern in KEYWORD_PATTERNS:
        for match in pattern.findall(text):
            if match not in keywords:
                keywords.append(match)
    return keywords


def _intent_for(text: str, comment_type: CommentType) -> CommentIntent:
    if comment_type == CommentType.ADDITION:
        return CommentIntent.ADD
    if comment_type == CommentType.MODIFICATION:
        return CommentIntent.MODIFY
    if comment_type == CommentType.DELETION:
        return CommentIntent.DELETE
    # criticism: weakness wins over an explicit revision request
    if any(marker in text for marker in WEAKNESS_MARKERS):
        return CommentIntent.STRENGTHEN
    if any(marker in text for marker in REVISION_MARKERS):
        return CommentIntent.MODIFY
    return CommentIntent.STRENGTHEN


def suggest_changes(text: str, keywords: List[str]) -> List[str]:
    """Concrete change proposals derived from comment keywords."""
    suggestions: List[str] = []

    def mentions(*fragments: str) -> bool:
        return any(f in k for k in keywords for f in fragments)

    if mentions("文体", "修辞"):
        suggestions.append("修辞技法の分析と意味生成への影響を検討する")
        suggestions.append("文体の特徴と解釈の妥当性を検証する")
    if mentions("比較", "対比"):
        suggestions.append("先行研究との比較による位置づけを明確化する")
        suggestions.append("同時代作品との比較による解釈の妥当性を検証する")
    if mentions("事例", "具体"):
        suggestions.append("具体的事例を用いて理論的観点を補強する")
        suggestions.append("実証データに基づく検証を追加する")
    if mentions("理論"):
        suggestions.append("理論的フレームワークの適用を明確化する")
    if mentions("歴史", "文化的"):
        suggestions.append("歴史的背景と文化的文脈の整理を追加する")

    match = _REQUEST_RE.search(text)
    if match:
        start = max(match.start() - 20, 0)
        context = text[start:match.end() + 20]
        suggestions.append(f"{context}を反映した論点を追加する")

    return suggestions or [DEFAULT_SUGGESTION]


def analyze_comment(text: str, comment_type: CommentType) -> CommentAnalysis:
    """Analyze an instructor comment."""
    keywords = extract_keywords(text)
    return CommentAnalysis(
        intent=_intent_for(text, comment_type),
        target_keywords=keywords,
        suggested_changes=suggest_changes(text, keywords),
    )
