"""Unit tests for instructor comment analysis."""

from reportcraft.engines.outline.comment_analyzer import (
    DEFAULT_SUGGESTION,
    CommentType,
    analyze_comment,
    extract_keywords,
)
from reportcraft.engines.outline.ranker import CommentIntent


class TestIntent:
    """Comment type and markers decide the ranking intent."""

    def test_addition(self):
        assert analyze_comment("具体例を入れる", CommentType.ADDITION).intent == CommentIntent.ADD

    def test_modification(self):
        assert analyze_comment("直す", CommentType.MODIFICATION).intent == CommentIntent.MODIFY

    def test_deletion(self):
        assert analyze_comment("不要", CommentType.DELETION).intent == CommentIntent.DELETE

    def test_criticism_weakness(self):
        assert analyze_comment("比較が不足している", CommentType.CRITICISM).intent == CommentIntent.STRENGTHEN

    def test_criticism_revision_request(self):
        analysis = analyze_comment("事例を用いて修正してください", CommentType.CRITICISM)
        assert analysis.intent == CommentIntent.MODIFY

    def test_weakness_beats_revision(self):
        analysis = analyze_comment("論証が弱いので修正してください", CommentType.CRITICISM)
        assert analysis.intent == CommentIntent.STRENGTHEN

    def test_plain_criticism_strengthens(self):
        assert analyze_comment("よくない", CommentType.CRITICISM).intent == CommentIntent.STRENGTHEN


class TestKeywords:
    def test_extracts_in_pattern_order(self):
        assert extract_keywords("比較と理論と先行研究、理論") == ["理論", "比較", "先行研究"]

    def test_none(self):
        assert extract_keywords("よくない") == []


class TestSuggestions:
    def test_comparison(self):
        analysis = analyze_comment("比較が不足している", CommentType.CRITICISM)
        assert analysis.target_keywords == ["比較"]
        assert "同時代作品との比較による解釈の妥当性を検証する" in analysis.suggested_changes

    def test_request_context(self):
        analysis = analyze_comment("歴史的背景を追加してほしい", CommentType.ADDITION)
        assert analysis.suggested_changes == [
            "歴史的背景と文化的文脈の整理を追加する",
            "歴史的背景を追加してほしいを反映した論点を追加する",
        ]

    def test_default_suggestion(self):
        assert analyze_comment("よくない", CommentType.CRITICISM).suggested_changes == [DEFAULT_SUGGESTION]
