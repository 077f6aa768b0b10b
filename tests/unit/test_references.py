"""Unit tests for reference suggestions."""

from reportcraft.engines.outline.references import (
    CONCRETE,
    METHODOLOGICAL,
    REFERENCES,
    THEORETICAL,
    extract_point_keywords,
    suggest_references,
)
from reportcraft.engines.outline.templates import Field


class TestSuggestReferences:
    def test_keyword_match(self):
        result = suggest_references("literature", ["語りの構造と視点人物の機能を分析する"])
        assert result == [
            {"category": THEORETICAL, "references": ["ロラン・バルト『物語の構造分析』（みすず書房）"]},
        ]

    def test_multiple_matches_keep_list_order(self):
        result = suggest_references("law", ["判例の比較"])
        assert result == [
            {
                "category": CONCRETE,
                "references": [
                    "『判例百選』シリーズ（有斐閣）",
                    "中野次雄編『判例とその読み方』（有斐閣）",
                    "滝沢正『比較法』（三省堂）",
                ],
            },
        ]

    def test_defaults_when_nothing_matches(self):
        result = suggest_references("history", ["xyz"])
        refs = REFERENCES[Field.HISTORY]
        assert result == [
            {"category": THEORETICAL, "references": refs[THEORETICAL][:2]},
            {"category": METHODOLOGICAL, "references": refs[METHODOLOGICAL][:2]},
        ]

    def test_unknown_field(self):
        assert suggest_references("chemistry", ["理論"]) == []

    def test_every_field_has_references(self):
        for field in Field:
            assert suggest_references(field.value, [])


class TestPointKeywords:
    def test_unique(self):
        assert extract_point_keywords(["理論の分析", "理論の比較"]) == ["理論", "分析", "比較"]
