"""Unit tests for the weighted ranker."""

from reportcraft.engines.outline.ranker import (
    CommentIntent,
    GenerationIntent,
    InstructorType,
    adjusted_weight,
    intent_adjustment,
    rank,
    uses_practical_weight,
)
from reportcraft.engines.outline.templates import TemplateItem, get_template_items


class TestInstructorWeight:
    """Which weight column drives the ranking."""

    def test_practice_uses_practical_weight(self, sample_items):
        assert rank(sample_items, InstructorType.PRACTICE) == ["B実務の事例", "A理論の検証"]

    def test_theory_uses_theory_weight(self, sample_items):
        assert rank(sample_items, InstructorType.THEORY) == ["A理論の検証", "B実務の事例"]

    def test_custom_falls_back_to_theory(self, sample_items):
        assert rank(sample_items, InstructorType.CUSTOM) == ["A理論の検証", "B実務の事例"]

    def test_string_values_accepted(self, sample_items):
        assert rank(sample_items, "実務重視型") == ["B実務の事例", "A理論の検証"]

    def test_unknown_type_uses_theory(self, sample_items):
        assert not uses_practical_weight("unknown")
        assert rank(sample_items, "unknown") == ["A理論の検証", "B実務の事例"]


class TestIntentAdjustment:
    """Intent deltas on top of the primary weight."""

    def test_no_intent_is_zero(self):
        assert intent_adjustment(None, is_theory=True) == 0

    def test_lean_theoretical(self):
        assert intent_adjustment(GenerationIntent.LEAN_THEORETICAL, is_theory=True) == 3
        assert intent_adjustment(GenerationIntent.LEAN_THEORETICAL, is_theory=False) == -2

    def test_lean_practical(self):
        assert intent_adjustment(GenerationIntent.LEAN_PRACTICAL, is_theory=True) == -2
        assert intent_adjustment(GenerationIntent.LEAN_PRACTICAL, is_theory=False) == 3

    def test_strengthen_comment(self):
        assert intent_adjustment(CommentIntent.STRENGTHEN, is_theory=True) == 2
        assert intent_adjustment(CommentIntent.ADD, is_theory=False) == 0

    def test_adjusted_weight(self):
        item = TemplateItem(text="x", weight_theory=4, weight_practical=2)
        assert adjusted_weight(item, InstructorType.THEORY, GenerationIntent.ADD_EXAMPLE) == 3
        assert adjusted_weight(item, InstructorType.PRACTICE, GenerationIntent.ADD_EXAMPLE) == 4

    def test_uniform_intent_keeps_order(self, sample_items):
        """A delta applied to every item cannot reorder them."""
        for intent in GenerationIntent:
            assert rank(sample_items, InstructorType.THEORY, intent) == ["A理論の検証", "B実務の事例"]


class TestRankProperties:
    """Determinism and stability."""

    def test_ties_keep_template_order(self):
        items = [
            TemplateItem(text="first", weight_theory=3, weight_practical=3),
            TemplateItem(text="second", weight_theory=3, weight_practical=3),
            TemplateItem(text="top", weight_theory=5, weight_practical=1),
            TemplateItem(text="third", weight_theory=3, weight_practical=3),
        ]
        assert rank(items, InstructorType.THEORY) == ["top", "first", "second", "third"]

    def test_deterministic(self):
        items = get_template_items("literature", "本論")
        assert rank(items, InstructorType.PRACTICE) == rank(items, InstructorType.PRACTICE)

    def test_returns_every_item_once(self):
        items = get_template_items("law", "本論")
        ranked = rank(items, InstructorType.THEORY)
        assert sorted(ranked) == sorted(i.text for i in items)

    def test_empty_input(self):
        assert rank([], InstructorType.THEORY) == []

    def test_literature_body_for_practice(self):
        ranked = rank(get_template_items("literature", "本論"), InstructorType.PRACTICE)
        assert ranked[0] == "読者受容の歴史的変遷を具体的事例から考察する"
        assert ranked[-1] == "作者の伝記的事実と作品解釈の関係を批判的に検討する"
