"""Unit tests for the point filter and intent prioritization."""

from reportcraft.engines.outline.point_filter import (
    count_practical_terms,
    count_theory_terms,
    diversity,
    filter_new,
    partition_by_keywords,
    prioritize_by_intent,
    select_relevant,
)
from reportcraft.engines.outline.ranker import GenerationIntent
from reportcraft.engines.outline.similarity import similarity


class TestFilterNew:
    """Dedup of candidates against existing points (threshold 0.5)."""

    def test_drops_similar_candidates(self):
        existing = ["理論 の 検証"]
        candidates = ["理論 の 検証 を 行う", "実務 の 事例", "理論 の 検証"]
        # 3/5 = 0.6 > 0.5 -> dropped; 1/5 kept; identical dropped
        assert filter_new(candidates, existing) == ["実務 の 事例"]

    def test_exactly_half_is_kept(self):
        # 2/4 = 0.5 is not above the threshold
        assert filter_new(["a b"], ["a b c d"]) == ["a b"]

    def test_no_existing_keeps_all(self):
        assert filter_new(["x", "y"], []) == ["x", "y"]

    def test_guarantee(self):
        existing = ["a b c", "d e f"]
        candidates = ["a b c g", "a x y z", "d e f", "q"]
        for kept in filter_new(candidates, existing):
            assert all(similarity(kept, e) <= 0.5 for e in existing)

    def test_never_caps(self):
        candidates = [f"p{i}" for i in range(10)]
        assert len(filter_new(candidates, ["other"])) == 10


class TestDiversity:
    def test_empty_existing_is_one(self):
        assert diversity("a b", []) == 1.0

    def test_mean_similarity(self):
        # similarities 1.0 and 0.0 -> 1 - 0.5
        assert diversity("a b", ["a b", "c d"]) == 0.5


class TestTermCounts:
    def test_theory_terms(self):
        assert count_theory_terms("理論的な枠組みの分析") == 3
        assert count_theory_terms("実務の運用") == 0

    def test_practical_terms(self):
        assert count_practical_terms("実務における具体的事例") == 3


class TestPrioritizeByIntent:
    """Reordering per generation intent."""

    def test_add_point_keeps_order(self):
        points = ["b", "a", "c"]
        assert prioritize_by_intent(points, GenerationIntent.ADD_POINT) == ["b", "a", "c"]

    def test_lean_theoretical(self):
        points = ["実務の運用", "理論モデルの検証", "概念の整理"]
        assert prioritize_by_intent(points, GenerationIntent.LEAN_THEORETICAL) == [
            "理論モデルの検証", "概念の整理", "実務の運用",
        ]

    def test_lean_practical_is_stable(self):
        points = ["理論A", "実務の事例", "理論B"]
        assert prioritize_by_intent(points, GenerationIntent.LEAN_PRACTICAL) == [
            "実務の事例", "理論A", "理論B",
        ]

    def test_add_example_partitions(self):
        points = ["理論の整理", "具体的な検討", "比較", "事例研究"]
        assert prioritize_by_intent(points, GenerationIntent.ADD_EXAMPLE) == [
            "具体的な検討", "事例研究", "理論の整理", "比較",
        ]

    def test_counterargument_partitions(self):
        points = ["理論の整理", "批判的検討", "問題提起"]
        assert prioritize_by_intent(points, GenerationIntent.CONSIDER_COUNTERARGUMENT) == [
            "批判的検討", "問題提起", "理論の整理",
        ]

    def test_change_viewpoint_prefers_diverse(self):
        existing = ["a b"]
        points = ["a b c", "x y", "a z"]
        assert prioritize_by_intent(points, GenerationIntent.CHANGE_VIEWPOINT, existing) == [
            "x y", "a z", "a b c",
        ]

    def test_no_intent(self):
        assert prioritize_by_intent(["b", "a"], None) == ["b", "a"]


class TestPartitionAndSelect:
    def test_partition_is_stable(self):
        assert partition_by_keywords(["x1", "k1", "x2", "k2"], ["k"]) == ["k1", "k2", "x1", "x2"]

    def test_select_relevant_prefers_keyword_matches(self):
        assert select_relevant(["a", "比較1", "b", "比較2", "比較3"], ["比較"], 2) == ["比較1", "比較2"]

    def test_select_relevant_falls_back_to_head(self):
        assert select_relevant(["a", "b", "c"], ["比較"], 2) == ["a", "b"]
        assert select_relevant(["a", "b", "c"], [], 2) == ["a", "b"]
