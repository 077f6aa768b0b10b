"""Unit tests for the outline differ."""

from reportcraft.engines.outline.differ import (
    ModifiedPoint,
    diff_outline,
    diff_section,
)
from reportcraft.engines.outline.types import ReportOutline, Section


def _outline(**sections) -> ReportOutline:
    return ReportOutline(sections=[Section(title=t, points=p) for t, p in sections.items()])


class TestDiffOutline:
    """Section-level comparison."""

    def test_identical_outlines(self, sample_outline):
        result = diff_outline(sample_outline, sample_outline)
        assert result.diffs == []
        assert not result.has_changes

    def test_modified_and_added(self):
        old = _outline(本論=["X理論 の 説明"])
        new = _outline(本論=["X理論 の 詳細な 解説", "Y新規論点"])

        result = diff_outline(old, new)

        assert len(result.diffs) == 1
        entry = result.diffs[0]
        assert entry.section_title == "本論"
        assert entry.modified_points == [
            ModifiedPoint(before="X理論 の 説明", after="X理論 の 詳細な 解説", index=0)
        ]
        assert entry.added_points == ["Y新規論点"]
        assert entry.removed_points == []

    def test_removed_section(self):
        old = _outline(序論=["a"], 結論=["b c"])
        new = _outline(序論=["a"])
        result = diff_outline(old, new)
        assert [(d.section_title, d.removed_points) for d in result.diffs] == [("結論", ["b c"])]

    def test_removed_empty_section_not_reported(self):
        old = _outline(序論=["a"], 結論=[])
        new = _outline(序論=["a"])
        assert not diff_outline(old, new).has_changes

    def test_added_section(self):
        old = _outline(序論=["a"])
        new = _outline(序論=["a"], 補論=["新しい 観点"])
        result = diff_outline(old, new)
        assert len(result.diffs) == 1
        assert result.diffs[0].section_title == "補論"
        assert result.diffs[0].added_points == ["新しい 観点"]

    def test_added_empty_section_not_reported(self):
        old = _outline(序論=["a"])
        new = _outline(序論=["a"], 補論=[])
        assert diff_outline(old, new).diffs == []

    def test_section_order_follows_old_then_new(self):
        old = _outline(序論=["a"], 本論=["b"])
        new = _outline(補論=["z"], 本論=["q"], 序論=["y"])
        titles = [d.section_title for d in diff_outline(old, new).diffs]
        assert titles == ["序論", "本論", "補論"]


class TestDiffSection:
    """Point classification within one section."""

    def test_unchanged_points_ignored(self):
        # 3/4 = 0.75 -> unchanged
        entry = diff_section("本論", ["a b c"], ["a b c d"])
        assert not entry.has_changes

    def test_unrelated_point_is_added_and_old_removed(self):
        entry = diff_section("本論", ["a b"], ["x y"])
        assert entry.added_points == ["x y"]
        assert entry.removed_points == ["a b"]
        assert entry.modified_points == []

    def test_similarity_exactly_threshold_is_added(self):
        # 3/10 = 0.3 is not above the modified bound
        entry = diff_section("本論", ["a b c d e f"], ["a b c g h i j"])
        assert entry.added_points == ["a b c g h i j"]
        assert entry.removed_points == ["a b c d e f"]

    def test_greedy_first_match(self):
        old = ["a b x y", "a b c d"]
        new = ["a b c e"]
        # both old points are in the modified band; the first one wins
        entry = diff_section("本論", old, new)
        assert entry.modified_points == [ModifiedPoint(before="a b x y", after="a b c e", index=0)]
        assert entry.removed_points == ["a b c d"]

    def test_modified_index_refers_to_old_position(self):
        entry = diff_section("本論", ["p q", "r s", "a b c"], ["a b z"])
        assert entry.modified_points[0].index == 2
