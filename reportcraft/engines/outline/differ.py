"""
Outline Differ - section-by-section comparison of two outline snapshots.

Sections are matched by title. Within a matched section each new point is:
  - unchanged  when some old point is more than 70% similar (not reported)
  - modified   when the first old point in the 30-70% band is found
  - added      otherwise
Old points without a >70% partner that were not used as a "before" are
reported removed.

Modified pairing is greedy: the first old point in the band wins, even when a
later old point would be a better match.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from reportcraft.engines.outline.similarity import (
    MODIFIED_THRESHOLD,
    UNCHANGED_THRESHOLD,
    similarity,
)
from reportcraft.engines.outline.types import ReportOutline, Section


@dataclass(frozen=True)
class ModifiedPoint:
    before: str
    after: str
    index: int


@dataclass
class OutlineDiff:
    """Changes within one section."""
    section_title: str
    added_points: List[str] = field(default_factory=list)
    removed_points: List[str] = field(default_factory=list)
    modified_points: List[ModifiedPoint] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.added_points or self.removed_points or self.modified_points)


@dataclass
class OutlineDiffResult:
    diffs: List[OutlineDiff] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return len(self.diffs) > 0


def _find_section(sections: Sequence[Section], title: str) -> Optional[Section]:
    for section in sections:
        if section.title == title:
            return section
    return None


def diff_section(title: str, old_points: Sequence[str], new_points: Sequence[str]) -> OutlineDiff:
    """Diff the points of one matched section."""
    result = OutlineDiff(section_title=title)

    for new_point in new_points:
        if any(similarity(new_point, old) > UNCHANGED_THRESHOLD for old in old_points):
            continue

        similar_old = next(
            (
                old for old in old_points
                if MODIFIED_THRESHOLD < similarity(new_point, old) <= UNCHANGED_THRESHOLD
            ),
            None,
        )
        if similar_old is not None:
            result.modified_points.append(ModifiedPoint(
                before=similar_old,
                after=new_point,
                index=list(old_points).index(similar_old),
            ))
        else:
            result.added_points.append(new_point)

    consumed = {mp.before for mp in result.modified_points}
    for old_point in old_points:
        if any(similarity(new, old_point) > UNCHANGED_THRESHOLD for new in new_points):
            continue
        if old_point not in consumed:
            result.removed_points.append(old_point)

    return result


def diff_outline(old: ReportOutline, new: ReportOutline) -> OutlineDiffResult:
    """
    Compare two outlines.

    Returns:
        OutlineDiffResult with one entry per section that changed
    """
    result = OutlineDiffResult()

    for old_section in old.sections:
        new_section = _find_section(new.sections, old_section.title)
        if new_section is None:
            entry = OutlineDiff(
                section_title=old_section.title,
                removed_points=list(old_section.points),
            )
        else:
            entry = diff_section(old_section.title, old_section.points, new_section.points)
        if entry.has_changes:
            result.diffs.append(entry)

    for new_section in new.sections:
        if _find_section(old.sections, new_section.title) is None and new_section.points:
            result.diffs.append(OutlineDiff(
                section_title=new_section.title,
                added_points=list(new_section.points),
            ))

    return result
