"""
Shared outline types - breaks circular imports between the engines and the
API schemas.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class Section(BaseModel):
    """One section of an outline; point order is the argument order."""

    title: str
    points: List[str] = Field(default_factory=list)
    is_fallback: bool = False


class ReportOutline(BaseModel):
    """A generated or edited outline."""

    sections: List[Section] = Field(default_factory=list)
    core_question: Optional[str] = None
