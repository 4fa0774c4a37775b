"""
Feedback data models.

Normalized feedback rows and the chart/summary payloads built from them.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List


@dataclass(frozen=True)
class FeedbackRecord:
    """
    One normalized row of the feedback sheet.
    Only rows with a parseable date become records.
    """
    date: datetime
    understanding: float = 0.0
    instructor: float = 0.0
    comment: str = ""


@dataclass
class SummaryGraph:
    """Headline stats for daily, specific and monthly windows."""
    total_feedbacks: int
    avg_understanding: float
    avg_instructor: float

    def to_dict(self) -> dict:
        return {
            "totalFeedbacks": self.total_feedbacks,
            "avgUnderstanding": self.avg_understanding,
            "avgInstructor": self.avg_instructor,
        }


@dataclass
class TimeseriesGraph:
    """
    Index-aligned chart series for range and full windows.
    Buckets are ordered by ascending key.
    """
    labels: List[str] = field(default_factory=list)
    understanding: List[float] = field(default_factory=list)
    instructor: List[float] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "labels": list(self.labels),
            "understanding": list(self.understanding),
            "instructor": list(self.instructor),
        }


@dataclass
class PositiveFeedback:
    quote: str
    keywords: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "PositiveFeedback":
        keywords = data.get("keywords") or []
        if not isinstance(keywords, list):
            keywords = [keywords]
        return cls(
            quote=str(data.get("quote", "")),
            keywords=[str(k) for k in keywords[:3]],
        )

    def to_dict(self) -> dict:
        return {"quote": self.quote, "keywords": list(self.keywords)}


@dataclass
class ImprovementArea:
    theme: str
    suggestion: str

    @classmethod
    def from_dict(cls, data: dict) -> "ImprovementArea":
        return cls(
            theme=str(data.get("theme", "")),
            suggestion=str(data.get("suggestion", "")),
        )

    def to_dict(self) -> dict:
        return {"theme": self.theme, "suggestion": self.suggestion}


@dataclass
class CommentAnalysis:
    """Structured summary of free-text comments."""
    positive_feedback: List[PositiveFeedback] = field(default_factory=list)
    improvement_areas: List[ImprovementArea] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "positiveFeedback": [item.to_dict() for item in self.positive_feedback],
            "improvementAreas": [item.to_dict() for item in self.improvement_areas],
        }
