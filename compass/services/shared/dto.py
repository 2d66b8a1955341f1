from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, TypedDict


class CourseTrackerPayload(TypedDict):
    id: int
    semesters: List[Dict[str, Any]]
    cumulative_gpa: float
    total_credits: float
    updated_at: str


class UserSummaryPayload(TypedDict):
    name: str
    grade: int


@dataclass(slots=True)
class PlanGenerationResult:
    success: bool
    message: str
    used_fallback: bool
    strategy: str
    warning: str = ""
    provider: str = ""
    model: str = ""
    value_issues: List[str] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"success": self.success, "message": self.message}
        if self.warning:
            out["warning"] = self.warning
        return out
