"""
Data models for subjects, assignments and the derived subject summary.

Subjects and assignments are frozen; edits go through the update variants
below and always produce new objects.
"""
import uuid
from dataclasses import dataclass
from typing import Optional, Tuple, Union


def new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Assignment:
    """A weighted piece of assessed work. grade is None until it is marked."""
    id: str
    name: str
    weight: float = 0.0
    grade: Optional[float] = None

    @property
    def is_graded(self) -> bool:
        return self.grade is not None


@dataclass(frozen=True)
class Subject:
    id: str
    name: str
    assignments: Tuple[Assignment, ...] = ()


@dataclass(frozen=True)
class SubjectSummary:
    current_total: float
    point_potential: float
    remaining_weight: float
    completed_weight: float
    total_weight: float
    is_weight_valid: bool
    is_complete: bool
    weight_validation_message: str

    @property
    def current_grade(self) -> float:
        return self.current_total

    @property
    def best_possible(self) -> float:
        return self.point_potential

    @property
    def remaining_points(self) -> float:
        return self.remaining_weight


# ------------------------
# Assignment updates
# ------------------------

@dataclass(frozen=True)
class SetName:
    name: str


@dataclass(frozen=True)
class SetWeight:
    weight: float


@dataclass(frozen=True)
class SetGrade:
    grade: Optional[float]


AssignmentUpdate = Union[SetName, SetWeight, SetGrade]
