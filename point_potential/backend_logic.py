import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Mapping, Optional, Sequence

import numpy as np

from point_potential.models import Assignment, Subject, SubjectSummary

# ------------------------
# Core logic
# ------------------------
WEIGHT_TOLERANCE = 0.01
MIN_PERCENT = 0.0
MAX_PERCENT = 100.0


def round_percent(value: float, places: int = 1) -> float:
    """Half-up rounding for display, so 72.25% shows as 72.3% rather than 72.2%."""
    step = Decimal(1).scaleb(-places)
    return float(Decimal(repr(float(value))).quantize(step, rounding=ROUND_HALF_UP))


def _clamped_weights(assignments: Sequence[Assignment]) -> np.ndarray:
    weights = np.array(
        [a.weight if a.weight is not None else 0.0 for a in assignments],
        dtype=float,
    )
    # NaN weights count as unset
    weights = np.nan_to_num(weights, nan=0.0)
    return np.clip(weights, MIN_PERCENT, MAX_PERCENT)


def validate_weight_total(assignments: Sequence[Assignment]) -> bool:
    total_weight = float(_clamped_weights(assignments).sum())
    return abs(total_weight - MAX_PERCENT) < WEIGHT_TOLERANCE


def weight_validation_message(total_weight: float) -> str:
    if abs(total_weight - MAX_PERCENT) < WEIGHT_TOLERANCE:
        return "Assignment weights total 100% ✓"
    if total_weight < MAX_PERCENT:
        return (
            f"Assignment weights currently total {total_weight:.1f}% "
            f"(need {MAX_PERCENT - total_weight:.1f}% more)"
        )
    return (
        f"Assignment weights currently total {total_weight:.1f}% "
        f"({total_weight - MAX_PERCENT:.1f}% too high)"
    )


def summarize(subject: Subject) -> SubjectSummary:
    """
    Weighted summary of one subject.

    Grades count as grade * weight / 100. When the weights do not total
    100% every grade-derived figure is reported as 0 rather than a
    partial number; the validation message explains the shortfall.
    """
    assignments = subject.assignments
    weights = _clamped_weights(assignments)
    graded = np.array([a.grade is not None for a in assignments], dtype=bool)
    grades = np.array(
        [a.grade if a.grade is not None else 0.0 for a in assignments],
        dtype=float,
    )
    grades = np.clip(np.nan_to_num(grades, nan=0.0), MIN_PERCENT, MAX_PERCENT)

    total_weight = float(weights.sum())
    is_weight_valid = abs(total_weight - MAX_PERCENT) < WEIGHT_TOLERANCE

    if is_weight_valid:
        current_total = float(np.dot(grades[graded], weights[graded]) / 100.0)
        completed_weight = float(weights[graded].sum())
        remaining_weight = float(weights[~graded].sum())
        point_potential = current_total + remaining_weight
    else:
        current_total = 0.0
        completed_weight = 0.0
        remaining_weight = 0.0
        point_potential = 0.0

    return SubjectSummary(
        current_total=current_total,
        point_potential=point_potential,
        remaining_weight=remaining_weight,
        completed_weight=completed_weight,
        total_weight=total_weight,
        is_weight_valid=is_weight_valid,
        is_complete=is_weight_valid and remaining_weight == 0,
        weight_validation_message=weight_validation_message(total_weight),
    )


def _in_percent_range(x: float) -> bool:
    return math.isfinite(x) and MIN_PERCENT <= x <= MAX_PERCENT


def required_grade(current_total: float,
                   target_grade: float,
                   remaining_weight: float) -> Optional[float]:
    """
    Average grade needed across all remaining weight to finish on
    target_grade. Returns None when there is nothing left to earn, when an
    input is outside 0-100, or when the target is already secured.

    Values above 100 are returned unchanged; callers decide how to
    present an unreachable target.
    """
    try:
        values = [float(current_total), float(target_grade), float(remaining_weight)]
    except (TypeError, ValueError):
        return None

    if not all(_in_percent_range(v) for v in values):
        return None

    current, target, remaining = values
    if remaining <= 0:
        return None

    x = (target - current) / remaining * 100.0
    if not math.isfinite(x) or x < 0:
        return None
    return x


def describe_required_grade(value: Optional[float]) -> str:
    if value is None:
        return "Not applicable"
    if value > MAX_PERCENT:
        return "Not possible"
    return f"{round_percent(value):.1f}%"


def project_final_grade(subject: Subject,
                        planned_grades: Mapping[str, float]) -> SubjectSummary:
    """
    Summary of the subject if the ungraded assignments received the
    planned grades. Recorded grades are never overwritten and unknown ids
    are ignored.
    """
    projected = []
    for assignment in subject.assignments:
        if assignment.grade is None and assignment.id in planned_grades:
            projected.append(
                Assignment(
                    id=assignment.id,
                    name=assignment.name,
                    weight=assignment.weight,
                    grade=float(planned_grades[assignment.id]),
                )
            )
        else:
            projected.append(assignment)

    return summarize(Subject(id=subject.id, name=subject.name, assignments=tuple(projected)))
