"""
Planner state container.

PlannerState is an immutable snapshot of everything the UI edits. Each
operation here takes a snapshot and returns a new one, so the page keeps
exactly one current value in its session and never mutates subjects in
place.
"""
import logging
import math
from dataclasses import dataclass, replace
from typing import Callable, FrozenSet, Optional, Sequence, Tuple

from point_potential.backend_logic import MAX_PERCENT, MIN_PERCENT
from point_potential.demo_data import get_demo_data
from point_potential.models import (
    Assignment,
    AssignmentUpdate,
    SetGrade,
    SetName,
    SetWeight,
    Subject,
    new_id,
)

logger = logging.getLogger(__name__)

INPUT_FIELDS = ("name", "weight", "grade")


@dataclass(frozen=True)
class PlannerState:
    subjects: Tuple[Subject, ...] = ()
    expanded_ids: FrozenSet[str] = frozenset()
    showing_demo: bool = False


# ------------------------
# Input validation
# ------------------------

def parse_percentage(raw: str, allow_blank: bool = True) -> Optional[float]:
    """
    Parse user-entered text as a 0-100 percentage.

    Blank text gives None when allow_blank is set. Raises ValueError with a
    message suitable for showing next to the input otherwise.
    """
    text = (raw or "").strip()
    if not text:
        if allow_blank:
            return None
        raise ValueError("Please enter a valid number")

    try:
        value = float(text)
    except ValueError:
        raise ValueError("Please enter a valid number") from None

    if not math.isfinite(value):
        raise ValueError("Please enter a valid number")
    if value < MIN_PERCENT or value > MAX_PERCENT:
        raise ValueError("Value must be between 0 and 100")
    return value


def _require_name(name: str, what: str) -> str:
    if not name or not name.strip():
        raise ValueError(f"Please enter a {what} name")
    return name


# ------------------------
# Lookup helpers
# ------------------------

def find_subject(state: PlannerState, subject_id: str) -> Subject:
    for subject in state.subjects:
        if subject.id == subject_id:
            return subject
    raise KeyError(f"No subject with id {subject_id!r}")


def _replace_subject(state: PlannerState,
                     subject_id: str,
                     change: Callable[[Subject], Subject]) -> PlannerState:
    find_subject(state, subject_id)
    subjects = tuple(
        change(subject) if subject.id == subject_id else subject
        for subject in state.subjects
    )
    return replace(state, subjects=subjects)


# ------------------------
# Loading
# ------------------------

def load_demo(state: PlannerState) -> PlannerState:
    subjects = tuple(get_demo_data())
    return PlannerState(
        subjects=subjects,
        expanded_ids=frozenset(s.id for s in subjects),
        showing_demo=True,
    )


def clear_demo(state: PlannerState) -> PlannerState:
    return PlannerState(subjects=(), expanded_ids=frozenset(), showing_demo=False)


def initial_state(shared: Optional[Sequence[Subject]] = None) -> PlannerState:
    if shared:
        logger.info(f"Restoring {len(shared)} subject(s) from share link")
        return PlannerState(
            subjects=tuple(shared),
            expanded_ids=frozenset(s.id for s in shared),
            showing_demo=False,
        )
    return load_demo(PlannerState())


# ------------------------
# Subjects
# ------------------------

def add_subject(state: PlannerState, name: str) -> PlannerState:
    subject = Subject(id=new_id(), name=_require_name(name, "subject"))
    logger.debug(f"Adding subject {subject.id} ({subject.name})")
    return replace(
        state,
        subjects=state.subjects + (subject,),
        expanded_ids=state.expanded_ids | {subject.id},
    )


def remove_subject(state: PlannerState, subject_id: str) -> PlannerState:
    find_subject(state, subject_id)
    logger.debug(f"Removing subject {subject_id}")
    return replace(
        state,
        subjects=tuple(s for s in state.subjects if s.id != subject_id),
        expanded_ids=state.expanded_ids - {subject_id},
    )


def rename_subject(state: PlannerState, subject_id: str, name: str) -> PlannerState:
    name = _require_name(name, "subject")
    return _replace_subject(state, subject_id, lambda s: replace(s, name=name))


def toggle_subject(state: PlannerState, subject_id: str) -> PlannerState:
    find_subject(state, subject_id)
    if subject_id in state.expanded_ids:
        return replace(state, expanded_ids=state.expanded_ids - {subject_id})
    return replace(state, expanded_ids=state.expanded_ids | {subject_id})


# ------------------------
# Assignments
# ------------------------

def add_assignment(state: PlannerState,
                   subject_id: str,
                   assignment: Optional[Assignment] = None) -> PlannerState:
    def change(subject: Subject) -> Subject:
        new = assignment or Assignment(
            id=new_id(),
            name=f"Assignment {len(subject.assignments) + 1}",
            weight=0.0,
            grade=None,
        )
        return replace(subject, assignments=subject.assignments + (new,))

    return _replace_subject(state, subject_id, change)


def remove_assignment(state: PlannerState, subject_id: str, assignment_id: str) -> PlannerState:
    def change(subject: Subject) -> Subject:
        if not any(a.id == assignment_id for a in subject.assignments):
            raise KeyError(f"No assignment with id {assignment_id!r}")
        return replace(
            subject,
            assignments=tuple(a for a in subject.assignments if a.id != assignment_id),
        )

    return _replace_subject(state, subject_id, change)


def apply_update(assignment: Assignment, update: AssignmentUpdate) -> Assignment:
    if isinstance(update, SetName):
        return replace(assignment, name=update.name)
    if isinstance(update, SetWeight):
        return replace(assignment, weight=float(update.weight))
    if isinstance(update, SetGrade):
        grade = None if update.grade is None else float(update.grade)
        return replace(assignment, grade=grade)
    raise TypeError(f"Unknown assignment update: {update!r}")


def update_assignment(state: PlannerState,
                      subject_id: str,
                      assignment_id: str,
                      update: AssignmentUpdate) -> PlannerState:
    def change(subject: Subject) -> Subject:
        if not any(a.id == assignment_id for a in subject.assignments):
            raise KeyError(f"No assignment with id {assignment_id!r}")
        return replace(
            subject,
            assignments=tuple(
                apply_update(a, update) if a.id == assignment_id else a
                for a in subject.assignments
            ),
        )

    return _replace_subject(state, subject_id, change)


def apply_input(state: PlannerState,
                subject_id: str,
                assignment_id: str,
                field: str,
                raw: str) -> PlannerState:
    """
    Validate raw text from an assignment row and apply it.

    A blank weight means 0 and a blank grade clears the grade. Invalid
    text raises ValueError and leaves the state untouched.
    """
    if field == "name":
        update = SetName(raw)
    elif field == "weight":
        weight = parse_percentage(raw)
        update = SetWeight(weight if weight is not None else 0.0)
    elif field == "grade":
        update = SetGrade(parse_percentage(raw))
    else:
        raise ValueError(f"Unknown field {field!r}. Expected one of {INPUT_FIELDS}.")

    return update_assignment(state, subject_id, assignment_id, update)
