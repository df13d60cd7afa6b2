# tests/conftest.py

import pytest

from point_potential.models import Assignment, Subject
from point_potential.state import PlannerState


@pytest.fixture
def data_structures_subject():
    return Subject(
        id="s001",
        name="Data Structures",
        assignments=(
            Assignment("a001", "Sorting Algorithms", 20.0, 85.0),
            Assignment("a002", "Tree Traversal", 20.0, 92.0),
            Assignment("a003", "Mid-semester Exam", 25.0, 78.0),
            Assignment("a004", "Final Exam", 35.0),
        ),
    )


@pytest.fixture
def fully_graded_subject():
    return Subject(
        id="s002",
        name="Web Development",
        assignments=(
            Assignment("a101", "Frontend App", 40.0, 95.0),
            Assignment("a102", "Backend API", 40.0, 88.0),
            Assignment("a103", "Documentation", 20.0, 90.0),
        ),
    )


@pytest.fixture
def underweighted_subject():
    return Subject(
        id="s003",
        name="Database Systems",
        assignments=(
            Assignment("a201", "SQL Assignment", 15.0, 100.0),
            Assignment("a202", "NoSQL Project", 25.0),
            Assignment("a203", "Mid-term", 25.0),
        ),
    )


@pytest.fixture
def sample_state(data_structures_subject, fully_graded_subject):
    return PlannerState(
        subjects=(data_structures_subject, fully_graded_subject),
        expanded_ids=frozenset({"s001"}),
        showing_demo=False,
    )
