from typing import List

from point_potential.models import Assignment, Subject


def get_demo_data() -> List[Subject]:
    """Sample computer science subjects shown on first load."""
    return [
        Subject(
            id="1",
            name="Data Structures & Algorithms",
            assignments=(
                Assignment("1-1", "Assignment 1: Sorting Algorithms", 20.0, 85.0),
                Assignment("1-2", "Assignment 2: Tree Traversal", 20.0, 92.0),
                Assignment("1-3", "Mid-semester Exam", 25.0, 78.0),
                Assignment("1-4", "Final Exam", 35.0),
            ),
        ),
        Subject(
            id="2",
            name="Web Development",
            assignments=(
                Assignment("2-1", "Project: Frontend App", 40.0, 95.0),
                Assignment("2-2", "Project: Backend API", 40.0, 88.0),
                Assignment("2-3", "Documentation", 20.0, 90.0),
            ),
        ),
        Subject(
            id="3",
            name="Database Systems",
            assignments=(
                Assignment("3-1", "SQL Assignment", 15.0, 100.0),
                Assignment("3-2", "NoSQL Project", 25.0),
                Assignment("3-3", "Mid-term", 25.0),
                Assignment("3-4", "Final Project", 35.0),
            ),
        ),
        Subject(
            id="4",
            name="Software Engineering",
            assignments=(
                Assignment("4-1", "Group Project", 50.0),
                Assignment("4-2", "Individual Report", 30.0),
                Assignment("4-3", "Peer Reviews", 20.0),
            ),
        ),
    ]
