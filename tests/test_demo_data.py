# tests/test_demo_data.py

from point_potential.backend_logic import summarize
from point_potential.demo_data import get_demo_data


def test_demo_data_has_four_valid_subjects():
    subjects = get_demo_data()

    assert len(subjects) == 4
    assert all(summarize(s).is_weight_valid for s in subjects)


def test_demo_data_covers_graded_and_mixed_subjects():
    summaries = [summarize(s) for s in get_demo_data()]

    assert any(s.is_complete for s in summaries)
    assert any(not s.is_complete and s.completed_weight > 0 for s in summaries)


def test_demo_data_is_a_fresh_copy():
    assert get_demo_data() == get_demo_data()
    assert get_demo_data() is not get_demo_data()
