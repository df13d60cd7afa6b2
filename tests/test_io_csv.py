# tests/test_io_csv.py

import io

import pandas as pd
import pytest

from point_potential.io_csv import (
    parse_assignments,
    read_csv_upload,
    subjects_to_frame,
    summary_frame,
    validate_assignments_csv,
)


def _upload(text: str) -> io.StringIO:
    return io.StringIO(text)


def test_read_csv_upload_normalises_headers():
    df = read_csv_upload(_upload(" Assignment ,WEIGHT,Score\nEssay,40,72\n"))

    assert list(df.columns) == ["name", "weight", "grade"]


def test_validate_assignments_csv_requires_columns():
    df = read_csv_upload(_upload("Name,Grade\nEssay,72\n"))

    with pytest.raises(ValueError, match="Missing columns: \\['weight'\\]"):
        validate_assignments_csv(df)


def test_validate_assignments_csv_grade_optional():
    df = validate_assignments_csv(read_csv_upload(_upload("Name,Weight\nEssay,40\n")))

    assert list(df.columns) == ["Name", "Weight", "Grade"]
    assert df.loc[0, "Grade"] == ""


def test_parse_assignments():
    df = validate_assignments_csv(
        read_csv_upload(_upload("Name,Weight,Grade\nEssay,40,72\nExam,60,\n,10,10\n"))
    )

    assignments = parse_assignments(df)

    assert [a.name for a in assignments] == ["Essay", "Exam"]
    assert assignments[0].weight == 40.0
    assert assignments[0].grade == 72.0
    assert assignments[1].grade is None
    assert assignments[0].id != assignments[1].id


def test_parse_assignments_reports_bad_row():
    df = validate_assignments_csv(
        read_csv_upload(_upload("Name,Weight,Grade\nEssay,40,72\nExam,sixty,\n"))
    )

    with pytest.raises(ValueError, match="Row 3 \\(Exam\\): Please enter a valid number"):
        parse_assignments(df)


def test_parse_assignments_rejects_out_of_range_grade():
    df = validate_assignments_csv(read_csv_upload(_upload("Name,Weight,Grade\nEssay,40,140\n")))

    with pytest.raises(ValueError, match="Value must be between 0 and 100"):
        parse_assignments(df)


def test_subjects_to_frame(data_structures_subject):
    df = subjects_to_frame([data_structures_subject])

    assert list(df.columns) == ["Subject", "Assignment", "Weight", "Grade"]
    assert len(df) == 4
    assert df.loc[0, "Subject"] == "Data Structures"
    assert pd.isna(df.loc[3, "Grade"])


def test_summary_frame(data_structures_subject, underweighted_subject):
    df = summary_frame([data_structures_subject, underweighted_subject])

    assert list(df["Subject"]) == ["Data Structures", "Database Systems"]
    assert df.loc[0, "Current Grade"] == pytest.approx(54.9)
    assert df.loc[0, "Best Possible"] == pytest.approx(89.9)
    assert bool(df.loc[0, "Weights Valid"])
    assert not bool(df.loc[1, "Weights Valid"])
    assert df.loc[1, "Current Grade"] == 0


def test_summary_frame_empty():
    df = summary_frame([])

    assert df.empty
    assert "Current Grade" in df.columns
