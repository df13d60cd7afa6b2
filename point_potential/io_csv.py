from typing import List, Sequence

import pandas as pd

from point_potential.backend_logic import summarize
from point_potential.models import Assignment, Subject, new_id
from point_potential.state import parse_percentage

# ------------------------
# CSV helpers (UI-side)
# ------------------------

COLUMN_ALIASES = {
    "assignment": "name",
    "title": "name",
    "score": "grade",
    "mark": "grade",
}


def _normalise_cols(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [str(c).strip().lower() for c in df.columns]
    # allow common alternative headers
    for alias, column in COLUMN_ALIASES.items():
        if alias in df.columns and column not in df.columns:
            df = df.rename(columns={alias: column})
    return df


def read_csv_upload(uploaded_file) -> pd.DataFrame:
    df = pd.read_csv(uploaded_file, dtype=str, keep_default_na=False)
    return _normalise_cols(df)


def validate_assignments_csv(df: pd.DataFrame) -> pd.DataFrame:
    required = {"name", "weight"}
    missing = required - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns: {sorted(missing)}. Expected: Name, Weight, Grade.")
    out = df.copy()
    if "grade" not in out.columns:
        out["grade"] = ""
    out = out[["name", "weight", "grade"]]
    out = out.rename(columns={"name": "Name", "weight": "Weight", "grade": "Grade"})
    return out


def _cell_text(value) -> str:
    if value is None or pd.isna(value):
        return ""
    return str(value)


def parse_assignments(df: pd.DataFrame) -> List[Assignment]:
    """
    Rows with a blank name are skipped. A blank grade means not yet marked;
    a blank weight counts as 0.
    """
    rows = []
    for idx, row in df.iterrows():
        name = _cell_text(row.get("Name")).strip()
        if not name:
            continue
        try:
            weight = parse_percentage(_cell_text(row.get("Weight")))
            grade = parse_percentage(_cell_text(row.get("Grade")))
        except ValueError as e:
            # header is line 1
            raise ValueError(f"Row {int(idx) + 2} ({name}): {e}") from None
        rows.append(
            Assignment(
                id=new_id(),
                name=name,
                weight=weight if weight is not None else 0.0,
                grade=grade,
            )
        )
    return rows


def subjects_to_frame(subjects: Sequence[Subject]) -> pd.DataFrame:
    records = [
        {
            "Subject": subject.name,
            "Assignment": assignment.name,
            "Weight": assignment.weight,
            "Grade": assignment.grade,
        }
        for subject in subjects
        for assignment in subject.assignments
    ]
    return pd.DataFrame(records, columns=["Subject", "Assignment", "Weight", "Grade"])


def summary_frame(subjects: Sequence[Subject]) -> pd.DataFrame:
    records = []
    for subject in subjects:
        summary = summarize(subject)
        records.append(
            {
                "Subject": subject.name,
                "Current Grade": summary.current_grade,
                "Best Possible": summary.best_possible,
                "Remaining Weight": summary.remaining_weight,
                "Total Weight": summary.total_weight,
                "Weights Valid": summary.is_weight_valid,
                "Complete": summary.is_complete,
            }
        )
    return pd.DataFrame(
        records,
        columns=[
            "Subject",
            "Current Grade",
            "Best Possible",
            "Remaining Weight",
            "Total Weight",
            "Weights Valid",
            "Complete",
        ],
    )
