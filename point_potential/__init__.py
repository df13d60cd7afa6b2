from point_potential.backend_logic import (
    describe_required_grade,
    project_final_grade,
    required_grade,
    summarize,
)
from point_potential.models import (
    Assignment,
    SetGrade,
    SetName,
    SetWeight,
    Subject,
    SubjectSummary,
)
from point_potential.state_codec import build_share_link, decode, decode_token, encode

__all__ = [
    "Assignment",
    "SetGrade",
    "SetName",
    "SetWeight",
    "Subject",
    "SubjectSummary",
    "build_share_link",
    "decode",
    "decode_token",
    "describe_required_grade",
    "encode",
    "project_final_grade",
    "required_grade",
    "summarize",
]
