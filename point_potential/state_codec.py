"""
Share-link encoding of the subject list.

A token is URL-safe base64 over compact JSON of the form

    {"subjects": [{"id", "name", "assignments": [{"id", "name", "weight", "grade"}]}]}

where an ungraded assignment carries "grade": null.
"""
import base64
import binascii
import json
import logging
import math
from typing import Any, List, Optional, Sequence
from urllib.parse import parse_qs, urlsplit, urlunsplit

from point_potential.models import Assignment, Subject

logger = logging.getLogger(__name__)

QUERY_PARAM = "data"


class MalformedStateError(ValueError):
    pass


# ------------------------
# Encoding
# ------------------------

def _assignment_to_dict(assignment: Assignment) -> dict:
    return {
        "id": assignment.id,
        "name": assignment.name,
        "weight": assignment.weight,
        "grade": assignment.grade,
    }


def to_document(subjects: Sequence[Subject]) -> dict:
    return {
        "subjects": [
            {
                "id": subject.id,
                "name": subject.name,
                "assignments": [_assignment_to_dict(a) for a in subject.assignments],
            }
            for subject in subjects
        ]
    }


def encode(subjects: Sequence[Subject]) -> str:
    text = json.dumps(to_document(subjects), separators=(",", ":"), ensure_ascii=False)
    return base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii")


def build_share_link(base_url: str, subjects: Sequence[Subject]) -> str:
    scheme, netloc, path, _, _ = urlsplit(base_url)
    base = urlunsplit((scheme, netloc, path, "", ""))
    return f"{base}?{QUERY_PARAM}={encode(subjects)}"


# ------------------------
# Decoding
# ------------------------

def _expect_str(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise MalformedStateError(f"'{field}' must be a string (got {type(value).__name__}).")
    return value


def _expect_number(value: Any, field: str) -> float:
    # bool is an int subclass; true/false are not valid numbers here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedStateError(f"'{field}' must be a number (got {value!r}).")
    number = float(value)
    if not math.isfinite(number):
        raise MalformedStateError(f"'{field}' must be finite (got {value!r}).")
    return number


def _assignment_from_dict(data: Any) -> Assignment:
    if not isinstance(data, dict):
        raise MalformedStateError("Assignment entries must be objects.")
    grade = data.get("grade")
    return Assignment(
        id=_expect_str(data.get("id"), "id"),
        name=_expect_str(data.get("name"), "name"),
        weight=_expect_number(data.get("weight", 0), "weight"),
        grade=None if grade is None else _expect_number(grade, "grade"),
    )


def from_document(document: Any) -> List[Subject]:
    if not isinstance(document, dict) or not isinstance(document.get("subjects"), list):
        raise MalformedStateError("Expected an object with a 'subjects' list.")

    subjects = []
    for data in document["subjects"]:
        if not isinstance(data, dict):
            raise MalformedStateError("Subject entries must be objects.")
        assignments = data.get("assignments", [])
        if not isinstance(assignments, list):
            raise MalformedStateError("'assignments' must be a list.")
        subjects.append(
            Subject(
                id=_expect_str(data.get("id"), "id"),
                name=_expect_str(data.get("name"), "name"),
                assignments=tuple(_assignment_from_dict(a) for a in assignments),
            )
        )
    return subjects


def _b64decode(token: str) -> bytes:
    # Accept both alphabets; '+' may have arrived as a space from a form-encoded URL
    normalised = token.strip().replace(" ", "+").replace("-", "+").replace("_", "/")
    normalised += "=" * (-len(normalised) % 4)
    return base64.b64decode(normalised, validate=True)


def decode_token(token: Optional[str]) -> Optional[List[Subject]]:
    """
    Subjects carried by a share token, or None when the token is missing
    or cannot be read. Never raises.
    """
    if not token:
        return None
    try:
        document = json.loads(_b64decode(token).decode("utf-8"))
        return from_document(document)
    except (binascii.Error, UnicodeDecodeError, ValueError, RecursionError) as e:
        # json.JSONDecodeError and MalformedStateError are ValueErrors;
        # RecursionError comes from deeply nested JSON
        logger.warning(f"Failed to decode shared state: {e}")
        return None


def decode(query_string: str) -> Optional[List[Subject]]:
    params = parse_qs(query_string.lstrip("?"), keep_blank_values=True)
    values = params.get(QUERY_PARAM)
    if not values:
        return None
    return decode_token(values[0])
