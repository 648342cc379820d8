# services/eligibility/app/validation.py
from __future__ import annotations
import json
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Union

from schemas.models import ApplicantProfile
from .criteria import CriteriaRegistry, applicant_types, criteria_for

REQUIRED_FIELDS = ("applicantType", "age", "monthlyIncome", "cibilScore", "employmentYears")

MISSING_FIELDS_MESSAGE = "All fields are required"
MALFORMED_BODY_MESSAGE = "Malformed JSON request body"
BODY_TOO_LARGE_MESSAGE = "Request body too large"

_MISSING = object()
_NUMBER_RE = re.compile(r"^[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?$")
_RADIX_RE = re.compile(r"^0([xXoObB])([0-9a-zA-Z]+)$")
_RADIX = {"x": 16, "o": 8, "b": 2}
_INFINITY = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}


@dataclass(frozen=True)
class ValidationFailure:
    message: str
    status_code: int = 400


ParseOutcome = Union[ApplicantProfile, ValidationFailure]


# =========================
# Helpers (pure functions)
# =========================

def is_blank(value: Any) -> bool:
    """Falsy in the loose sense clients rely on: absent, null, false, 0, "" or NaN."""
    if value is _MISSING or value is None or value is False:
        return True
    if isinstance(value, (int, float)):
        return value == 0 or (isinstance(value, float) and math.isnan(value))
    if isinstance(value, str):
        return value == ""
    return False


def _number_from_string(value: str) -> float:
    s = value.strip()
    if not s:
        return 0.0
    if s in _INFINITY:
        return _INFINITY[s]
    if _NUMBER_RE.match(s):
        return float(s)
    m = _RADIX_RE.match(s)
    if m:
        try:
            return float(int(m.group(2), _RADIX[m.group(1).lower()]))
        except ValueError:
            return math.nan
        except OverflowError:
            return math.inf
    return math.nan


def to_number(value: Any) -> float:
    """
    Numeric coercion for request fields, following JavaScript's Number().
    Numbers, numeric strings (decimal, 0x/0o/0b, Infinity) convert; null and
    blank strings become 0; an empty list is 0 and a one-item list converts
    its item; anything else (including an absent field) becomes NaN.
    """
    if value is _MISSING:
        return math.nan
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, float):
        return value
    if isinstance(value, int):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        return _number_from_string(value)
    if isinstance(value, list):
        if not value:
            return 0.0
        if len(value) > 1:
            return math.nan
        item = value[0]
        # a single item stringifies as itself; booleans become "true"/"false"
        if isinstance(item, bool):
            return math.nan
        if item is None or isinstance(item, (int, float, str, list)):
            return to_number(item)
    return math.nan


def invalid_type_message(registry: CriteriaRegistry) -> str:
    return "Invalid applicant type. Choose: " + " or ".join(applicant_types(registry))


def decode_json_body(body: bytes) -> Union[Dict[str, Any], ValidationFailure]:
    """Empty bodies and non-object JSON decode to an empty payload."""
    if not body.strip():
        return {}
    try:
        data = json.loads(body)
    except ValueError:
        return ValidationFailure(MALFORMED_BODY_MESSAGE)
    return data if isinstance(data, dict) else {}


# =========================
# Payload -> ApplicantProfile
# =========================

def parse_applicant(payload: Mapping[str, Any], registry: CriteriaRegistry) -> ParseOutcome:
    """
    Presence checks first, then applicant type, then the typed profile.
    Zero-valued required fields count as missing.
    """
    for name in REQUIRED_FIELDS:
        if is_blank(payload.get(name, _MISSING)):
            return ValidationFailure(MISSING_FIELDS_MESSAGE)

    applicant_type = payload["applicantType"]
    if criteria_for(registry, applicant_type) is None:
        return ValidationFailure(invalid_type_message(registry))

    return ApplicantProfile(
        applicant_type=applicant_type,
        age=to_number(payload["age"]),
        monthly_income=to_number(payload["monthlyIncome"]),
        cibil_score=to_number(payload["cibilScore"]),
        total_emi=to_number(payload.get("totalEmi", _MISSING)),
        employment_years=to_number(payload["employmentYears"]),
    )
