"""Tests for the eligibility evaluator: checks, score, DTI, instant approval, message."""

from __future__ import annotations

import math

import pytest

from app.criteria import CRITERIA
from app.evaluator import (
    ELIGIBLE_LOANS,
    ELIGIBLE_MESSAGE,
    debt_to_income,
    evaluate,
    format_dti,
    improvement_message,
)
from schemas.models import ApplicantProfile


def _profile(**overrides) -> ApplicantProfile:
    fields = dict(
        applicant_type="salaried",
        age=30,
        monthly_income=30000,
        cibil_score=720,
        total_emi=5000,
        employment_years=3,
    )
    fields.update(overrides)
    return ApplicantProfile(**fields)


def _evaluate(**overrides):
    profile = _profile(**overrides)
    return evaluate(profile, CRITERIA[profile.applicant_type])


def test_salaried_applicant_meeting_all_criteria():
    """Salaried, 30y, 30000 income, 720 CIBIL, 5000 EMI, 3y -> eligible, score 100, no instant approval."""
    result = _evaluate()
    assert result.dti == "16.67"
    assert result.checks.model_dump() == {
        "age": True, "income": True, "cibil": True, "employment": True, "dti": True,
    }
    assert result.passed_count == 5
    assert result.is_eligible is True
    assert result.score == 100
    assert result.instant_approval is False
    assert result.message == ELIGIBLE_MESSAGE
    assert result.eligible_loans == ELIGIBLE_LOANS


def test_salaried_applicant_failing_everything():
    """Salaried, 19y, 10000 income, 650 CIBIL, 8000 EMI, 1y -> nothing passes."""
    result = _evaluate(age=19, monthly_income=10000, cibil_score=650, total_emi=8000, employment_years=1)
    assert result.dti == "80.00"
    assert not any(result.checks.model_dump().values())
    assert result.passed_count == 0
    assert result.score == 0
    assert result.is_eligible is False
    assert result.message == "⚠️ Improve 5 parameters"
    assert result.eligible_loans == []


def test_self_employed_high_cibil_gets_instant_approval():
    """Self-employed with 760 CIBIL and other thresholds met -> eligible and instant approval."""
    result = _evaluate(
        applicant_type="self-employed",
        age=35,
        monthly_income=50000,
        cibil_score=760,
        total_emi=10000,
        employment_years=4,
    )
    assert result.is_eligible is True
    assert result.instant_approval is True


def test_instant_approval_independent_of_eligibility():
    """High CIBIL still flags instant approval when another check fails."""
    result = _evaluate(applicant_type="self-employed", age=70, monthly_income=50000,
                       cibil_score=760, total_emi=0, employment_years=4)
    assert result.checks.age is False
    assert result.is_eligible is False
    assert result.instant_approval is True


@pytest.mark.parametrize(
    "overrides, failing",
    [
        ({"age": 61}, "age"),
        ({"monthly_income": 24999, "total_emi": 0}, "income"),
        ({"cibil_score": 699}, "cibil"),
        ({"employment_years": 1.5}, "employment"),
        ({"total_emi": 12001}, "dti"),
    ],
)
def test_single_failing_check(overrides, failing):
    """Exactly one failing axis -> 4 passed, score 80, singular improvement message."""
    result = _evaluate(**overrides)
    checks = result.checks.model_dump()
    assert checks[failing] is False
    assert sum(checks.values()) == 4
    assert result.passed_count == 4
    assert result.score == 80
    assert result.is_eligible is False
    assert result.message == "⚠️ Improve 1 parameter"
    assert result.eligible_loans == []


def test_boundaries_are_inclusive():
    """Age min/max, income, CIBIL, tenure and DTI thresholds themselves pass."""
    low = _evaluate(age=21, monthly_income=25000, cibil_score=700, total_emi=10000, employment_years=2)
    high = _evaluate(age=60)
    assert low.dti == "40.00"
    assert low.is_eligible is True
    assert high.checks.age is True


def test_score_tracks_passed_count():
    """score == passedCount * 20 and eligibility only at 5/5."""
    samples = [
        _evaluate(),
        _evaluate(age=19),
        _evaluate(age=19, cibil_score=100),
        _evaluate(age=19, cibil_score=100, employment_years=0.5),
        _evaluate(age=19, cibil_score=100, employment_years=0.5, total_emi=29000),
        _evaluate(age=19, cibil_score=100, employment_years=0.5, monthly_income=1000, total_emi=2000),
    ]
    assert sorted(r.passed_count for r in samples) == [0, 1, 2, 3, 4, 5]
    for r in samples:
        assert r.score in {0, 20, 40, 60, 80, 100}
        assert r.score == r.passed_count * 20
        assert r.is_eligible == (r.passed_count == 5)


def test_zero_income_forces_full_dti():
    """Non-positive income -> DTI 100 and the DTI check fails."""
    result = _evaluate(monthly_income=0, total_emi=0)
    assert result.dti == "100.00"
    assert result.checks.dti is False
    assert result.checks.income is False


def test_missing_emi_fails_dti_check():
    """NaN EMI -> DTI rendered as NaN and its check fails; the rest are unaffected."""
    result = _evaluate(total_emi=math.nan)
    assert result.dti == "NaN"
    assert result.checks.dti is False
    assert result.passed_count == 4


def test_result_serializes_with_wire_names():
    """Dumped result uses the camelCase field names of the HTTP contract."""
    data = _evaluate().model_dump(by_alias=True)
    assert set(data) == {
        "success", "isEligible", "score", "passedCount", "totalParams",
        "checks", "instantApproval", "dti", "message", "eligibleLoans",
    }
    assert data["success"] is True
    assert data["totalParams"] == 5


def test_helpers():
    assert debt_to_income(5000, 20000) == 25.0
    assert debt_to_income(5000, -1) == 100.0
    assert format_dti(math.inf) == "Infinity"
    assert format_dti(2 / 3 * 100) == "66.67"
    assert improvement_message(2) == "⚠️ Improve 2 parameters"


def test_dti_ties_round_half_up():
    """An exact half-cent ratio rounds up: 1000 EMI on 32000 income is 3.125% -> '3.13'."""
    result = _evaluate(monthly_income=32000, total_emi=1000)
    assert result.dti == "3.13"
    assert format_dti(0.125) == "0.13"
    assert format_dti(12.5) == "12.50"


def test_dti_negative_zero_renders_unsigned():
    """A -0.0 EMI gives a -0.0 ratio, shown as '0.00'; small negatives keep their sign."""
    result = _evaluate(total_emi=-0.0)
    assert result.dti == "0.00"
    assert result.checks.dti is True
    assert format_dti(-0.001) == "-0.00"


def test_dti_huge_values_use_exponent_form():
    assert format_dti(1e21) == "1e+21"
    assert format_dti(1.0000000000000002e27) == "1.0000000000000002e+27"
    assert format_dti(1e20) == "100000000000000000000.00"
