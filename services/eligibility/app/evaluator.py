# services/eligibility/app/evaluator.py
from __future__ import annotations
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import List

from schemas.models import ApplicantProfile, CriteriaSet, EligibilityChecks, EligibilityResult

TOTAL_PARAMS = 5

_CENTS = Decimal("0.01")

ELIGIBLE_MESSAGE = "✅ YOU ARE ELIGIBLE for loan approval!"

ELIGIBLE_LOANS: List[str] = [
    "🏦 Personal Loan (up to ₹20 Lakh)",
    "🏠 Home Loan (80% financing)",
    "📚 Education Loan",
    "💼 Business Loan",
]


def debt_to_income(total_emi: float, monthly_income: float) -> float:
    """EMI burden as a percentage of income; non-positive income counts as 100%."""
    if monthly_income > 0:
        return (total_emi / monthly_income) * 100
    return 100.0


def format_dti(dti: float) -> str:
    """Two-decimal rendering with half-up rounding of the exact binary value."""
    if math.isnan(dti):
        return "NaN"
    if math.isinf(dti):
        return "Infinity" if dti > 0 else "-Infinity"
    if abs(dti) >= 1e21:
        return repr(dti)
    if dti == 0:
        dti = 0.0  # drop the sign of -0.0
    return f"{Decimal(dti).quantize(_CENTS, rounding=ROUND_HALF_UP):f}"


def run_checks(profile: ApplicantProfile, criteria: CriteriaSet, dti: float) -> EligibilityChecks:
    return EligibilityChecks(
        age=criteria.age.min <= profile.age <= criteria.age.max,
        income=profile.monthly_income >= criteria.income,
        cibil=profile.cibil_score >= criteria.cibil,
        employment=profile.employment_years >= criteria.emp_years,
        dti=dti <= criteria.dti,
    )


def improvement_message(remaining: int) -> str:
    return f"⚠️ Improve {remaining} parameter{'s' if remaining > 1 else ''}"


def evaluate(profile: ApplicantProfile, criteria: CriteriaSet) -> EligibilityResult:
    """
    Score one applicant against the thresholds of its applicant type.
    Total over typed inputs: NaN fields simply fail the checks they feed.
    """
    dti = debt_to_income(profile.total_emi, profile.monthly_income)
    checks = run_checks(profile, criteria, dti)

    passed = sum(1 for ok in checks.model_dump().values() if ok)
    eligible = passed == TOTAL_PARAMS

    return EligibilityResult(
        is_eligible=eligible,
        score=round(passed / TOTAL_PARAMS * 100),
        passed_count=passed,
        total_params=TOTAL_PARAMS,
        checks=checks,
        instant_approval=profile.cibil_score >= criteria.instant_cibil,
        dti=format_dti(dti),
        message=ELIGIBLE_MESSAGE if eligible else improvement_message(TOTAL_PARAMS - passed),
        eligible_loans=list(ELIGIBLE_LOANS) if eligible else [],
    )
