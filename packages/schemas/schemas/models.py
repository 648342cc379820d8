# packages/schemas/schemas/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List


class _Cfg(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,   # build with snake_case, serialize with the wire aliases
        frozen=True,
    )


# =========================
#  CRITERIA (per applicant type)
# =========================
class AgeRange(_Cfg):
    min: int
    max: int


class CriteriaSet(_Cfg):
    age: AgeRange
    income: int                                      # minimum monthly income
    cibil: int                                       # minimum credit score
    emp_years: int = Field(alias="empYears")         # minimum employment tenure
    dti: int                                         # maximum debt-to-income %
    instant_cibil: int = Field(alias="instantCibil")


# =========================
#  APPLICANT (validated request)
# =========================
class ApplicantProfile(_Cfg):
    """Typed view of one eligibility request, built only after presence checks pass."""
    applicant_type: str = Field(alias="applicantType")
    age: float
    monthly_income: float = Field(alias="monthlyIncome")
    cibil_score: float = Field(alias="cibilScore")
    total_emi: float = Field(alias="totalEmi")       # may be NaN when not supplied
    employment_years: float = Field(alias="employmentYears")


# =========================
#  RESULT
# =========================
class EligibilityChecks(_Cfg):
    age: bool
    income: bool
    cibil: bool
    employment: bool
    dti: bool


class EligibilityResult(_Cfg):
    success: bool = True
    is_eligible: bool = Field(alias="isEligible")
    score: int
    passed_count: int = Field(alias="passedCount")
    total_params: int = Field(default=5, alias="totalParams")
    checks: EligibilityChecks
    instant_approval: bool = Field(alias="instantApproval")
    dti: str
    message: str
    eligible_loans: List[str] = Field(default_factory=list, alias="eligibleLoans")


# ----- Envelopes -----
class ErrorResponse(BaseModel):
    success: bool = False
    message: str


class HealthStatus(BaseModel):
    status: str = "OK"
    timestamp: str
    uptime: float
