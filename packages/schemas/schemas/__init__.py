from .models import (
    AgeRange,
    ApplicantProfile,
    CriteriaSet,
    EligibilityChecks,
    EligibilityResult,
    ErrorResponse,
    HealthStatus,
)

__all__ = [
    "AgeRange",
    "ApplicantProfile",
    "CriteriaSet",
    "EligibilityChecks",
    "EligibilityResult",
    "ErrorResponse",
    "HealthStatus",
]
