# services/eligibility/app/criteria.py
from types import MappingProxyType
from typing import Any, Dict, Mapping

from schemas.models import AgeRange, CriteriaSet

CriteriaRegistry = Mapping[str, CriteriaSet]

# Built once at import; the proxy and the frozen models reject mutation.
CRITERIA: CriteriaRegistry = MappingProxyType({
    "salaried": CriteriaSet(
        age=AgeRange(min=21, max=60),
        income=25000,
        cibil=700,
        emp_years=2,
        dti=40,
        instant_cibil=750,
    ),
    "self-employed": CriteriaSet(
        age=AgeRange(min=24, max=65),
        income=40000,
        cibil=720,
        emp_years=3,
        dti=50,
        instant_cibil=750,
    ),
})


def applicant_types(registry: CriteriaRegistry) -> list[str]:
    return list(registry.keys())


def criteria_for(registry: CriteriaRegistry, applicant_type: Any) -> CriteriaSet | None:
    if not isinstance(applicant_type, str):
        return None
    return registry.get(applicant_type)


def criteria_payload(registry: CriteriaRegistry) -> Dict[str, Dict[str, Any]]:
    """JSON view of the registry, keyed by applicant type, using the wire field names."""
    return {name: crit.model_dump(by_alias=True) for name, crit in registry.items()}
