# services/eligibility/app/routers/api.py
from datetime import datetime, timezone
import logging
import time
from typing import Any, Dict, Optional, Union

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from schemas.models import EligibilityResult, ErrorResponse, HealthStatus
from ..config import settings
from ..criteria import CriteriaRegistry, criteria_payload
from ..evaluator import evaluate
from ..validation import (
    BODY_TOO_LARGE_MESSAGE,
    ValidationFailure,
    decode_json_body,
    parse_applicant,
)

logger = logging.getLogger("eligibility.api")

router = APIRouter(prefix="/api", tags=["eligibility"])

NOT_FOUND_MESSAGE = "API endpoint not found"


def get_criteria(request: Request) -> CriteriaRegistry:
    return request.app.state.criteria


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(message=message).model_dump())


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _replay(body: bytes):
    async def receive():
        return {"type": "http.request", "body": body, "more_body": False}
    return receive


async def read_body(request: Request, limit: int) -> Optional[bytes]:
    """Raw body, or None once it is known to exceed limit (by header or while streaming)."""
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        return None
    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            return None
    return bytes(body)


async def read_payload(request: Request) -> Union[Dict[str, Any], ValidationFailure]:
    """Request body as a flat dict; JSON and urlencoded forms are understood."""
    body = await read_body(request, settings.MAX_BODY_BYTES)
    if body is None:
        return ValidationFailure(BODY_TOO_LARGE_MESSAGE, status_code=413)

    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type == "application/json" or content_type.endswith("+json"):
        return decode_json_body(body)
    if content_type == "application/x-www-form-urlencoded":
        # the stream is spent; parse the capped copy
        form = await Request(request.scope, receive=_replay(body)).form()
        return dict(form)
    return {}


@router.get("/criteria")
def get_criteria_table(criteria: CriteriaRegistry = Depends(get_criteria)):
    return criteria_payload(criteria)


@router.get("/health", response_model=HealthStatus)
def health(request: Request):
    return HealthStatus(
        timestamp=_iso_now(),
        uptime=time.monotonic() - request.app.state.started_at,
    )


@router.post(
    "/check-eligibility",
    response_model=EligibilityResult,
    responses={400: {"model": ErrorResponse}, 413: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def check_eligibility(request: Request, criteria: CriteriaRegistry = Depends(get_criteria)):
    payload = await read_payload(request)
    if isinstance(payload, ValidationFailure):
        logger.info("rejected request: %s", payload.message)
        return _error(payload.status_code, payload.message)

    outcome = parse_applicant(payload, criteria)
    if isinstance(outcome, ValidationFailure):
        logger.info("rejected request: %s", outcome.message)
        return _error(outcome.status_code, outcome.message)

    result = evaluate(outcome, criteria[outcome.applicant_type])
    logger.info(
        "evaluated applicant_type=%s passed=%d/%d eligible=%s instant=%s",
        outcome.applicant_type, result.passed_count, result.total_params,
        result.is_eligible, result.instant_approval,
    )
    return result


@router.api_route(
    "/{rest:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"],
    include_in_schema=False,
)
def api_not_found(rest: str):
    return _error(404, NOT_FOUND_MESSAGE)
