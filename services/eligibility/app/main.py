# services/eligibility/app/main.py
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging, sys, time

from schemas.models import ErrorResponse
from .config import settings
from .criteria import CRITERIA
from .routers import api, spa
from .security import apply_security_headers

SERVER_ERROR_MESSAGE = "Server error processing request"


def setup_logging():
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        stream=sys.stdout,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

setup_logging()
logger = logging.getLogger("eligibility.api")

app = FastAPI(title=settings.APP_NAME)

app.state.criteria = CRITERIA
app.state.started_at = time.monotonic()


@app.middleware("http")
async def error_boundary(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(message=SERVER_ERROR_MESSAGE).model_dump(),
        )


@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    apply_security_headers(response.headers)
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# register routes; the SPA mount must come last
app.include_router(api.router)
app.mount("/", spa.static_app, name="spa")
