import logging

import uvicorn

from app.config import settings
from app.main import app

logger = logging.getLogger("eligibility.server")


def serve():
    base = f"http://localhost:{settings.PORT}"
    logger.info("Loan Approval API running on %s", base)
    logger.info("Criteria endpoint: %s/api/criteria", base)
    logger.info("Health check: %s/api/health", base)
    logger.info("Static files served from: %s", settings.STATIC_DIR)
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        server_header=False,
    )


if __name__ == "__main__":
    serve()
