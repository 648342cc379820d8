# services/eligibility/app/routers/spa.py
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException
from starlette.types import Scope

from ..config import settings

INDEX_FILE = "index.html"


class SPAStaticFiles(StaticFiles):
    """Public assets; unknown paths get the single-page app entry document."""

    async def get_response(self, path: str, scope: Scope):
        if scope["method"] not in ("GET", "HEAD"):
            raise HTTPException(status_code=404)
        try:
            return await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code != 404:
                raise
        return await super().get_response(INDEX_FILE, scope)


# mounted at "/" after the API router
static_app = SPAStaticFiles(directory=settings.STATIC_DIR, html=True, check_dir=False)
