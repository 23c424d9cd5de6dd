import logging
from datetime import datetime, timezone

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from whmcs_mattermost import __version__
from whmcs_mattermost.config import settings
from whmcs_mattermost.mattermost.errors import NotificationError
from whmcs_mattermost.response import error_response
from whmcs_mattermost.routers import provider

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    description="Deliver WHMCS notifications to Mattermost channels.",
    version=__version__,
    debug=settings.debug,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)


# --- Exception Handlers ---


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(exc.status_code, exc.detail),
    )


@app.exception_handler(NotificationError)
async def notification_error_handler(request: Request, exc: NotificationError):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(exc.status_code, exc.message),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        clean = {k: v for k, v in err.items() if k != "ctx"}
        if "msg" in clean:
            clean["msg"] = str(clean["msg"])
        errors.append(clean)
    return JSONResponse(
        status_code=422,
        content=error_response(422, "Validation error", details=errors),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s: %s", request.url.path, exc, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content=error_response(500, "Internal server error"),
    )


# --- Routes ---

api_v1 = APIRouter(prefix="/v1")
api_v1.include_router(provider.router)
app.include_router(api_v1)


@app.get("/", summary="API root")
async def root():
    return {"name": settings.app_name, "status": "ok", "version": __version__}


@app.get("/health", summary="Health check")
async def health_ping():
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": __version__,
    }
