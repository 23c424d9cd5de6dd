import logging
import secrets

from fastapi import HTTPException, Request, Security
from fastapi.security import APIKeyHeader

from whmcs_mattermost.config import settings

logger = logging.getLogger(__name__)

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


def _get_client_ip(request: Request) -> str:
    xff = request.headers.get("X-Forwarded-For")
    if xff:
        return xff.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def require_api_key(request: Request, api_key: str = Security(api_key_header)) -> None:
    if not settings.bridge_api_key:
        logger.error("BRIDGE_API_KEY is not set; refusing provider requests")
        raise HTTPException(status_code=503, detail="Bridge API key is not configured")

    if not api_key:
        raise HTTPException(status_code=401, detail="Missing API key")

    # Constant-time comparison
    if not secrets.compare_digest(api_key, settings.bridge_api_key):
        logger.warning("Failed auth attempt from %s", _get_client_ip(request))
        raise HTTPException(status_code=401, detail="Invalid API key")
