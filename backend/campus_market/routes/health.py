"""
Campus Market Backend: Banner and Health Check Routes
=======================================================

What:  GET / answers with a plain-text banner; GET /health reports whether
       the service can do its job.
How:   The service is healthy when both the data directory and the upload
       directory exist and are writable. Anything else is "unhealthy" and
       answered with HTTP 503 so probes route traffic away.
"""

import logging
import os
import time
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import JSONResponse, PlainTextResponse

from campus_market import __version__
from campus_market.config import settings
from campus_market.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


def _directory_status(path: Path) -> str:
    if path.is_dir() and os.access(path, os.W_OK):
        return "writable"
    logger.warning("Health check: %s is missing or not writable", path)
    return "unavailable"


@router.get("/", response_class=PlainTextResponse, summary="Service banner")
async def root() -> str:
    return f"{settings.app_name} is running!"


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "A storage directory is unavailable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check():
    """Check that the JSON documents and uploads can be written."""
    data_status = _directory_status(settings.data_path)
    upload_status = _directory_status(settings.upload_path)
    healthy = data_status == upload_status == "writable"

    body = HealthResponse(
        status="healthy" if healthy else "unhealthy",
        version=__version__,
        data_dir=data_status,
        upload_dir=upload_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if not healthy:
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
