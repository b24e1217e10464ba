"""SPA catch-all: client build, then public files, then ``index.html``."""

import logging
import os
import stat

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from spa_server.config import Settings
from spa_server.dependencies import get_resolver, get_settings
from spa_server.headers import ResponseBranch, apply_cache_headers
from spa_server.resolver import Resolver

logger = logging.getLogger(__name__)

router = APIRouter(tags=["SPA"])


@router.api_route("/{full_path:path}", methods=["GET", "HEAD"], include_in_schema=False)
async def serve_spa(
    full_path: str,
    settings: Settings = Depends(get_settings),
    resolver: Resolver = Depends(get_resolver),
):
    """Serve the resolved file; a failure here only affects this request.

    The file is opened once before any header goes out, so an unreadable
    file becomes a 500 instead of a 200 with a truncated body.
    """
    served = resolver.resolve("/" + full_path)

    try:
        stat_result = os.stat(served.path)
    except FileNotFoundError:
        logger.warning(f"{served.source.value} file missing: {served.path}")
        raise HTTPException(status_code=404, detail="Not Found")
    except OSError as e:
        logger.error(f"Cannot read {served.path}: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")

    if not stat.S_ISREG(stat_result.st_mode):
        logger.warning(f"Not a regular file: {served.path}")
        raise HTTPException(status_code=404, detail="Not Found")

    # Vanishing after the stat counts as a read failure, not a miss
    try:
        with open(served.path, "rb"):
            pass
    except OSError as e:
        logger.error(f"Cannot open {served.path}: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")

    response = FileResponse(served.path, stat_result=stat_result)
    apply_cache_headers(response.headers, ResponseBranch.DYNAMIC, settings)
    return response
