"""Immutable build assets under the reserved ``/assets`` prefix.

No fallback: a miss here is a 404, never the SPA document, so a broken
script or stylesheet reference fails loudly instead of receiving HTML.
"""

import os

from fastapi.staticfiles import StaticFiles
from starlette.responses import Response
from starlette.types import Scope

from spa_server.config import Settings
from spa_server.headers import ResponseBranch, apply_cache_headers

ASSETS_PREFIX = "/assets"


class AssetFiles(StaticFiles):
    """StaticFiles with the immutable-branch cache headers and no directory handling."""

    def __init__(self, settings: Settings) -> None:
        # html=False: directories and misses are plain 404s
        super().__init__(directory=str(settings.assets_root), html=False, check_dir=False)
        self.settings = settings

    async def check_config(self) -> None:
        # A build without an assets directory answers 404 instead of 500
        if os.path.isdir(self.directory):
            await super().check_config()

    async def get_response(self, path: str, scope: Scope) -> Response:
        response = await super().get_response(path, scope)
        apply_cache_headers(response.headers, ResponseBranch.IMMUTABLE, self.settings)
        return response
