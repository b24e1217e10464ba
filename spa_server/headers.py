"""Response header policy.

Every response carries the server identity and ``nosniff``.  Cache
directives depend on which branch produced the response: immutable build
assets or everything else (documents, fallback, health).
"""

import enum

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from spa_server.config import Settings

# Headers that must accompany "no-store" for HTTP/1.0 caches and proxies
_LEGACY_NO_CACHE = {"Pragma": "no-cache", "Expires": "0"}


class ResponseBranch(str, enum.Enum):
    IMMUTABLE = "immutable"
    DYNAMIC = "dynamic"


def cache_directive(branch: ResponseBranch, settings: Settings) -> str:
    if branch is ResponseBranch.IMMUTABLE:
        return settings.ASSETS_CACHE_CONTROL
    return settings.DOCUMENT_CACHE_CONTROL


def _forbids_storage(directive: str) -> bool:
    tokens = {part.strip().lower() for part in directive.split(",")}
    return "no-store" in tokens


def set_cache_control(headers: MutableHeaders, directive: str) -> None:
    """Set ``Cache-Control``; ``no-store`` always brings ``Pragma`` and ``Expires`` with it."""
    headers["Cache-Control"] = directive
    if _forbids_storage(directive):
        for name, value in _LEGACY_NO_CACHE.items():
            headers[name] = value
    else:
        for name in _LEGACY_NO_CACHE:
            if name in headers:
                del headers[name]


def apply_cache_headers(headers: MutableHeaders, branch: ResponseBranch, settings: Settings) -> None:
    set_cache_control(headers, cache_directive(branch, settings))


class CommonHeadersMiddleware:
    """Stamp the server identity and ``X-Content-Type-Options`` on every response."""

    def __init__(self, app: ASGIApp, server_name: str) -> None:
        self.app = app
        self.server_name = server_name

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                headers["Server"] = self.server_name
                headers["X-Content-Type-Options"] = "nosniff"
            await send(message)

        await self.app(scope, receive, send_with_headers)
