"""CORS handling that lets resource routes answer their own OPTIONS requests"""
from typing import Iterable, Optional

from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send

from panel_api.core.config import settings


def allowed_origin(origin: Optional[str]) -> Optional[str]:
    """Return the value for Access-Control-Allow-Origin, or None when `origin` is not allowed"""
    if not origin:
        return None
    if "*" in settings.BACKEND_CORS_ORIGINS or origin in settings.BACKEND_CORS_ORIGINS:
        return origin
    return None


class ResourceCORSMiddleware(CORSMiddleware):
    """
    CORSMiddleware that passes OPTIONS requests under `options_prefixes`
    straight to the application.

    Those routes register OPTIONS endpoints (see `create_options`) that
    list only their own methods; every other request is handled by the
    stock middleware.
    """

    def __init__(self, app: ASGIApp, options_prefixes: Iterable[str] = (), **kwargs):
        super().__init__(app, **kwargs)
        self.options_prefixes = tuple(options_prefixes)

    def _owns_options(self, path: str) -> bool:
        return any(path == prefix or path.startswith(prefix + "/") for prefix in self.options_prefixes)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["method"] == "OPTIONS" and self._owns_options(scope["path"]):
            await self.app(scope, receive, send)
            return

        await super().__call__(scope, receive, send)
