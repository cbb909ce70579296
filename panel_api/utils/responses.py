"""Helpers for building responses in the shared envelope format"""
from typing import Any, Callable, Optional

from fastapi import Request, Response, status

from panel_api.core.cors import allowed_origin
from panel_api.models.schemas import Envelope, Metadata, Paging

PREFLIGHT_MAX_AGE = "600"


def respond(data: Any = None, paging: Optional[Paging] = None) -> Envelope:
    """Wrap `data` (and optional paging info) in a successful envelope"""
    metadata = Metadata(paging=paging) if paging is not None else None
    return Envelope(success=True, data=data, metadata=metadata)


def page_info(page: int, page_size: int, max_size: int, total: int) -> Paging:
    return Paging(page=page, page_size=page_size, max_size=max_size, total=total)


def create_options(*methods: str) -> Callable[[Request], Response]:
    """
    Build an OPTIONS endpoint answering 204 with the allowed methods.

    Browser preflights from an allowed origin also get the CORS headers,
    so the route's own method list is what the browser sees.

    Usage:
        router.add_api_route("", create_options("GET"), methods=["OPTIONS"])
    """
    allowed = ", ".join(list(methods) + ["OPTIONS"])

    def options(request: Request) -> Response:
        headers = {
            "Allow": allowed,
            "Access-Control-Allow-Methods": allowed,
        }

        origin = allowed_origin(request.headers.get("origin"))
        if origin is not None:
            headers["Access-Control-Allow-Origin"] = origin
            headers["Access-Control-Allow-Credentials"] = "true"
            headers["Access-Control-Max-Age"] = PREFLIGHT_MAX_AGE
            headers["Vary"] = "Origin"
            requested_headers = request.headers.get("access-control-request-headers")
            if requested_headers:
                headers["Access-Control-Allow-Headers"] = requested_headers

        return Response(status_code=status.HTTP_204_NO_CONTENT, headers=headers)

    return options
