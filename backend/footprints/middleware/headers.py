"""
Footprints Backend — Fixed Response Headers
============================================

What:  Adds Access-Control-Allow-Origin to every response.

CORSMiddleware only answers requests that carry an Origin header. The
frontend is served from a different origin and some of its callers
(image tags, fetches from service workers) do not always send one, so the
header is set unconditionally, including on error responses.
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

ALLOW_ORIGIN_HEADER = "Access-Control-Allow-Origin"


class ResponseHeadersMiddleware(BaseHTTPMiddleware):
    """Sets the allow-origin header unless CORS handling already did."""

    def __init__(self, app, allow_origin: str = "*"):
        super().__init__(app)
        self.allow_origin = allow_origin

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        if ALLOW_ORIGIN_HEADER not in response.headers:
            response.headers[ALLOW_ORIGIN_HEADER] = self.allow_origin
        return response
