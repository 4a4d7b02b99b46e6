# Middleware package init
"""
Footprints Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Response Headers] → [Request ID] → [Logging] → [CORS] → Route Handler

    - Response Headers: fixed Access-Control-Allow-Origin on every response,
      including error responses and requests sent without an Origin header
    - Request ID: correlation id in a ContextVar and the X-Request-ID header
    - Logging: one access log line per request, using the request id
    - CORS: FastAPI's CORSMiddleware answers preflight requests
"""
