# Middleware package init
"""
TripNest Backend — Middleware Package
=======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID runs first so every log line and error body of the request
      can carry the same correlation id.
    - Logging measures the full handling time and sees the final status.
"""
