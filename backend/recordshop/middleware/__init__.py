"""
Record Shop Backend — Middleware Package
==========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the access log and the error handlers can
    attach the correlation id.
"""
