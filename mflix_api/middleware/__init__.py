"""
Mflix API: Middleware Package
=============================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the access log line (written on the way back out)
    carries the id.
"""
