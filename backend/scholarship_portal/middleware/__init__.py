# Middleware package init
"""
Scholarship Portal Backend — Middleware Package
================================================

Middleware chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    The request ID is set before the logging middleware reads it, so every
    access log line carries the same ID as the X-Request-ID response header.
"""
