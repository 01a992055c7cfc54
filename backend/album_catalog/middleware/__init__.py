# Middleware package init
"""
Album Catalog Backend: Middleware Package
==========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → Route Handler

    Request ID runs first so the id is already in its ContextVar when the
    access line and any service or repository log lines are written. The
    id is added to the response headers on the way out.
"""
