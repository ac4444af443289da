# Middleware package init
"""
Blog API Backend — Middleware Package
======================================

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    The request id is set before the logging middleware reads it, and the
    logging middleware sees the final status code on the way out.
"""
