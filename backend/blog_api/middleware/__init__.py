"""
Blog API — Middleware Package
==============================

Middleware Chain:
    Request → [Request Context] → [CORS] → Route Handler

    Request Context runs outermost among the app middleware so the access
    log and the exception handlers can read the correlation ID from the
    ContextVar.
"""
