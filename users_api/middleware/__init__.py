# Middleware package init
"""
Users API - Middleware Package
==============================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → Route Handler

    1. Request ID: Generate correlation ID for logging and error bodies
    2. Logging: Log request details with the generated request ID

Responses travel back in reverse order, so the access log sees the final
status code and the request ID header is set last.
"""
