"""
Blog API Backend: Middleware Package
=====================================

Middleware Chain (order matters):
    Request -> [Request ID] -> [Logging] -> Route Handler

    The request ID is set first so the access log line and any error
    response for the same request carry it.
"""
