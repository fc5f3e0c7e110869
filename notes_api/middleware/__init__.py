# Middleware package init
"""
Notes API - Middleware Package
===============================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first, so the access log line carries the id
    2. Logging wraps everything below it, so durations include serialization
"""
