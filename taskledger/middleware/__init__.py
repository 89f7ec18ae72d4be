# Middleware package init
"""
TaskLedger Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [CORS] → [Request ID] → [Logging] → [GZip] → [API Key] → Gateway

    1. CORS first: answers browser preflights before anything else runs
    2. Request ID: correlation ID for logging and error envelopes
    3. Logging: method, path, status and duration, including rejected requests
    4. API Key: last gate before the route table
"""
