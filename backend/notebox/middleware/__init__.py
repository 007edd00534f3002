# Middleware package init
"""
Notebox Backend - Middleware Package
======================================

Middleware Chain (outermost first):
    Request → [Access log + request ID] → [GZip] → [CORS] → Route Handler

    - access.AccessLogMiddleware: generates or echoes X-Request-ID and logs
      one line per request against the matched route template
    - GZip / CORS: Starlette's stock middleware, configured in main.py
"""
