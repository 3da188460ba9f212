"""
XYFORA Backend — Middleware Package
====================================

Request → [Request ID] → [Rate Limit] → [Access Log] → [GZip] → [CORS] → Route

The request ID is assigned first so that even a 429 carries one; rate
limiting runs before any logging or routing work is done.
"""
