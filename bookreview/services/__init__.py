"""
Services Package

Logic that sits beside the HTTP handlers and is easy to test on its own.

Current services:
- security.py: signed access tokens (issue and verify)
- sessions.py: server-side session store and the middleware that attaches it
- rate_limiter.py: rate limiting with slowapi
- latency.py: optional simulated store latency and failures
"""
