"""HTTP API Layer: FastAPI routers, dependencies, and error translation.

Invariants:
    - Routes never contain business logic (delegate to services)
    - Domain errors are translated to HTTP responses only in error_handlers.py
"""
