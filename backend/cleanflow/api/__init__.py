"""API Layer — ASGI-facing pipeline stages and FastAPI error handlers.

Invariants:
    - Every component here is request-scoped or immutable after construction
    - Stages never branch on the errors carried by the previous stage

Design Decisions:
    - Orchestrator is a plain ASGI app: mountable on any Starlette/FastAPI router
"""
