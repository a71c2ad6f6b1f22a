"""
Blog API Backend: Application Package Initializer
==================================================

What: Marks the `blog_api` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend follows a layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  <- HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  <- Store calls, not-found handling
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  <- SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  <- Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes set status codes and delegate to services.
    Models describe the stored document; schemas describe the API contract.
"""

__version__ = "1.0.0"
