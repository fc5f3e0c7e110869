"""
Notes API - Application Package Initializer
============================================

What: Marks the `notes_api` directory as a Python package.
Why:  Enables module imports like `from notes_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The service follows a small layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Services (Request Rules)       │  ← Validation, translation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Domain entity + Pydantic contracts
    ├─────────────────────────────────────┤
    │         Store (In-Memory)           │  ← Lock-guarded note map
    └─────────────────────────────────────┘

    Routes handle status codes and headers, services hold the request rules,
    and the store owns every note for the lifetime of the process.
"""

__version__ = "1.0.0"
