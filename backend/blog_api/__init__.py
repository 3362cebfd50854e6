"""
Blog API — Application Package Initializer
==========================================

What: Marks the `blog_api` directory as a Python package.
Who:  Used by uvicorn (`blog_api.main:app`), pytest, and `python -m blog_api`.

Architecture Note:
    The service follows the same layered shape throughout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← ID parsing, not-found mapping
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Mongo documents + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← One pooled Motor client
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
