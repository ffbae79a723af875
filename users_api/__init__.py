"""
Users API - Application Package Initializer
===========================================

What: Marks the `users_api` directory as a Python package.
Who:  Imported by uvicorn (`users_api.main:app`), the CLI and the test suite.

Architecture Note:
    The service is a thin layered CRUD backend over a MongoDB collection:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (User CRUD)        │  ← One driver call per operation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Stored document + API contract
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Shared AsyncMongoClient handle
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
