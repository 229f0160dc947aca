"""
Mflix API: Application Package Initializer
==========================================

What: Marks the `mflix_api` directory as a Python package.
Who:  Imported by uvicorn (`uvicorn mflix_api.main:app`), pytest, and every module
      that needs settings (`from mflix_api.config import settings`).

Architecture Note:
    The service follows the same layering for every collection:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← parse path/query/body, build envelope
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← id validation, existence checks, paging
    ├─────────────────────────────────────┤
    │        Schemas (API contracts)      │  ← Pydantic request/response models
    ├─────────────────────────────────────┤
    │     DocumentStore (Persistence)     │  ← MongoDB through motor
    └─────────────────────────────────────┘

    Documents themselves are owned by the `sample_mflix` database; the service
    filters and pages them but never reshapes them.
"""

__version__ = "1.0.0"
