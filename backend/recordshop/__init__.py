"""
Record Shop Backend — Application Package
===========================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP, cookies, status codes
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← validation, response shaping
    ├─────────────────────────────────────┤
    │      Repositories (Persistence)     │  ← SQL over AsyncSession
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
