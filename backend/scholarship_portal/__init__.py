"""
Scholarship Portal Backend — Application Package Initializer
=============================================================

Layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Collections)      │  ← Document operations, Stripe
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy handle
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
