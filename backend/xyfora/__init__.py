"""
XYFORA Backend — Application Package
=====================================

Layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (Access Guard, Users,    │  ← identity, ownership, business rules
    │             Products, Tokens)       │
    ├─────────────────────────────────────┤
    │   Record Store, Models & Schemas    │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

Routes never touch the ORM directly; services go through the record store,
and the access guard is the only place that decides who may act on what.
"""

__version__ = "1.0.0"
