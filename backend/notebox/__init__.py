"""
Notebox Backend - Application Package
=======================================

A minimal note-taking REST API backed by a relational database.

Architecture Note:
    ┌─────────────────────────────────────┐
    │      Routes (API Layer)             │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Services (Business Logic)      │  ← 404 vs 500 error boundary
    ├─────────────────────────────────────┤
    │      Models & Schemas (Data)        │  ← Note dataclass + Pydantic
    ├─────────────────────────────────────┤
    │      Repositories (Persistence)     │  ← SQLAlchemy Core / in-memory
    └─────────────────────────────────────┘

    The repository is constructed at startup (bootstrap.py) and injected
    into the app factory, so every layer above it can run against the
    in-memory store.
"""

__version__ = "1.0.0"
