# Repositories package init
"""
Notebox Backend - Persistence Layer
=====================================

What:  Everything that reads or writes Note records.

Inventory:
    - base.py:    NoteRepository abstract contract
    - tables.py:  `notes` table declaration + row <-> Note mapping
    - sql.py:     SqlNoteRepository (async SQLAlchemy, one round trip per call)
    - memory.py:  InMemoryNoteRepository (dict-backed substitute)
"""

from notebox.repositories.base import NoteRepository
from notebox.repositories.memory import InMemoryNoteRepository
from notebox.repositories.sql import SqlNoteRepository

__all__ = ["NoteRepository", "InMemoryNoteRepository", "SqlNoteRepository"]
