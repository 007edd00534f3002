"""
Notebox Backend - Abstract Note Repository
============================================

What:  Abstract base class defining the persistence contract for notes.
How:   Concrete stores inherit from NoteRepository and implement the five
       primitives below. The service layer only ever talks to this interface,
       so the SQL store and the in-memory store are interchangeable.
Who:   Called by NoteService; constructed by the bootstrapper or by tests.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from notebox.models.note import Note


class NoteRepository(ABC):
    """
    Durable storage for Note records.

    Contract:
        - Absence is signalled with None, never with an exception
        - Any other failure (connectivity, constraint, malformed query)
          propagates as whatever the backend raised
        - update() and delete() trust the caller to have fetched the note first
    """

    @abstractmethod
    async def find_all(self) -> List[Note]:
        """
        Return every note ordered by updated_at, most recent first.

        Returns an empty list when the store holds no notes.
        """
        ...

    @abstractmethod
    async def find_by_id(self, note_id: str) -> Optional[Note]:
        """
        Return the note with this id, or None.

        Ids that are not well-formed UUIDs cannot match any record and
        also yield None.
        """
        ...

    @abstractmethod
    async def create(self, title: str, content: str) -> Note:
        """
        Persist a new note with a fresh id and created_at == updated_at == now.
        """
        ...

    @abstractmethod
    async def update(self, note: Note) -> Note:
        """
        Write the note's current title and content, refreshing updated_at.

        Returns the same Note instance with updated_at advanced.
        """
        ...

    @abstractmethod
    async def delete(self, note: Note) -> None:
        """Hard-remove the note. Behaviour for an already-removed note is undefined."""
        ...
