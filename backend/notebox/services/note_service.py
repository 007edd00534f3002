"""
Notebox Backend - Note Service (Business Logic)
=================================================

What:  One method per note operation: list, get, create, update, delete.
How:   Each method runs its repository calls inside an error boundary.
       NotFoundError passes through untouched; anything else the store raises
       is logged with its cause and re-raised as DatabaseError carrying a
       generic, client-safe message.
Who:   Called by the /api/notes route handlers; holds a NoteRepository that
       is injected when the app is built.

Per-request flow:
    received → validated (NoteInput, before this layer) → store call → response
    There is no retry and no partial commit.
"""

import logging
from typing import List

from notebox.exceptions import DatabaseError, NotFoundError
from notebox.models.note import Note
from notebox.repositories.base import NoteRepository
from notebox.schemas.note import NoteInput

logger = logging.getLogger(__name__)


class NoteService:
    """
    Business logic layer for note operations.

    Stateless apart from the repository handle; safe to share across
    concurrent requests. Concurrent updates to the same note are
    last-write-wins.
    """

    def __init__(self, repository: NoteRepository):
        self.repository = repository

    async def list_notes(self) -> List[Note]:
        """All notes, most recently updated first. An empty store is not an error."""
        try:
            return await self.repository.find_all()
        except Exception as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Error fetching notes",
                context={"error_type": type(e).__name__},
            )

    async def get_note(self, note_id: str) -> Note:
        """
        Retrieve a single note by ID.

        Raises:
            NotFoundError: No note has this id (→ 404)
            DatabaseError: The store call failed (→ 500)
        """
        try:
            return await self._require(note_id)
        except NotFoundError:
            raise
        except Exception as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Error fetching note",
                context={"note_id": note_id, "error_type": type(e).__name__},
            )

    async def create_note(self, payload: NoteInput) -> Note:
        try:
            note = await self.repository.create(title=payload.title, content=payload.content)
        except Exception as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Error creating note",
                context={"error_type": type(e).__name__},
            )
        logger.info("Note %s created", note.id)
        return note

    async def update_note(self, note_id: str, payload: NoteInput) -> Note:
        """
        Overwrite title and content of an existing note.

        The lookup and the write are two separate round trips with no
        transaction around them.
        """
        try:
            note = await self._require(note_id)
            note.title = payload.title
            note.content = payload.content
            note = await self.repository.update(note)
        except NotFoundError:
            raise
        except Exception as e:
            logger.error("Database error updating note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Error updating note",
                context={"note_id": note_id, "error_type": type(e).__name__},
            )
        logger.info("Note %s updated", note.id)
        return note

    async def delete_note(self, note_id: str) -> None:
        try:
            note = await self._require(note_id)
            await self.repository.delete(note)
        except NotFoundError:
            raise
        except Exception as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Error deleting note",
                context={"note_id": note_id, "error_type": type(e).__name__},
            )
        logger.info("Note %s deleted", note_id)

    async def _require(self, note_id: str) -> Note:
        note = await self.repository.find_by_id(note_id)
        if note is None:
            raise NotFoundError(resource_id=note_id)
        return note
