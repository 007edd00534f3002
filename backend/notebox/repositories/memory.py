"""In-memory NoteRepository, used by the test suite and for running the API without a database."""

import copy
import uuid
from typing import Dict, List, Optional

from notebox.models.note import Note, next_updated_at, utcnow
from notebox.repositories.base import NoteRepository


class InMemoryNoteRepository(NoteRepository):
    """
    Dict-backed store with the same contract as SqlNoteRepository.

    Notes are copied on the way in and out so callers never hold a
    reference into the store, the same as a database round trip.
    """

    def __init__(self) -> None:
        self._notes: Dict[str, Note] = {}

    async def find_all(self) -> List[Note]:
        notes = sorted(self._notes.values(), key=lambda n: n.updated_at, reverse=True)
        return [copy.copy(note) for note in notes]

    async def find_by_id(self, note_id: str) -> Optional[Note]:
        try:
            key = str(uuid.UUID(str(note_id)))
        except ValueError:
            return None
        note = self._notes.get(key)
        return copy.copy(note) if note is not None else None

    async def create(self, title: str, content: str) -> Note:
        now = utcnow()
        note = Note(
            id=str(uuid.uuid4()),
            title=title,
            content=content,
            created_at=now,
            updated_at=now,
        )
        self._notes[note.id] = copy.copy(note)
        return note

    async def update(self, note: Note) -> Note:
        note.updated_at = next_updated_at(note.updated_at)
        stored = self._notes.get(note.id)
        if stored is not None:
            stored.title = note.title
            stored.content = note.content
            stored.updated_at = note.updated_at
        return note

    async def delete(self, note: Note) -> None:
        del self._notes[note.id]
