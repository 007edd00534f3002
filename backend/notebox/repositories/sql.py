"""
Notebox Backend - SQL Note Repository
=======================================

What:  NoteRepository backed by a relational database through async SQLAlchemy.
How:   Each method opens its own session from the injected session factory,
       issues one statement and commits. Nothing is cached between calls, so
       every read reflects the store's current state.
Who:   Built by bootstrap.open_store() and injected into the app factory.

Query plans:
    find_all:   SELECT ... ORDER BY updated_at DESC  → idx_notes_updated_at
    find_by_id: SELECT ... WHERE id = :uuid           → primary key
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from notebox.models.note import Note, next_updated_at, utcnow
from notebox.repositories.base import NoteRepository
from notebox.repositories.tables import note_to_row, notes_table, row_to_note

logger = logging.getLogger(__name__)


def _parse_id(note_id: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(note_id))
    except ValueError:
        return None


class SqlNoteRepository(NoteRepository):
    """
    Relational store for notes.

    Construct with an async session factory, or use `from_engine()`.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @classmethod
    def from_engine(cls, engine: AsyncEngine) -> "SqlNoteRepository":
        return cls(async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False))

    async def find_all(self) -> List[Note]:
        query = select(notes_table).order_by(notes_table.c.updated_at.desc())
        async with self._session_factory() as session:
            result = await session.execute(query)
            return [row_to_note(row._mapping) for row in result]

    async def find_by_id(self, note_id: str) -> Optional[Note]:
        key = _parse_id(note_id)
        if key is None:
            logger.debug("Rejecting malformed note id %r", note_id)
            return None

        async with self._session_factory() as session:
            result = await session.execute(
                select(notes_table).where(notes_table.c.id == key)
            )
            row = result.first()
            return row_to_note(row._mapping) if row is not None else None

    async def create(self, title: str, content: str) -> Note:
        now = utcnow()
        note = Note(
            id=str(uuid.uuid4()),
            title=title,
            content=content,
            created_at=now,
            updated_at=now,
        )
        async with self._session_factory() as session:
            await session.execute(insert(notes_table).values(**note_to_row(note)))
            await session.commit()
        return note

    async def update(self, note: Note) -> Note:
        updated_at = next_updated_at(note.updated_at)
        async with self._session_factory() as session:
            await session.execute(
                update(notes_table)
                .where(notes_table.c.id == uuid.UUID(note.id))
                .values(title=note.title, content=note.content, updated_at=updated_at)
            )
            await session.commit()
        note.updated_at = updated_at
        return note

    async def delete(self, note: Note) -> None:
        async with self._session_factory() as session:
            await session.execute(
                delete(notes_table).where(notes_table.c.id == uuid.UUID(note.id))
            )
            await session.commit()
