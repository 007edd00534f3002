"""
Notebox Backend - Notes Table Declaration
===========================================

What:  SQLAlchemy Core declaration of the `notes` table and the functions that
       translate between its rows and the `Note` dataclass.
How:   The schema is synchronized on startup with `metadata.create_all`
       (see bootstrap.sync_schema); there is no migration tooling.

Table Design:
    - id: UUID primary key, generated at insert time
    - title: VARCHAR, unbounded
    - content: TEXT, no length limit
    - created_at / updated_at: TIMESTAMP WITH TIME ZONE, stored in UTC
    - Index on updated_at DESC serves the list endpoint's only sort order
"""

import uuid
from typing import Any, Dict, Mapping

from sqlalchemy import (
    Column,
    DateTime,
    Index,
    MetaData,
    String,
    Table,
    Text,
    Uuid,
)

from notebox.models.note import Note, ensure_utc

metadata = MetaData()

notes_table = Table(
    "notes",
    metadata,
    Column(
        "id",
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier, generated when the note is created",
    ),
    Column("title", String, nullable=False),
    Column("content", Text, nullable=False),
    Column(
        "created_at",
        DateTime(timezone=True),
        nullable=False,
        comment="When this note was created (UTC)",
    ),
    Column(
        "updated_at",
        DateTime(timezone=True),
        nullable=False,
        comment="Last successful update (UTC)",
    ),
)

Index("idx_notes_updated_at", notes_table.c.updated_at.desc())


def row_to_note(row: Mapping[str, Any]) -> Note:
    """Build a Note from a `notes` row mapping (e.g. `Row._mapping`)."""
    return Note(
        id=str(row["id"]),
        title=row["title"],
        content=row["content"],
        created_at=ensure_utc(row["created_at"]),
        updated_at=ensure_utc(row["updated_at"]),
    )


def note_to_row(note: Note) -> Dict[str, Any]:
    """Column values for inserting `note` into the `notes` table."""
    return {
        "id": uuid.UUID(note.id),
        "title": note.title,
        "content": note.content,
        "created_at": note.created_at,
        "updated_at": note.updated_at,
    }
