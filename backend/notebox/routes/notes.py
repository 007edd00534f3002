"""
Notebox Backend - Notes Route Handlers
========================================

What:  The five CRUD endpoints under /api/notes.
How:   Each handler pulls a NoteService from the request dependencies,
       delegates, and picks the status code. Errors are raised as exceptions
       and formatted by the global handlers in main.py.

Endpoints:
    GET    /api/notes        → 200 list, most recently updated first
    GET    /api/notes/{id}   → 200 | 404
    POST   /api/notes        → 201 | 400
    PUT    /api/notes/{id}   → 200 | 400 | 404
    DELETE /api/notes/{id}   → 204 | 404
    Any store failure        → 500
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status

from notebox.dependencies import get_note_service
from notebox.models.note import Note
from notebox.schemas.note import ErrorResponse, NoteInput, NoteResponse
from notebox.services.note_service import NoteService

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/api/notes", tags=["Notes"])

SERVER_ERROR = {"description": "Store failure", "model": ErrorResponse}
NOT_FOUND = {"description": "Note not found", "model": ErrorResponse}
BAD_REQUEST = {"description": "Invalid note payload", "model": ErrorResponse}


def to_response(note: Note) -> NoteResponse:
    return NoteResponse(
        id=note.id,
        title=note.title,
        content=note.content,
        created_at=note.created_at,
        updated_at=note.updated_at,
    )


@router.get(
    "",
    response_model=List[NoteResponse],
    responses={500: SERVER_ERROR},
    summary="List all notes",
    description="Returns every note, ordered by last update (most recent first).",
)
async def list_notes(
    service: NoteService = Depends(get_note_service),
) -> List[NoteResponse]:
    notes = await service.list_notes()
    return [to_response(note) for note in notes]


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses={404: NOT_FOUND, 500: SERVER_ERROR},
    summary="Get a single note by ID",
)
async def get_note(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    """
    Any string is accepted as an id; ids that match nothing, malformed ones
    included, answer 404.
    """
    note = await service.get_note(note_id)
    return to_response(note)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=NoteResponse,
    responses={400: BAD_REQUEST, 500: SERVER_ERROR},
    summary="Create a note",
)
async def create_note(
    payload: NoteInput,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    note = await service.create_note(payload)
    return to_response(note)


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    responses={400: BAD_REQUEST, 404: NOT_FOUND, 500: SERVER_ERROR},
    summary="Replace a note's title and content",
)
async def update_note(
    note_id: str,
    payload: NoteInput,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    note = await service.update_note(note_id, payload)
    return to_response(note)


@router.delete(
    "/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: NOT_FOUND, 500: SERVER_ERROR},
    summary="Delete a note",
)
async def delete_note(
    note_id: str,
    service: NoteService = Depends(get_note_service),
) -> Response:
    await service.delete_note(note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
