"""
Notebox Backend - Request Dependencies
========================================

What:  FastAPI dependencies that hand route handlers their collaborators.
How:   The repository is attached to `app.state` by the app factory (or by
       the lifespan when nothing was injected); each request wraps it in a
       NoteService.

Example usage in a route:
    @router.get("")
    async def list_notes(service: NoteService = Depends(get_note_service)):
        return await service.list_notes()
"""

from fastapi import Request

from notebox.repositories.base import NoteRepository
from notebox.services.note_service import NoteService


def get_repository(request: Request) -> NoteRepository:
    repository = getattr(request.app.state, "repository", None)
    if repository is None:
        raise RuntimeError("No note repository configured; the store was never opened")
    return repository


def get_note_service(request: Request) -> NoteService:
    return NoteService(get_repository(request))
