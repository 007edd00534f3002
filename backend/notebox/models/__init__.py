# Models package init
"""Domain types shared by the repositories, the service layer and the schemas."""

from notebox.models.note import Note

__all__ = ["Note"]
