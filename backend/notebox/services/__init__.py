# Services package init
"""
Notebox Backend - Services Package
====================================

What:  Business logic that sits between the HTTP routes and the repositories.

Service Inventory:
    - note_service.py: NoteService (list/get/create/update/delete with the
                       404 vs 500 error boundary)
"""
