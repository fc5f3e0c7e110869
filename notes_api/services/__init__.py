# Services package init
"""
Notes API - Services Layer
===========================

What:  Request rules sitting between routes (HTTP) and the note store.

Service Inventory:
    - NoteService: validates note requests and maps store results to schemas
"""
