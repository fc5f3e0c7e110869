# Routes package init
"""
Notes API - API Routes Package
===============================

Route Inventory:
    - notes.py:   POST   /notes            (create)
                  GET    /notes            (list, optional q/page/limit)
                  GET    /notes/{id}       (detail)
                  PATCH  /notes/{id}       (partial update)
                  DELETE /notes/{id}       (delete)
    - health.py:  GET    /health           (liveness)

Routes are THIN: they extract path/query/body, call NoteService, and
set headers. Rules live in services; state lives in the store.
"""
