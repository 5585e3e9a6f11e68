"""
Record Shop Backend — API Routes Package
==========================================

Route Inventory:
    - records.py:  /records CRUD, title/artist lookups, detail view
    - auth.py:     POST /signup, /login, /logout
    - health.py:   GET /health

Routes stay thin: parse the request, call a service, return its result.
"""
