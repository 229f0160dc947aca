"""
Mflix API: API Routes Package
=============================

Route Inventory:
    - movies.py:    GET  /api/movies, GET /api/movies/{id},
                    GET/POST /api/movies/{id}/comments
    - comments.py:  GET/POST /api/comments, GET/PUT/DELETE /api/comments/{id}
    - theaters.py:  GET/POST /api/theaters, GET/PUT/DELETE /api/theaters/{id}
    - health.py:    GET  /health
    - deps.py:      request-scoped service providers

Routes stay thin: parse the request, call a service, wrap the envelope.
"""
