"""
Bookworm Backend - API Routes Package (Route Dispatcher)
=========================================================

Route Inventory:
    - root.py:       GET  /api/                     liveness text
    - users.py:      GET  /api/users                list users
                     POST /api/users                register
                     POST /api/users/login          login
    - books.py:      POST/GET /api/books, GET/PATCH/DELETE /api/books/{id}
    - genres.py:     GET/POST /api/genres, PATCH/DELETE /api/genres/{id}
    - tutorials.py:  GET/POST /api/tutorials, DELETE /api/tutorials/{id}
    - shelves.py:    POST /api/shelves              upsert shelf entry
    - reviews.py:    GET /api/reviews/{bookId}, POST /api/reviews
    - health.py:     GET  /health

Routes are thin: pull parameters out of the request, call one repository
operation, write its result back with DocumentResponse.
"""
