# Routes package init
"""
Blog API Backend: API Routes Package
=====================================

Route Inventory:
    - posts.py:   GET/POST    /posts
                  GET/PUT/DELETE /posts/{id}
    - health.py:  GET /health

Routes are thin: they extract path/body data, call the service, and pick the
status code. Store access lives in services.
"""
