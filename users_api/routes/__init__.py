# Routes package init
"""
Users API - API Routes Package
==============================

Route Inventory:
    - users.py:   GET/POST   /api/v1/users
                  PUT/DELETE /api/v1/users/{id}
    - health.py:  GET        /health

Routes are THIN: they extract path params and bodies, call UserService,
and return schemas. Status codes for failures come from the exception
handlers registered in main.py.
"""
