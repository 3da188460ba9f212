"""
XYFORA Backend — API Routes Package
====================================

Route Inventory:
    - auth.py:      POST /auth/register, POST /auth/login, GET /auth/me
    - products.py:  GET/POST /products, GET/PUT/DELETE /products/{id}
    - health.py:    GET /health
    - dependencies.py: bearer identity and product-id dependencies

Routes are thin: parse the request, call a service, return its result.
Errors travel as exceptions to the handlers registered in main.py.
"""
