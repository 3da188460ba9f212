"""
XYFORA Backend — Services Layer
================================

Service Inventory:
    - TokenService:  signs/verifies JWT identity tokens
    - passwords:     Argon2 hashing via pwdlib
    - AccessGuard:   identity extraction, id validation, ownership rule
    - RecordStore:   persistence interface over async SQLAlchemy
    - UserService:   register / login / profile
    - ProductService: owner-scoped product CRUD
"""
