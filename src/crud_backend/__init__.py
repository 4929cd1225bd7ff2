"""
Layered CRUD backend for todos and users.

HTTP routers call services, services call repository ports, and the
default repositories are thread-safe in-memory stores. The FastAPI
application is built by ``crud_backend.main.create_app``.
"""

__version__ = "0.1.0"
