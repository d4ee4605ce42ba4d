"""
HTTP layer.

``router`` aggregates one APIRouter per resource (see ``endpoints``)
and is mounted under ``/api`` by ``create_app``.  Shared FastAPI
dependencies live in ``deps``.
"""
