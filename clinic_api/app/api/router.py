"""
Top-level router for the clinic API.

Aggregates the per-resource routers.  ``create_app`` mounts it under
``/api``, so e.g. the services router answers ``/api/services``.
"""

from fastapi import APIRouter

from .endpoints import (
    appointments,
    audit,
    auth,
    blog,
    contact,
    health,
    services,
    submissions,
    users,
)

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(services.router, prefix="/services", tags=["services"])
router.include_router(blog.router, prefix="/blog", tags=["blog"])
# POST /api/contact creates a submission; admins read them under /api/submissions.
router.include_router(contact.router, prefix="/contact", tags=["contact"])
router.include_router(submissions.router, prefix="/submissions", tags=["submissions"])
router.include_router(appointments.router, prefix="/appointments", tags=["appointments"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(audit.router, prefix="/audit", tags=["audit"])
router.include_router(health.router, prefix="/health", tags=["health"])
