"""FastAPI dependencies giving handlers the services built by ``create_app``."""

from fastapi import Request

from ..services.appointment_service import AppointmentService
from ..services.audit_service import AuditService
from ..services.blog_service import BlogService
from ..services.catalog_service import ServiceCatalogService
from ..services.notification_service import NotificationService
from ..services.submission_service import SubmissionService
from ..services.user_service import UserService


def get_catalog_service(request: Request) -> ServiceCatalogService:
    return request.app.state.catalog_service


def get_blog_service(request: Request) -> BlogService:
    return request.app.state.blog_service


def get_appointment_service(request: Request) -> AppointmentService:
    return request.app.state.appointment_service


def get_submission_service(request: Request) -> SubmissionService:
    return request.app.state.submission_service


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_audit_service(request: Request) -> AuditService:
    return request.app.state.audit_service


def get_notification_service(request: Request) -> NotificationService:
    return request.app.state.notification_service
