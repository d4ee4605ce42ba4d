"""
Top-level package for the Clinic API.

All functionality lives in the ``app`` subpackage; import the ASGI
application from ``clinic_api.app.main``.
"""

__all__ = []
