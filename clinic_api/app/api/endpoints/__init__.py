"""
Endpoint modules, one APIRouter per resource.  They are aggregated in
``api/router.py``.
"""
