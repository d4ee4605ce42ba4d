"""
Application package.

* ``core`` - configuration, logging, errors, security and the JSON
  document store;
* ``schemas`` - pydantic request/response models;
* ``services`` - business logic, one service per collection;
* ``api`` - FastAPI routers, aggregated in ``api/router.py``.

``main`` builds the application.  It is not imported here because
creating the app validates the configuration, and the maintenance
scripts only need the store and security helpers.
"""
