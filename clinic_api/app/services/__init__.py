"""
Service layer.

Each service wraps one JSON collection and holds its business rules.
The shared CRUD contract lives in ``collection_service``; API handlers
only translate HTTP requests into calls on these classes.
"""
