"""
Pydantic schemas for request and response bodies.

Resource records are free-form JSON objects, so most create/update
schemas declare the fields the clinic front-end relies on and allow
any extra keys through unchanged.
"""
