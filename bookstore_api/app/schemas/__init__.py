"""
Pydantic schemas for request and response bodies.

Schemas are grouped by domain (books, users) and shared between the
service layer and the API endpoints.
"""
