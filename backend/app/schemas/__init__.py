"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate shape at the system boundary; domain rules stay in core/
    - Responses are built from service views, never from ORM rows

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
