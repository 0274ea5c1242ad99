"""API Layer — FastAPI routes, per-request wiring, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON: success envelope or error envelope

Design Decisions:
    - Thin routes delegate to use cases built per request in dependencies.py
"""
