"""Services Layer — async use cases, result views, and cross-module adapters.

Invariants:
    - One class per operation, each with a single async execute()
    - Services depend on core Protocols only, never on SQLAlchemy or FastAPI

Design Decisions:
    - Product and inventory talk through ProductLookup / InventoryLookup adapters,
      wired per request in api/dependencies.py
"""
