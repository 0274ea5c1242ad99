"""Core Layer — pure domain logic, no IO, no DB; async only in boundary Protocols.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Entities enforce their own invariants; use cases never bypass them
"""
