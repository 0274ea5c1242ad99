"""Infrastructure Layer — database access, SQL repositories, and logging.

Invariants:
    - Repositories implement the Protocols in core/repository_protocols.py
    - SQLAlchemy exceptions never cross this layer untranslated (StorageError sub-kinds)
"""
