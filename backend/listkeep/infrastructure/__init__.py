"""Infrastructure Layer — database session manager, cache, logging, collaborator defaults.

Invariants:
    - Infrastructure never imports from services/
    - SQLAlchemy errors leave this layer only as StoreError
"""
