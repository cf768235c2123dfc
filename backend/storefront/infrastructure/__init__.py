"""Infrastructure Layer — database engine, sessions, and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from core/ domain logic except the error hierarchy
    - All SQLAlchemy failures mapped to StorageError before reaching routes
"""
