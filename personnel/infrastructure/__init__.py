"""Infrastructure Layer — database sessions, logging, stored-procedure writer.

Invariants:
    - Infrastructure never imports domain logic from services/
    - SQLAlchemy failures are mapped to DatabaseError before leaving this layer
"""
