"""Services Layer — identity store, temporal relation store, resolver, gatekeeper.

Invariants:
    - Relation mutations go through ConsistencyGatekeeper only
    - Stores flush, callers commit: one commit per request-level mutation
"""
