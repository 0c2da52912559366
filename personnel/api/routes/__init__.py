"""Route Modules — one file per resource.

Invariants:
    - Each module exposes an APIRouter with prefix and tags
    - The four relation resources share relation_router.py builders
"""
