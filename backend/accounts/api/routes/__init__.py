"""Route Modules: one file per resource/concern.

Invariants:
    - Each module exposes its own APIRouter or a register_routes() hook
    - Routes never contain business logic (delegate to services)
"""
