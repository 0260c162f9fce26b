"""Route Modules — one file per resource/concern.

Invariants:
    - Each module builds its own APIRouter with prefix and tags
    - Routes never contain business logic (delegate to the record store)

Design Decisions:
    - Explicit registration in main.py over auto-discovery
    - Task and service routers come from one factory: the two verticals share every rule
"""
