"""Record Store Package — in-memory task/service/user store with write-through snapshots.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
