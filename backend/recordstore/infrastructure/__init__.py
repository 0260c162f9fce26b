"""Infrastructure Layer — the locked record store, snapshot file and logging setup.

Invariants:
    - Only infrastructure touches the filesystem
    - Persistence faults are recovered here and never reach a client

Design Decisions:
    - Store owns its snapshot file; routes only ever see the store
"""
