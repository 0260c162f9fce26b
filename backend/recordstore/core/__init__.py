"""Core Layer — tables, credentials, errors and domain types. No IO, no async.

Invariants:
    - No module in core/ imports from api/ or infrastructure/
    - Tables are plain data structures; locking belongs to the store

Design Decisions:
    - Functional core separated from the imperative shell (store, snapshot file, routes)
"""
