"""Pydantic Schemas — record shapes, request validation and the snapshot document.

Invariants:
    - Schemas validate at system boundary (request bodies, snapshot file)
    - Stored records are frozen models; the stored shape is the wire shape

Design Decisions:
    - Snapshot schema lives beside the records it nests (one source of field rules)
"""
