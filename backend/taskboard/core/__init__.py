"""Core Layer — pure domain logic, no IO, no async, no network.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - Functions are deterministic given their inputs (the store clock is injected)

Design Decisions:
    - Functional core separated from the async shell: the record store is
      synchronous so a mutation always runs to completion before any await
"""
