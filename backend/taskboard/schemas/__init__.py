"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (HTTP request bodies, responses)
    - Wire keys are camelCase (projectId, createdAt, updatedAt, completionRate)

Design Decisions:
    - Separate from core dataclasses: schemas are API contracts, records are domain state
"""
