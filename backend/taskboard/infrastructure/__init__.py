"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure never imports services/ or api/
    - Every external call maps its failures onto core/errors.py types

Design Decisions:
    - Thin wrappers over raw clients (httpx) so services stay transport-agnostic
"""
