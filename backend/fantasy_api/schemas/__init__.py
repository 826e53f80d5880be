"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate structure at the system boundary (lengths, ranges, types)
    - Domain enums from core/ used for enum fields

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
