"""Services Layer — one service class per resource, each bound to an AsyncSession.

Invariants:
    - Every write stages its audit row before the caller's commit
    - Services raise typed errors from core/errors.py, never HTTPException

Design Decisions:
    - Pure validation lives in core/; services load state, call validators, persist
"""
