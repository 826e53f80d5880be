"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return the ApiResponse envelope or the error envelope

Design Decisions:
    - Thin routes: parse request, call one service method, wrap the result
"""
