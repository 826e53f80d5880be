"""Database Layer — declarative Base, standalone session factory, reference data seeding.

Invariants:
    - All sessions are async (AsyncSession)

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for tests
"""
