"""Infrastructure Layer — database, logging, security primitives and email delivery.

Invariants:
    - Infrastructure never imports from core/ domain rules (errors excepted)
    - External failures mapped to typed errors or logged, never leaked raw

Design Decisions:
    - Thin wrappers over raw clients (SQLAlchemy engine, bcrypt, smtplib)
"""
