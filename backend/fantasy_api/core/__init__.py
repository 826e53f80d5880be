"""Core Layer — pure domain rules, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Validators return message lists; raising is the shell's job

Design Decisions:
    - Functional core separated from imperative shell
"""
