"""Core Layer — pure decision logic, no IO, no async, no logging.

Invariants:
    - No module in core/ imports from services/, schemas/, or infrastructure/
    - All rule functions are pure and deterministic
"""
