"""Core Layer — pure domain logic: types, option rules, the article tree codec.

Invariants:
    - No module in core/ imports from services/, models/, infrastructure/, or db/
    - No IO; the current time is a parameter wherever it matters

Design Decisions:
    - Functional core separated from imperative shell (services/ do the IO around it)
"""
