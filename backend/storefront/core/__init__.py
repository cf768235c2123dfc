"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Validation and totals are pure functions over already-fetched data

Design Decisions:
    - Functional core separated from imperative shell: services/ fetches, core/ decides,
      services/ writes
"""
