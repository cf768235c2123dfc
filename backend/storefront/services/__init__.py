"""Service Layer — imperative shell around the pure core.

Invariants:
    - Services fetch through the OrderStore protocol, decide with core/, then write
    - Services own commit/rollback for multi-row writes
"""
