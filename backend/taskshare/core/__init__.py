"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (token issue reads the clock
      only when no explicit `now` is passed)

Design Decisions:
    - Functional core separated from imperative shell: services orchestrate
      the async store calls around these checks
"""
