"""Pydantic Schemas — request/response validation for the operations endpoint.

Invariants:
    - Schemas validate at system boundary (operation arguments, API responses)
    - Wire names are camelCase; Python attributes are snake_case

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
