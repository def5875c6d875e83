"""Database Infrastructure — SQLAlchemy declarative Base.

Invariants:
    - Single async engine per process (initialized via init_store)
    - All sessions are async (AsyncSession)
"""
